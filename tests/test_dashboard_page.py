from datetime import date

from conftest import FakeApi, make_candidate
from recrut_core.errors import ApiError
from recrut_core.services.candidate_service import CandidateService
from recrut_core.services.interview_service import InterviewService
from recrut_core.services.session_service import SessionService
from recrut_core.views.dashboard import DashboardPage


ME = {"id": 1, "name": "Awa", "userOrganizations": [{"organizationId": 5, "role": "rh"}]}


def _page(notifier, routes):
    api = FakeApi(routes)
    page = DashboardPage(SessionService(api), CandidateService(api), InterviewService(api), notifier)
    return api, page


def test_dashboard_stats(notifier):
    api, page = _page(notifier, {
        ("GET", "/users/me"): ME,
        ("GET", "/candidates"): [make_candidate(i, state="nouveau" if i % 2 else "refuse") for i in range(1, 8)],
        ("GET", "/notifications/count"): {"count": 4},
        ("GET", "/interviews"): [
            {"id": 1, "date": "2025-05-20T00:00:00.000Z"},
            {"id": 2, "date": "2025-05-21"},
        ],
        ("GET", "/documents"): [{"id": 1}, {"id": 2}, {"id": 3}],
    })
    page.load(today=date(2025, 5, 20))
    s = page.stats
    assert page.greeting_name == "Awa"
    assert s.candidates_count == 7
    assert s.unread_notifications == 4
    assert s.interviews_today == 1
    assert s.documents_count == 3
    assert [c.id for c in s.recent_candidates] == [7, 6, 5, 4, 3]
    assert s.by_state["Nouveau"] == 4
    assert s.by_state["Refusé"] == 3
    assert api.calls_to("GET", "/documents")[0][2] == {"organizationId": 5}
    assert not page.is_loading


def test_dashboard_without_organization(notifier):
    api, page = _page(notifier, {("GET", "/users/me"): {"id": 1, "userOrganizations": []}})
    page.load()
    assert page.stats.candidates_count == 0
    assert [c[1] for c in api.calls] == ["/users/me"]
    assert page.greeting_name == "Recruteur"
    assert not page.is_loading


def test_dashboard_failure_resets_stats(notifier):
    _, page = _page(notifier, {("GET", "/users/me"): ME, ("GET", "/candidates"): ApiError("x")})
    page.load()
    assert page.stats.candidates_count == 0
    assert notifier.of("error") == ["Erreur lors du chargement du tableau de bord"]
