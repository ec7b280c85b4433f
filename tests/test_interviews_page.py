from datetime import datetime

from conftest import FakeApi
from recrut_core.errors import ApiError
from recrut_core.services.interview_service import InterviewService
from recrut_core.views.interviews import MyInterviewsPage


ROWS = [
    {"id": 1, "title": "RH", "date": "2025-06-01", "startTime": "10:00", "duration": 30, "status": "planned"},
    {"id": 2, "title": "Technique", "date": "2025-06-20", "startTime": "09:00", "duration": 60, "status": "confirmed"},
    {"id": 3, "title": "Final", "date": "2025-06-25", "startTime": "09:00", "duration": 90, "status": "cancelled"},
]


def test_split_upcoming_and_past(notifier):
    api = FakeApi({("GET", "/interviews/me/interviews"): ROWS})
    page = MyInterviewsPage(InterviewService(api), notifier, organization_id=None)
    page.load()
    assert api.calls[0][2] == {"organizationId": None}
    upcoming, past = page.split(datetime(2025, 6, 10))
    assert [i.id for i in upcoming] == [2]
    assert sorted(i.id for i in past) == [1, 3]


def test_scoped_when_org_known(notifier):
    api = FakeApi({("GET", "/interviews/me/interviews"): []})
    MyInterviewsPage(InterviewService(api), notifier, organization_id=8).load()
    assert api.calls[0][2] == {"organizationId": 8}


def test_failure_empty_with_toast(notifier):
    api = FakeApi({("GET", "/interviews/me/interviews"): ApiError("x")})
    page = MyInterviewsPage(InterviewService(api), notifier)
    page.load()
    assert page.interviews == []
    assert notifier.of("error") == ["Erreur lors du chargement de vos entretiens"]


def test_non_candidate_skips_fetch(notifier):
    api = FakeApi()
    page = MyInterviewsPage(InterviewService(api), notifier, is_candidate=False)
    page.load()
    assert api.calls == []
    assert not page.is_loading


def test_unparsable_start_time_is_a_fetch_failure(notifier):
    bad = dict(ROWS[0], startTime="10h00")
    api = FakeApi({("GET", "/interviews/me/interviews"): [bad, ROWS[1]]})
    page = MyInterviewsPage(InterviewService(api), notifier)
    page.load()
    assert page.interviews == []
    assert page.split(datetime(2025, 6, 10)) == ([], [])
    assert notifier.of("error") == ["Erreur lors du chargement de vos entretiens"]
