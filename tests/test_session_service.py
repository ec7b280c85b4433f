from conftest import FakeApi
from recrut_core.errors import ApiError
from recrut_core.services.session_service import SessionService


def test_logout_clears_token_even_on_failure():
    api = FakeApi({("POST", "/auth/logout"): ApiError("expired", status_code=401)})
    cleared = []
    SessionService(api).logout(clear_token=lambda: cleared.append(True))
    assert cleared == [True]
    assert api.calls_to("POST", "/auth/logout")


def test_unread_notifications_tolerates_bad_payload():
    api = FakeApi({("GET", "/notifications/count"): {"count": "n/a"}})
    assert SessionService(api).unread_notifications(1) == 0
    api.routes[("GET", "/notifications/count")] = None
    assert SessionService(api).unread_notifications(1) == 0


def test_unread_notifications_ignores_non_object_body():
    api = FakeApi({("GET", "/notifications/count"): 3})
    assert SessionService(api).unread_notifications(1) == 0
    api.routes[("GET", "/notifications/count")] = [{"count": 2}]
    assert SessionService(api).unread_notifications(1) == 0
