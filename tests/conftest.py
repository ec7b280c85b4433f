import pytest


class FakeApi:
    """Transport en mémoire: routes {(METHOD, path): valeur | Exception | callable}."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _call(self, method, path, params=None, json=None):
        self.calls.append((method, path, params, json))
        value = self.routes.get((method, path))
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value()
        return value

    def get(self, path, params=None):
        return self._call("GET", path, params)

    def get_bytes(self, path, params=None):
        return self._call("GET", path, params)

    def post(self, path, json=None, params=None):
        return self._call("POST", path, params, json)

    def patch(self, path, json=None, params=None):
        return self._call("PATCH", path, params, json)

    def delete(self, path, params=None):
        return self._call("DELETE", path, params)

    def calls_to(self, method, path):
        return [c for c in self.calls if c[0] == method and c[1] == path]


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(("success", message))

    def error(self, message):
        self.messages.append(("error", message))

    def info(self, message):
        self.messages.append(("info", message))

    def of(self, kind):
        return [m for k, m in self.messages if k == kind]


def make_candidate(cid, state="nouveau", first="Jean", last="Dupont", email=None, **extra):
    row = {
        "id": cid,
        "firstName": first,
        "lastName": last,
        "email": email or f"{first.lower()}.{last.lower()}{cid}@example.com",
        "phone": "",
        "state": state,
        "createdAt": f"2025-03-{cid:02d}T09:00:00Z",
        "organizationId": 7,
    }
    row.update(extra)
    return row


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def api():
    return FakeApi()
