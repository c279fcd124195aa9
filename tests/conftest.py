import pytest

from user_portal import create_app
from user_portal.errors import NetworkError, NotFoundError
from user_portal.models import UserRecord


class FakeUserApi:
    """Stands in for UserApiClient; records calls and fails on request."""

    def __init__(self, users=None, create_success=True):
        self.users = [UserRecord(**u) for u in (users or [])]
        self.create_success = create_success
        self.failing = set()
        self.calls = []
        self.closed = False

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failing:
            raise NetworkError("HTTP error! status: 500", status_code=500)

    def create(self, form):
        self._call("create", form)
        return {"success": self.create_success}

    def list(self):
        self._call("list")
        return list(self.users)

    def list_all(self):
        self._call("list_all")
        return list(self.users)

    def get_by_id(self, user_id):
        self._call("get_by_id", user_id)
        for user in self.users:
            if user.id == user_id:
                return user
        raise NotFoundError(user_id)

    def update(self, user_id, form):
        self._call("update", user_id, form)

    def delete_by_id(self, user_id):
        self._call("delete_by_id", user_id)
        self.users = [u for u in self.users if u.id != user_id]

    def close(self):
        self.closed = True

    def called(self, name):
        return [c for c in self.calls if c[0] == name]


ALICE = {"id": 1, "name": "Alice", "tel": "555-0101", "address": "1 Main St", "intro": "Hi, I'm Alice."}
BOB = {"id": 2, "name": "Bob", "tel": "555-0102", "address": "2 Side St", "intro": "Bob here."}


@pytest.fixture
def fake_api():
    return FakeUserApi([ALICE, BOB])


@pytest.fixture
def app(fake_api):
    app = create_app("config.TestingConfig")
    app.config["API_CLIENT_FACTORY"] = lambda: fake_api
    return app


@pytest.fixture
def client(app):
    return app.test_client()
