from datetime import date

import pytest
from fastapi.testclient import TestClient

from mission_control.client import MissionControlClient
from mission_control.config import Settings
from mission_control.main import build_app

TODAY = date(2025, 1, 1)
PASSWORD = "hunter22"


@pytest.fixture
def app():
    return build_app(Settings(database_url="sqlite://", create_tables=True))


@pytest.fixture
def http(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(http):
    """Sign up a user and return a client holding their session."""
    clients = []

    def _make(email: str, name: str = "User") -> MissionControlClient:
        client = MissionControlClient("http://testserver", http=http)
        client.sign_up(email, PASSWORD, name)
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def owner(make_user):
    return make_user("owner@mail.com", "Olivia Owner")


@pytest.fixture
def watcher(make_user):
    return make_user("watcher@mail.com", "Walt Watcher")


@pytest.fixture
def today():
    return lambda: TODAY
