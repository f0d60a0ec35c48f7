import pytest

from mission_control.client import AuthError, MissionControlClient, NotFoundError, RemoteError
from mission_control.config import Settings


def test_requests_without_session_raise_auth_error(http):
    client = MissionControlClient("http://testserver", http=http)
    with pytest.raises(AuthError):
        client.get_user()
    with pytest.raises(AuthError) as exc:
        client.missions_by_owner()
    assert exc.value.status_code == 401
    assert exc.value.message == "Not logged in"


def test_not_found_maps_to_not_found_error(owner):
    with pytest.raises(NotFoundError):
        owner.mission("does-not-exist")
    assert owner.profile_by_email("ghost@mail.com") is None


def test_validation_errors_carry_a_message(owner):
    with pytest.raises(RemoteError) as exc:
        owner.insert_mission("Launch", "not-a-date", "2025-01-01")
    assert exc.value.status_code == 422
    assert exc.value.message


def test_empty_id_lists_skip_the_request(owner, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(owner.http, "request", fail)
    assert owner.milestones_for_missions([]) == []
    assert owner.logs_for_milestones([]) == []
    assert owner.profiles_by_ids([]) == []
    assert owner.watchers_for_missions([]) == []


def test_sign_out_forgets_token(owner):
    owner.sign_out()
    assert owner.access_token is None
    with pytest.raises(AuthError):
        owner.get_session()


def test_closed_client_refuses_calls(http):
    with MissionControlClient("http://testserver", http=http) as client:
        client.sign_up("ann@mail.com", "hunter22", "Ann")
    assert client.closed
    with pytest.raises(RemoteError) as exc:
        client.missions_by_owner()
    assert exc.value.status_code == 0


def test_client_from_settings(monkeypatch):
    monkeypatch.setenv("MISSION_CONTROL_API_URL", "http://api.local:9000/")
    with MissionControlClient.from_settings(Settings.from_env()) as client:
        assert client.base_url == "http://api.local:9000"
