import pytest

from mission_control.client import NotFoundError, RemoteError


@pytest.fixture
def mission(owner):
    return owner.insert_mission("Marathon", "2025-01-01", "2025-10-01")


def test_duplicate_watcher_is_a_conflict(owner, watcher, mission):
    wid = watcher.get_user().id
    owner.insert_watcher(mission.id, wid)

    with pytest.raises(RemoteError) as exc:
        owner.insert_watcher(mission.id, wid)
    assert exc.value.status_code == 409
    assert len(owner.watchers_by_mission(mission.id)) == 1


def test_owner_cannot_watch_own_mission(owner, mission):
    with pytest.raises(RemoteError) as exc:
        owner.insert_watcher(mission.id, owner.get_user().id)
    assert exc.value.status_code == 400


def test_only_owner_adds_watchers(owner, watcher, make_user, mission):
    third = make_user("third@mail.com", "Third")
    owner.insert_watcher(mission.id, watcher.get_user().id)
    with pytest.raises(RemoteError) as exc:
        watcher.insert_watcher(mission.id, third.get_user().id)
    assert exc.value.status_code == 403


def test_watcher_sees_only_own_row(owner, watcher, make_user, mission):
    third = make_user("third@mail.com", "Third")
    wid = watcher.get_user().id
    owner.insert_watcher(mission.id, wid)
    owner.insert_watcher(mission.id, third.get_user().id)

    assert len(owner.watchers_by_mission(mission.id)) == 2
    assert [w.watcher_id for w in watcher.watchers_by_mission(mission.id)] == [wid]
    assert watcher.watcher(mission.id, wid) is not None
    assert watcher.watcher(mission.id, third.get_user().id) is None


def test_watchers_for_mission_set(owner, watcher, mission):
    other = owner.insert_mission("Other", "2025-01-01", "2025-02-01")
    owner.insert_watcher(mission.id, watcher.get_user().id)
    rows = owner.watchers_for_missions([mission.id, other.id])
    assert [(w.mission_id, w.watcher_id) for w in rows] == [(mission.id, watcher.get_user().id)]


def test_stop_watching(owner, watcher, mission):
    wid = watcher.get_user().id
    owner.insert_watcher(mission.id, wid)

    watcher.delete_watcher(mission.id, wid)

    assert owner.watchers_by_mission(mission.id) == []
    with pytest.raises(NotFoundError):
        watcher.mission(mission.id)


def test_watcher_cannot_remove_others(owner, watcher, make_user, mission):
    third = make_user("third@mail.com", "Third")
    owner.insert_watcher(mission.id, watcher.get_user().id)
    owner.insert_watcher(mission.id, third.get_user().id)
    with pytest.raises(RemoteError) as exc:
        watcher.delete_watcher(mission.id, third.get_user().id)
    assert exc.value.status_code == 403
