from datetime import date

import pytest

from mission_control.client import NotFoundError, RemoteError


def _mission(client, name="Launch", start="2024-12-01", end="2025-06-30"):
    return client.insert_mission(name, start, end, "ship it")


def test_create_and_list_newest_first(owner):
    first = _mission(owner, "First")
    second = _mission(owner, "Second")
    assert first.status == "active"
    assert first.description == "ship it"
    assert [m.id for m in owner.missions_by_owner()] == [second.id, first.id]


def test_end_before_start_is_rejected(owner):
    with pytest.raises(RemoteError) as exc:
        owner.insert_mission("Backwards", "2025-02-01", "2025-01-01")
    assert exc.value.status_code == 400


def test_blank_name_is_rejected(owner):
    with pytest.raises(RemoteError) as exc:
        owner.insert_mission("   ", "2025-01-01", "2025-01-02")
    assert exc.value.status_code == 422


def test_expiry_pass_marks_overdue_active_missions(owner):
    old = _mission(owner, "Old", "2019-12-01", "2020-01-01")
    current = _mission(owner, "Current", "2024-12-01", "2025-01-01")
    done = _mission(owner, "Done", "2019-12-01", "2020-01-01")
    owner.update_mission_status(done.id, "completed")

    assert owner.expire_missions(date(2025, 1, 1)) == 1

    by_id = {m.id: m for m in owner.missions_by_owner()}
    assert by_id[old.id].status == "expired"
    # end_date == today is not overdue
    assert by_id[current.id].status == "active"
    assert by_id[done.id].status == "completed"


def test_expiry_pass_is_idempotent(owner):
    _mission(owner, "Old", "2019-12-01", "2020-01-01")
    owner.expire_missions("2025-01-01")
    after_once = [(m.id, m.status) for m in owner.missions_by_owner()]
    assert owner.expire_missions("2025-01-01") == 0
    assert [(m.id, m.status) for m in owner.missions_by_owner()] == after_once


def test_expiry_pass_only_touches_own_missions(owner, watcher):
    theirs = _mission(owner, "Old", "2019-12-01", "2020-01-01")
    assert watcher.expire_missions("2025-01-01") == 0
    assert owner.mission(theirs.id).status == "active"


def test_locked_mission_cannot_change_status(owner):
    m = _mission(owner)
    owner.update_mission_status(m.id, "completed")
    # same status again is a no-op
    assert owner.update_mission_status(m.id, "completed").status == "completed"

    old = _mission(owner, "Old", "2019-12-01", "2020-01-01")
    owner.expire_missions("2025-01-01")
    with pytest.raises(RemoteError) as exc:
        owner.update_mission_status(old.id, "completed")
    assert exc.value.status_code == 409


@pytest.mark.parametrize("status", ["expired", "active"])
def test_owner_can_only_mark_completed(owner, status):
    m = _mission(owner)
    with pytest.raises(RemoteError) as exc:
        owner.update_mission_status(m.id, status)
    assert exc.value.status_code == 422
    assert owner.mission(m.id).status == "active"


def test_overlong_name_is_rejected(owner):
    with pytest.raises(RemoteError) as exc:
        owner.insert_mission("x" * 201, "2025-01-01", "2025-01-02")
    assert exc.value.status_code == 422
    assert owner.insert_mission("x" * 200, "2025-01-01", "2025-01-02").name == "x" * 200


def test_missions_are_private_until_watched(owner, watcher):
    m = _mission(owner)
    with pytest.raises(NotFoundError):
        watcher.mission(m.id)

    owner.insert_watcher(m.id, watcher.get_user().id)
    assert watcher.mission(m.id).id == m.id
    assert [x.id for x in watcher.missions_watching()] == [m.id]
    assert watcher.missions_by_owner() == []

    with pytest.raises(RemoteError) as exc:
        watcher.update_mission_status(m.id, "completed")
    assert exc.value.status_code == 403
    with pytest.raises(RemoteError):
        watcher.delete_mission(m.id)


def test_delete_cascades_to_milestones_logs_and_watchers(owner, watcher, app):
    from mission_control.models import Log, Milestone, Watcher

    m = _mission(owner)
    ms = owner.insert_milestone(m.id, "Beta", "2025-03-01", "high")
    owner.insert_log(ms.id, "recruited 3 testers")
    owner.insert_watcher(m.id, watcher.get_user().id)

    owner.delete_mission(m.id)

    with pytest.raises(NotFoundError):
        owner.mission(m.id)
    with app.state.database.session() as s:
        assert s.query(Milestone).count() == 0
        assert s.query(Log).count() == 0
        assert s.query(Watcher).count() == 0
