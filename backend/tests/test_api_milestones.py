import pytest

from mission_control.client import NotFoundError, RemoteError


@pytest.fixture
def mission(owner):
    return owner.insert_mission("Launch", "2025-01-01", "2025-12-31")


def test_create_list_and_toggle(owner, mission):
    later = owner.insert_milestone(mission.id, "Launch day", "2025-12-01", "high", notes="  ")
    sooner = owner.insert_milestone(mission.id, "Beta", "2025-03-01")
    assert sooner.priority == "medium"
    assert sooner.status == "active"
    assert later.notes is None

    assert [m.id for m in owner.milestones_by_mission(mission.id)] == [sooner.id, later.id]

    updated = owner.update_milestone_status(mission.id, sooner.id, "completed")
    assert updated.status == "completed"


def test_invalid_priority_is_rejected(owner, mission):
    with pytest.raises(RemoteError) as exc:
        owner.insert_milestone(mission.id, "Beta", "2025-03-01", "urgent")
    assert exc.value.status_code == 422


def test_locked_mission_refuses_new_milestones_and_toggles(owner, mission):
    ms = owner.insert_milestone(mission.id, "Beta", "2025-03-01")
    owner.update_mission_status(mission.id, "completed")

    with pytest.raises(RemoteError) as exc:
        owner.insert_milestone(mission.id, "Late", "2025-04-01")
    assert exc.value.status_code == 409
    with pytest.raises(RemoteError):
        owner.update_milestone_status(mission.id, ms.id, "completed")
    with pytest.raises(RemoteError):
        owner.insert_log(ms.id, "too late")

    # deletion still allowed
    owner.delete_milestone(mission.id, ms.id)
    assert owner.milestones_by_mission(mission.id) == []


def test_delete_is_scoped_by_mission(owner, mission):
    other = owner.insert_mission("Other", "2025-01-01", "2025-12-31")
    ms = owner.insert_milestone(mission.id, "Beta", "2025-03-01")

    with pytest.raises(NotFoundError):
        owner.delete_milestone(other.id, ms.id)
    assert len(owner.milestones_by_mission(mission.id)) == 1


def test_watcher_reads_but_cannot_write(owner, watcher, mission):
    ms = owner.insert_milestone(mission.id, "Beta", "2025-03-01")
    owner.insert_log(ms.id, "first note")
    owner.insert_watcher(mission.id, watcher.get_user().id)

    assert [m.id for m in watcher.milestones_by_mission(mission.id)] == [ms.id]
    assert [entry.content for entry in watcher.logs_for_milestones([ms.id])] == ["first note"]

    for call in (
        lambda: watcher.insert_milestone(mission.id, "Nope", "2025-03-01"),
        lambda: watcher.update_milestone_status(mission.id, ms.id, "completed"),
        lambda: watcher.delete_milestone(mission.id, ms.id),
        lambda: watcher.insert_log(ms.id, "nope"),
    ):
        with pytest.raises(RemoteError) as exc:
            call()
        assert exc.value.status_code == 403


def test_logs_newest_first_and_hidden_from_strangers(owner, make_user, mission):
    ms = owner.insert_milestone(mission.id, "Beta", "2025-03-01")
    owner.insert_log(ms.id, "one")
    owner.insert_log(ms.id, "two")

    assert [entry.content for entry in owner.logs_for_milestones([ms.id])] == ["two", "one"]

    stranger = make_user("stranger@mail.com", "S")
    assert stranger.logs_for_milestones([ms.id]) == []
    assert stranger.milestones_for_missions([mission.id]) == []


def test_blank_log_is_rejected(owner, mission):
    ms = owner.insert_milestone(mission.id, "Beta", "2025-03-01")
    with pytest.raises(RemoteError) as exc:
        owner.insert_log(ms.id, "   ")
    assert exc.value.status_code == 422


def test_overlong_milestone_name_is_rejected(owner, mission):
    with pytest.raises(RemoteError) as exc:
        owner.insert_milestone(mission.id, "m" * 201, "2025-03-01")
    assert exc.value.status_code == 422
    assert owner.milestones_by_mission(mission.id) == []
