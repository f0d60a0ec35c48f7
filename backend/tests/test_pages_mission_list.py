from datetime import date

from mission_control.client import MissionControlClient, RemoteError
from mission_control.pages import MissionListPage

from conftest import TODAY


def test_logged_out_viewer_gets_an_error(http, today):
    page = MissionListPage(MissionControlClient("http://testserver", http=http), today=today)
    page.load()
    assert page.error == "You must be logged in to see your missions."
    assert page.view().mine.active == []


def test_overdue_mission_is_shown_unsatisfied_after_load(owner, today):
    overdue = owner.insert_mission("Old", "2019-12-01", "2020-01-01")
    owner.insert_mission("Current", "2024-12-01", "2025-02-01")

    page = MissionListPage(owner, today=today)
    page.load()
    view = page.view()

    assert [c.title for c in view.mine.active] == ["Current"]
    assert [c.id for c in view.mine.unsatisfied] == [overdue.id]
    assert view.mine.unsatisfied[0].status_label == "UNSATISFIED"
    assert owner.mission(overdue.id).status == "expired"


def test_cards_carry_counts_dates_and_watchers(owner, watcher, today):
    m = owner.insert_mission("Launch", "2024-12-01", "2025-03-31")
    a = owner.insert_milestone(m.id, "Beta", "2025-02-01")
    owner.insert_milestone(m.id, "GA", "2025-03-01")
    owner.update_milestone_status(m.id, a.id, "completed")
    owner.insert_watcher(m.id, watcher.get_user().id)

    page = MissionListPage(owner, today=today)
    page.load()
    card = page.view().mine.active[0]

    assert card.date_range_text == "01/12/2024 - 31/03/2025"
    assert card.milestones_text == "1 / 2 Milestones"
    assert [(w.name, w.initial) for w in card.watchers] == [("Walt Watcher", "W")]


def test_watching_section(owner, watcher, today):
    m = owner.insert_mission("Marathon", "2024-12-01", "2025-10-01")
    owner.insert_watcher(m.id, watcher.get_user().id)

    page = MissionListPage(watcher, today=today)
    page.load()
    view = page.view()

    assert view.mine.active == []
    assert [c.id for c in view.watching.active] == [m.id]


def test_failed_expiry_pass_still_lists(owner, today, monkeypatch, caplog):
    owner.insert_mission("Old", "2019-12-01", "2020-01-01")

    def boom(_today):
        raise RemoteError(500, "write failed")

    monkeypatch.setattr(owner, "expire_missions", boom)
    page = MissionListPage(owner, today=today)
    page.load()

    assert page.error is None
    # stored status unchanged, so it still shows as active
    assert [c.title for c in page.view().mine.active] == ["Old"]
    assert "expiry pass failed" in caplog.text


def test_expiry_uses_the_injected_date(owner):
    m = owner.insert_mission("Ends today", "2024-12-01", "2025-01-01")
    page = MissionListPage(owner, today=lambda: date(2025, 1, 1))
    page.load()
    assert [c.id for c in page.view().mine.active] == [m.id]

    page = MissionListPage(owner, today=lambda: date(2025, 1, 2))
    page.load()
    assert [c.id for c in page.view().mine.unsatisfied] == [m.id]


def test_create_mission_validation(owner, today):
    page = MissionListPage(owner, today=today)
    page.load()

    assert page.create_mission("", "2025-01-01", "2025-01-02") is None
    assert page.error == "Please fill the required fields."
    assert page.create_mission("X", "2025-02-01", "2025-01-01") is None
    assert page.error == "End date must be after start date."
    assert page.create_mission("X", "2025-02-31", "2025-03-01") is None
    assert page.error == "Please enter valid dates."
    assert owner.missions_by_owner() == []


def test_create_mission_prepends(owner, today):
    page = MissionListPage(owner, today=today)
    page.load()
    first = page.create_mission("First", TODAY, "2025-02-01")
    second = page.create_mission("Second", "2025-01-01", "2025-02-01", description="  ")

    assert second.description is None
    assert [m.id for m in page.missions] == [second.id, first.id]
    assert page.error is None


def test_create_requires_login(http, today):
    page = MissionListPage(MissionControlClient("http://testserver", http=http), today=today)
    assert page.create_mission("X", "2025-01-01", "2025-01-02") is None
    assert page.error == "You must be logged in to create a mission."


def test_closed_page_ignores_late_results(owner, today):
    owner.insert_mission("Launch", "2024-12-01", "2025-03-31")
    page = MissionListPage(owner, today=today)
    page.close()
    page.load()
    assert page.missions == []


def _boom(*args):
    raise RemoteError(500, "read failed")


def test_failed_milestone_counts_degrade_to_zero(owner, watcher, today, monkeypatch):
    m = owner.insert_mission("Launch", "2024-12-01", "2025-03-31")
    owner.insert_milestone(m.id, "Beta", "2025-02-01")
    owner.insert_watcher(m.id, watcher.get_user().id)

    monkeypatch.setattr(owner, "milestones_for_missions", _boom)
    page = MissionListPage(owner, today=today)
    page.load()
    view = page.view()

    assert view.error is None
    card = view.mine.active[0]
    assert card.title == "Launch"
    assert card.milestones_text == "0 / 0 Milestones"
    assert [w.name for w in card.watchers] == ["Walt Watcher"]


def test_failed_profiles_drop_watcher_chips(owner, watcher, today, monkeypatch):
    m = owner.insert_mission("Launch", "2024-12-01", "2025-03-31")
    owner.insert_milestone(m.id, "Beta", "2025-02-01")
    owner.insert_watcher(m.id, watcher.get_user().id)

    monkeypatch.setattr(owner, "profiles_by_ids", _boom)
    page = MissionListPage(owner, today=today)
    page.load()
    view = page.view()

    assert view.error is None
    card = view.mine.active[0]
    assert card.watchers == []
    assert card.milestones_text == "0 / 1 Milestones"


def test_failed_watching_list_degrades_to_empty(owner, watcher, today, monkeypatch):
    m = owner.insert_mission("Marathon", "2024-12-01", "2025-10-01")
    owner.insert_watcher(m.id, watcher.get_user().id)
    watcher.insert_mission("Own", "2024-12-01", "2025-10-01")

    monkeypatch.setattr(watcher, "missions_watching", _boom)
    page = MissionListPage(watcher, today=today)
    page.load()
    view = page.view()

    assert view.error is None
    assert view.watching.active == []
    assert [c.title for c in view.mine.active] == ["Own"]
