import time
from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from todokit.enums import DueFilter, Priority, Recurrence, StatusFilter
from todokit.task import DependencyCycleError, Task, count_by_project, detect_cycle


def make_task(text):
    return Task.create(text, Priority.MEDIUM, [], None, None, None)


def make_recurring(recurrence, due):
    return Task.create("Test", Priority.MEDIUM, [], None, due, recurrence)


def today():
    return datetime.now().date()


def test_create_sets_defaults():
    task = Task.create("Buy milk", Priority.MEDIUM, [], None, None, None)
    assert task.text == "Buy milk"
    assert task.completed is False
    assert task.uuid.version == 4
    assert task.created_at == today()
    assert task.depends_on == []
    assert task.parent_id is None


def test_create_with_all_fields():
    due = date(2030, 6, 1)
    task = Task.create("Weekly review", Priority.HIGH, ["work"], "Backend", due, Recurrence.WEEKLY)
    assert task.priority is Priority.HIGH
    assert task.recurrence is Recurrence.WEEKLY
    assert task.tags == ["work"]
    assert task.project == "Backend"


def test_is_blocked_no_deps():
    assert make_task("A").is_blocked([]) is False


def test_is_blocked_pending_dep():
    dep = make_task("Dep")
    task = make_task("Task")
    task.depends_on = [dep.uuid]
    assert task.is_blocked([dep]) is True


def test_is_blocked_completed_dep():
    dep = make_task("Dep")
    dep.completed = True
    task = make_task("Task")
    task.depends_on = [dep.uuid]
    assert task.is_blocked([dep]) is False


def test_is_blocked_missing_dep_is_not_blocking():
    task = make_task("Task")
    task.depends_on = [uuid4()]
    assert task.is_blocked([]) is False


def test_detect_cycle_direct():
    tasks = [make_task("A"), make_task("B")]
    tasks[0].depends_on = [tasks[1].uuid]
    with pytest.raises(DependencyCycleError) as info:
        detect_cycle(tasks, tasks[1].uuid, tasks[0].uuid)
    assert str(info.value) == (
        "Adding this dependency would create a cycle: task #2 → task #1 → ... → task #2"
    )


def test_detect_no_cycle():
    tasks = [make_task("A"), make_task("B"), make_task("C")]
    assert detect_cycle(tasks, tasks[2].uuid, tasks[0].uuid) is None


def test_detect_transitive_cycle():
    tasks = [make_task("A"), make_task("B"), make_task("C")]
    tasks[0].depends_on = [tasks[1].uuid]
    tasks[1].depends_on = [tasks[2].uuid]
    with pytest.raises(DependencyCycleError, match="cycle"):
        detect_cycle(tasks, tasks[2].uuid, tasks[0].uuid)


def test_blocking_deps_returns_pending_only():
    dep1 = make_task("Dep1")
    dep1.completed = True
    dep2 = make_task("Dep2")
    task = make_task("Task")
    task.depends_on = [dep1.uuid, dep2.uuid]
    assert task.blocking_deps([dep1, dep2]) == [dep2.uuid]


def test_updated_at_set_on_new():
    task = make_task("A")
    assert task.updated_at.tzinfo is not None
    assert abs(datetime.now(timezone.utc) - task.updated_at) < timedelta(seconds=5)


def test_touch_updates_timestamp():
    task = make_task("A")
    before = task.updated_at
    time.sleep(0.02)
    task.touch()
    assert task.updated_at > before


def test_mark_done_updates_timestamp():
    task = make_task("A")
    before = task.updated_at
    time.sleep(0.02)
    task.mark_done()
    assert task.updated_at > before
    assert task.completed is True
    assert task.completed_at == today()


def test_mark_undone_updates_timestamp():
    task = make_task("A")
    task.mark_done()
    before = task.updated_at
    time.sleep(0.02)
    task.mark_undone()
    assert task.updated_at > before
    assert task.completed is False
    assert task.completed_at is None


def test_daily_recurrence():
    task = make_recurring(Recurrence.DAILY, date(2026, 2, 10))
    nxt = task.create_next_recurrence(task.uuid)
    assert nxt.due_date == date(2026, 2, 11)
    assert nxt.parent_id == task.uuid
    assert nxt.uuid != task.uuid and nxt.completed is False


def test_weekly_recurrence():
    task = make_recurring(Recurrence.WEEKLY, date(2026, 2, 10))
    assert task.create_next_recurrence(task.uuid).due_date == date(2026, 2, 17)


def test_weekly_recurrence_doc_example():
    task = make_recurring(Recurrence.WEEKLY, date(2025, 2, 10))
    nxt = task.create_next_recurrence(task.uuid)
    assert nxt.due_date == date(2025, 2, 17)
    assert nxt.parent_id == task.uuid
    assert nxt.updated_at.tzinfo is not None


def test_monthly_recurrence():
    task = make_recurring(Recurrence.MONTHLY, date(2026, 2, 10))
    assert task.create_next_recurrence(task.uuid).due_date == date(2026, 3, 10)


def test_monthly_boundary_case():
    task = make_recurring(Recurrence.MONTHLY, date(2026, 1, 31))
    assert task.create_next_recurrence(task.uuid).due_date == date(2026, 2, 28)


def test_no_recurrence_returns_none():
    task = make_recurring(None, date(2026, 2, 10))
    assert task.create_next_recurrence(task.uuid) is None


def test_no_due_date_returns_none():
    task = make_recurring(Recurrence.DAILY, None)
    assert task.create_next_recurrence(task.uuid) is None


def test_project_preserved_in_recurrence():
    task = make_recurring(Recurrence.DAILY, date(2026, 2, 10))
    task.project = "work"
    assert task.create_next_recurrence(task.uuid).project == "work"


def test_deps_not_propagated_to_recurrence():
    task = make_recurring(Recurrence.DAILY, date(2026, 2, 10))
    task.depends_on = [uuid4(), uuid4()]
    assert task.create_next_recurrence(task.uuid).depends_on == []


def test_is_recurring():
    assert make_recurring(Recurrence.DAILY, date(2026, 2, 10)).is_recurring() is True
    assert make_task("A").is_recurring() is False


def test_count_by_project_basic():
    t1 = Task.create("A", Priority.MEDIUM, [], "Work", None, None)
    t2 = Task.create("B", Priority.MEDIUM, [], "Work", None, None)
    t3 = Task.create("C", Priority.MEDIUM, [], "Personal", None, None)
    t1.completed = True
    assert count_by_project([t1, t2, t3], "work") == (2, 1)


def test_count_by_project_doc_example():
    tasks = [
        Task.create("A", Priority.MEDIUM, [], "Work", None, None),
        Task.create("B", Priority.MEDIUM, [], "Work", None, None),
    ]
    assert count_by_project(tasks, "work") == (2, 0)


def test_count_by_project_case_insensitive():
    tasks = [Task.create("A", Priority.MEDIUM, [], "Backend", None, None)]
    assert count_by_project(tasks, "backend")[0] == 1
    assert count_by_project(tasks, "BACKEND")[0] == 1
    assert count_by_project(tasks, "Backend")[0] == 1


def test_is_overdue():
    past = Task.create("A", due_date=today() - timedelta(days=1))
    assert past.is_overdue() is True
    past.completed = True
    assert past.is_overdue() is False
    assert Task.create("B", due_date=today()).is_overdue() is False
    assert make_task("C").is_overdue() is False


def test_is_due_soon():
    assert Task.create("A", due_date=today() + timedelta(days=7)).is_due_soon(7) is True
    assert Task.create("B", due_date=today() + timedelta(days=8)).is_due_soon(7) is False
    assert Task.create("C", due_date=today() - timedelta(days=1)).is_due_soon(7) is False
    assert make_task("D").is_due_soon(7) is False


def test_matches_status():
    task = make_task("A")
    assert task.matches_status(StatusFilter.PENDING) is True
    assert task.matches_status(StatusFilter.DONE) is False
    assert task.matches_status(StatusFilter.ALL) is True
    task.mark_done()
    assert task.matches_status(StatusFilter.PENDING) is False
    assert task.matches_status(StatusFilter.DONE) is True


def test_matches_due_filter():
    overdue = Task.create("A", due_date=today() - timedelta(days=2))
    soon = Task.create("B", due_date=today() + timedelta(days=3))
    none = make_task("C")
    assert overdue.matches_due_filter(DueFilter.OVERDUE) is True
    assert soon.matches_due_filter(DueFilter.OVERDUE) is False
    assert soon.matches_due_filter(DueFilter.SOON) is True
    assert overdue.matches_due_filter(DueFilter.SOON) is False
    assert soon.matches_due_filter(DueFilter.WITH_DUE) is True
    assert none.matches_due_filter(DueFilter.WITH_DUE) is False
    assert none.matches_due_filter(DueFilter.NO_DUE) is True
    assert soon.matches_due_filter(DueFilter.NO_DUE) is False


def test_dict_round_trip():
    task = Task.create("Review", Priority.HIGH, ["work"], "Backend", date(2030, 1, 2), Recurrence.MONTHLY)
    task.depends_on = [uuid4()]
    task.parent_id = uuid4()
    task.mark_done()
    assert Task.from_dict(task.to_dict()) == task


def test_to_dict_format():
    task = Task.create("A", Priority.LOW, [], None, date(2030, 1, 2), Recurrence.DAILY)
    data = task.to_dict()
    assert data["priority"] == "low"
    assert data["recurrence"] == "daily"
    assert data["due_date"] == "2030-01-02"
    assert data["updated_at"].endswith("Z")


def test_from_dict_old_format_without_uuid():
    data = {
        "text": "Old task",
        "completed": False,
        "priority": "medium",
        "tags": [],
        "created_at": "2025-01-01",
        "depends_on": [],
    }
    task = Task.from_dict(data)
    assert task.uuid == UUID(int=0)
    assert task.text == "Old task"
    assert task.created_at == date(2025, 1, 1)
    assert task.updated_at is None
    assert task.project is None


def test_from_dict_nanosecond_timestamp():
    data = {
        "text": "A",
        "completed": False,
        "priority": "high",
        "tags": [],
        "created_at": "2025-01-01",
        "updated_at": "2025-01-01T12:30:00.123456789Z",
    }
    task = Task.from_dict(data)
    assert task.updated_at == datetime(2025, 1, 1, 12, 30, 0, 123456, tzinfo=timezone.utc)


def test_from_dict_missing_field_raises():
    with pytest.raises(ValueError, match="text"):
        Task.from_dict({"completed": False, "priority": "low", "tags": [], "created_at": "2025-01-01"})


def test_from_dict_bad_priority_raises():
    with pytest.raises(ValueError):
        Task.from_dict(
            {"text": "A", "completed": False, "priority": "urgent", "tags": [], "created_at": "2025-01-01"}
        )