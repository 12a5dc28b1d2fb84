# tests/test_task_store.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tick_lite.tasks.due_dates import CalendarUnit, add_calendar_step
from tick_lite.tasks.task_models import Priority, Repeat, Task, TaskDraft
from tick_lite.tasks.task_store import TaskStore

from .fakes import FrozenClock, RecordingSaver, sequential_ids


def test_add_trims_and_applies_defaults(store: TaskStore, clock: FrozenClock) -> None:
    task = store.add(TaskDraft(title="  Buy milk  ", notes="  2 litres "))
    assert task is not None
    assert task.id == "t1"
    assert task.title == "Buy milk"
    assert task.notes == "2 litres"
    assert task.priority is Priority.MEDIUM
    assert task.repeat is Repeat.NONE
    assert task.tags == []
    assert task.completed is False
    assert task.completed_at is None
    assert task.created_at == clock.now


def test_add_rejects_blank_title(store: TaskStore, saver: RecordingSaver) -> None:
    assert store.add(TaskDraft(title="   ")) is None
    assert len(store) == 0
    assert saver.submissions == []


def test_new_tasks_are_prepended(store: TaskStore) -> None:
    store.add(TaskDraft(title="first"))
    store.add(TaskDraft(title="second"))
    assert [t.title for t in store.snapshot()] == ["second", "first"]


def test_tags_keep_order_and_duplicates(store: TaskStore) -> None:
    task = store.add(TaskDraft(title="x", tags=["b", "a", "b"]))
    assert task is not None
    assert task.tags == ["b", "a", "b"]


def test_completing_daily_task_spawns_next_occurrence(store: TaskStore, clock: FrozenClock) -> None:
    due = clock.now + timedelta(hours=3)
    original = store.add(TaskDraft(title="Stretch", due=due, repeat=Repeat.DAILY, tags=["health"]))
    assert original is not None

    result = store.toggle_complete(original.id)
    assert result is not None
    assert result.task.completed is True
    assert result.task.completed_at == clock.now
    assert result.spawned is not None

    assert len(store) == 2
    first, second = store.snapshot()
    assert first.id == result.spawned.id
    assert first.id != original.id
    assert first.completed is False
    assert first.completed_at is None
    assert first.due == add_calendar_step(due, CalendarUnit.DAY)
    assert first.tags == ["health"]
    assert second.id == original.id
    assert second.completed is True


def test_pay_rent_example(clock: FrozenClock) -> None:
    due = clock.now + timedelta(hours=24)
    seed = Task(
        id="rent",
        title="Pay rent",
        created_at=clock.now - timedelta(days=3),
        due=due,
        priority=Priority.HIGH,
        repeat=Repeat.MONTHLY,
        tags=["rent", "monthly"],
        notes="Collect cash from tenant",
    )
    store = TaskStore([seed], clock=clock, id_factory=sequential_ids())
    clock.advance(minutes=5)

    result = store.toggle_complete("rent")
    assert result is not None

    rent = store.get("rent")
    assert rent is not None
    assert rent.completed is True
    assert rent.completed_at == clock.now

    spawned = [t for t in store.snapshot() if t.id != "rent"]
    assert len(spawned) == 1
    nxt = spawned[0]
    assert nxt.title == "Pay rent"
    assert nxt.due == add_calendar_step(due, CalendarUnit.MONTH)
    assert nxt.completed is False
    assert nxt.repeat is Repeat.MONTHLY
    assert nxt.priority is Priority.HIGH
    assert nxt.notes == "Collect cash from tenant"
    assert nxt.created_at == clock.now


def test_completing_non_repeating_task_spawns_nothing(store: TaskStore, clock: FrozenClock) -> None:
    task = store.add(TaskDraft(title="One-off", due=clock.now))
    assert task is not None
    result = store.toggle_complete(task.id)
    assert result is not None
    assert result.spawned is None
    assert len(store) == 1


def test_repeating_task_without_due_spawns_nothing(store: TaskStore) -> None:
    task = store.add(TaskDraft(title="Someday weekly", repeat=Repeat.WEEKLY))
    assert task is not None
    result = store.toggle_complete(task.id)
    assert result is not None
    assert result.task.completed is True
    assert result.spawned is None
    assert len(store) == 1


def test_uncompleting_keeps_spawned_sibling(store: TaskStore, clock: FrozenClock) -> None:
    task = store.add(TaskDraft(title="Water plants", due=clock.now, repeat=Repeat.WEEKLY))
    assert task is not None
    store.toggle_complete(task.id)
    assert len(store) == 2

    result = store.toggle_complete(task.id)
    assert result is not None
    assert result.task.completed is False
    assert result.task.completed_at is None
    assert result.spawned is None
    assert len(store) == 2
    assert all(not t.completed for t in store.snapshot())


def test_snooze_shifts_due_by_fixed_days(store: TaskStore, clock: FrozenClock) -> None:
    due = clock.now + timedelta(hours=1)
    task = store.add(TaskDraft(title="Call bank", due=due, repeat=Repeat.MONTHLY))
    assert task is not None

    snoozed = store.snooze(task.id, 3)
    assert snoozed is not None
    assert snoozed.due == due + timedelta(seconds=259200)
    assert snoozed.repeat is Repeat.MONTHLY
    assert snoozed.completed is False
    assert len(store) == 1


def test_snooze_without_due_starts_from_now(store: TaskStore, clock: FrozenClock) -> None:
    task = store.add(TaskDraft(title="Inbox item"))
    assert task is not None
    snoozed = store.snooze(task.id)
    assert snoozed is not None
    assert snoozed.due == clock.now + timedelta(days=1)


def test_edit_merges_only_given_fields(store: TaskStore, clock: FrozenClock) -> None:
    task = store.add(TaskDraft(title="Draft", notes="keep me", tags=["a"]))
    assert task is not None

    edited = store.edit(task.id, title=" Final ", priority="High", due=clock.now)
    assert edited is not None
    assert edited.title == "Final"
    assert edited.priority is Priority.HIGH
    assert edited.due == clock.now
    assert edited.notes == "keep me"
    assert edited.tags == ["a"]
    assert edited.id == task.id
    assert edited.created_at == task.created_at


def test_edit_ignores_blank_title(store: TaskStore) -> None:
    task = store.add(TaskDraft(title="Keep"))
    assert task is not None
    edited = store.edit(task.id, title="  ")
    assert edited is not None
    assert edited.title == "Keep"


def test_edit_completion_keeps_invariant(store: TaskStore, clock: FrozenClock) -> None:
    task = store.add(TaskDraft(title="x", due=clock.now, repeat=Repeat.DAILY))
    assert task is not None

    done = store.edit(task.id, completed=True)
    assert done is not None
    assert done.completed is True
    assert done.completed_at == clock.now
    # Edit is a plain merge: no recurrence sibling.
    assert len(store) == 1

    reopened = store.edit(task.id, completed=False)
    assert reopened is not None
    assert reopened.completed is False
    assert reopened.completed_at is None


def test_edit_cannot_overwrite_id(store: TaskStore) -> None:
    task = store.add(TaskDraft(title="x"))
    assert task is not None
    with pytest.raises(TypeError):
        store.edit(task.id, id="other")  # type: ignore[call-arg]


def test_unknown_ids_are_silent_noops(store: TaskStore, saver: RecordingSaver) -> None:
    assert store.toggle_complete("missing") is None
    assert store.snooze("missing", 2) is None
    assert store.edit("missing", title="x") is None
    assert store.delete("missing") is False
    assert saver.submissions == []


def test_delete_and_clear_all(store: TaskStore) -> None:
    a = store.add(TaskDraft(title="a"))
    store.add(TaskDraft(title="b"))
    assert a is not None

    assert store.delete(a.id) is True
    assert [t.title for t in store.snapshot()] == ["b"]

    store.clear_all()
    assert len(store) == 0


def test_every_mutation_submits_a_newer_snapshot(store: TaskStore, saver: RecordingSaver) -> None:
    task = store.add(TaskDraft(title="x", due=None))
    assert task is not None
    store.snooze(task.id)
    store.toggle_complete(task.id)
    store.delete(task.id)

    revisions = [rev for rev, _ in saver.submissions]
    assert revisions == [1, 2, 3, 4]
    assert store.revision == 4
    assert saver.submissions[-1][1] == []


def test_snapshots_are_copies(store: TaskStore) -> None:
    task = store.add(TaskDraft(title="x", tags=["a"]))
    assert task is not None
    snap = store.snapshot()
    snap[0].tags.append("mutated")
    snap[0].title = "mutated"
    fresh = store.get(task.id)
    assert fresh is not None
    assert fresh.title == "x"
    assert fresh.tags == ["a"]


def test_duplicate_ids_are_dropped_on_load(clock: FrozenClock) -> None:
    a = Task(id="same", title="a", created_at=clock.now)
    b = Task(id="same", title="b", created_at=clock.now)
    store = TaskStore([a, b], clock=clock)
    assert [t.title for t in store.snapshot()] == ["a"]


def test_fresh_ids_skip_existing_ones(clock: FrozenClock) -> None:
    existing = Task(id="t1", title="old", created_at=clock.now)
    store = TaskStore([existing], clock=clock, id_factory=sequential_ids())
    task = store.add(TaskDraft(title="new"))
    assert task is not None
    assert task.id == "t2"


def test_add_tolerates_missing_tags(store: TaskStore) -> None:
    task = store.add(TaskDraft(title="No tags", tags=None))  # type: ignore[arg-type]
    assert task is not None
    assert task.tags == []


def test_loaded_naive_timestamps_become_local_aware(clock: FrozenClock) -> None:
    local = datetime(2026, 10, 20, 9, 0)
    loaded = Task(id="a", title="a", created_at=local, due=local, completed=True, completed_at=local)
    store = TaskStore([loaded], clock=clock)

    [task] = store.snapshot()
    assert task.due == local.astimezone()
    assert task.created_at.tzinfo is not None
    assert task.completed_at is not None and task.completed_at.tzinfo is not None
    assert loaded.due.tzinfo is None
