"""Tests for the in-memory store."""

from datetime import datetime, timedelta, timezone

import pytest
from helpers import FakeClock

from focusnotes.core.storage import MemStorage, Storage
from focusnotes.models.schemas import (
    EisenhowerTaskCreate,
    EisenhowerTaskPatch,
    KaizenGoalCreate,
    KaizenGoalPatch,
    NoteCreate,
    NotePatch,
    PomodoroSessionCreate,
)


def _local(*args: int) -> datetime:
    return datetime(*args).astimezone()  # noqa: DTZ001


def test_create_note_applies_defaults(storage: MemStorage) -> None:
    note = storage.create_note(NoteCreate(title="Groceries"))

    assert note.id
    assert note.content == ""
    assert note.tags == []
    assert note.is_favorite is False
    assert note.created_at == note.updated_at
    assert storage.get_note(note.id) == note


def test_create_note_ids_are_unique(storage: MemStorage) -> None:
    first = storage.create_note(NoteCreate(title="a"))
    second = storage.create_note(NoteCreate(title="a"))
    assert first.id != second.id


def test_get_note_missing_returns_none(storage: MemStorage) -> None:
    assert storage.get_note("nope") is None


def test_update_note_merges_only_supplied_fields(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    note = storage.create_note(
        NoteCreate(title="Plan", content="draft", tags=["work"]),
    )
    clock.advance(minutes=5)

    updated = storage.update_note(note.id, NotePatch(is_favorite=True))

    assert updated is not None
    assert updated.is_favorite is True
    assert updated.title == "Plan"
    assert updated.content == "draft"
    assert updated.tags == ["work"]
    assert updated.created_at == note.created_at
    assert updated.updated_at == clock.now
    assert storage.get_note(note.id) == updated


def test_update_note_refreshes_timestamp_on_empty_patch(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    note = storage.create_note(NoteCreate(title="Plan"))
    clock.advance(seconds=1)

    updated = storage.update_note(note.id, NotePatch())

    assert updated is not None
    assert updated.updated_at > note.updated_at


def test_update_note_timestamp_never_moves_backwards(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    note = storage.create_note(NoteCreate(title="Plan"))
    clock.advance(hours=-1)

    updated = storage.update_note(note.id, NotePatch(title="Plan B"))

    assert updated is not None
    assert updated.updated_at == note.updated_at
    assert updated.updated_at >= updated.created_at


def test_update_missing_note_returns_none(storage: MemStorage) -> None:
    assert storage.update_note("nope", NotePatch(title="x")) is None


def test_delete_twice(storage: MemStorage) -> None:
    note = storage.create_note(NoteCreate(title="Temp"))
    assert storage.delete_note(note.id) is True
    assert storage.delete_note(note.id) is False
    assert storage.get_note(note.id) is None


def test_delete_missing_returns_false_for_every_kind(storage: MemStorage) -> None:
    assert storage.delete_note("nope") is False
    assert storage.delete_pomodoro_session("nope") is False
    assert storage.delete_kaizen_goal("nope") is False
    assert storage.delete_eisenhower_task("nope") is False


def test_list_notes_orders_by_last_update(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    old = storage.create_note(NoteCreate(title="old"))
    clock.advance(minutes=1)
    new = storage.create_note(NoteCreate(title="new"))
    clock.advance(minutes=1)
    storage.update_note(old.id, NotePatch(content="touched"))

    assert [n.id for n in storage.list_notes()] == [old.id, new.id]


def test_list_notes_ties_put_latest_insert_first(storage: MemStorage) -> None:
    first = storage.create_note(NoteCreate(title="first"))
    second = storage.create_note(NoteCreate(title="second"))

    assert [n.id for n in storage.list_notes()] == [second.id, first.id]


def test_search_notes_matches_title_content_and_tags(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    by_title = storage.create_note(NoteCreate(title="Weekly REVIEW"))
    clock.advance(minutes=1)
    by_content = storage.create_note(
        NoteCreate(title="Journal", content="time to review goals"),
    )
    clock.advance(minutes=1)
    by_tag = storage.create_note(NoteCreate(title="Misc", tags=["Reviews"]))
    storage.create_note(NoteCreate(title="Unrelated", content="milk"))

    results = storage.search_notes("Review")

    assert [n.id for n in results] == [by_tag.id, by_content.id, by_title.id]


def test_search_notes_without_match_is_empty(storage: MemStorage) -> None:
    storage.create_note(NoteCreate(title="Groceries"))
    assert storage.search_notes("zebra") == []


def test_notes_by_tag_is_exact(storage: MemStorage) -> None:
    home = storage.create_note(NoteCreate(title="a", tags=["home"]))
    storage.create_note(NoteCreate(title="b", tags=["homework"]))
    storage.create_note(NoteCreate(title="c", tags=["Home"]))

    assert [n.id for n in storage.get_notes_by_tag("home")] == [home.id]


def test_notes_by_date_covers_whole_local_day(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    clock.set(_local(2024, 4, 30, 23, 59, 59, 999999))
    storage.create_note(NoteCreate(title="day before"))
    clock.set(_local(2024, 5, 1, 0, 0, 0, 0))
    midnight = storage.create_note(NoteCreate(title="midnight"))
    clock.set(_local(2024, 5, 1, 23, 59, 59, 999000))
    last_ms = storage.create_note(NoteCreate(title="last millisecond"))
    clock.set(_local(2024, 5, 2, 0, 0, 0, 0))
    storage.create_note(NoteCreate(title="day after"))

    results = storage.get_notes_by_date("2024-05-01")

    assert {n.id for n in results} == {midnight.id, last_ms.id}


def test_notes_by_date_includes_final_microseconds(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    clock.set(_local(2024, 5, 1, 23, 59, 59, 999500))
    late = storage.create_note(NoteCreate(title="after the last millisecond"))

    assert storage.get_notes_by_date("2024-05-01") == [late]
    assert storage.get_notes_by_date("2024-05-02") == []


def test_notes_by_date_accepts_timestamp(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    note = storage.create_note(NoteCreate(title="today"))

    assert storage.get_notes_by_date(clock.now.isoformat()) == [note]


def test_notes_by_date_unparseable_is_empty(storage: MemStorage) -> None:
    storage.create_note(NoteCreate(title="x"))
    assert storage.get_notes_by_date("not-a-date") == []


@pytest.mark.usefixtures("east_of_utc")
@pytest.mark.parametrize("day", ["0001-01-01", "9999-12-31T23:59:59-12:00"])
def test_notes_by_date_out_of_range_is_empty(
    storage: MemStorage,
    day: str,
) -> None:
    storage.create_note(NoteCreate(title="x"))
    assert storage.get_notes_by_date(day) == []


def test_pomodoro_sessions_newest_first(
    storage: MemStorage,
    clock: FakeClock,
) -> None:
    work = storage.create_pomodoro_session(
        PomodoroSessionCreate(duration=25, type="work"),
    )
    clock.advance(minutes=25)
    rest = storage.create_pomodoro_session(
        PomodoroSessionCreate(duration=5, type="break"),
    )

    assert work.completed_at < rest.completed_at
    assert storage.list_pomodoro_sessions() == [rest, work]
    assert storage.get_pomodoro_session(work.id) == work


def test_pomodoro_session_get_and_delete(clock: FakeClock) -> None:
    store: Storage = MemStorage(clock=clock)
    session = store.create_pomodoro_session(
        PomodoroSessionCreate(duration=25, type="work"),
    )

    assert store.get_pomodoro_session(session.id) == session
    assert store.delete_pomodoro_session(session.id) is True
    assert store.get_pomodoro_session(session.id) is None
    assert store.delete_pomodoro_session(session.id) is False
    assert store.list_pomodoro_sessions() == []


def test_kaizen_goal_defaults_to_now(storage: MemStorage, clock: FakeClock) -> None:
    goal = storage.create_kaizen_goal(KaizenGoalCreate(goal="Read 10 pages"))

    assert goal.date == clock.now
    assert goal.completed is False


def test_kaizen_goal_update_keeps_date(storage: MemStorage, clock: FakeClock) -> None:
    goal = storage.create_kaizen_goal(KaizenGoalCreate(goal="Stretch"))
    clock.advance(days=1)

    updated = storage.update_kaizen_goal(goal.id, KaizenGoalPatch(completed=True))

    assert updated is not None
    assert updated.completed is True
    assert updated.date == goal.date
    assert storage.update_kaizen_goal("nope", KaizenGoalPatch(completed=True)) is None


def test_kaizen_goals_by_date_range_is_inclusive(storage: MemStorage) -> None:
    start = _local(2024, 5, 1)
    end = _local(2024, 5, 7, 23, 59, 59)
    first = storage.create_kaizen_goal(KaizenGoalCreate(goal="a", date=start))
    last = storage.create_kaizen_goal(KaizenGoalCreate(goal="b", date=end))
    storage.create_kaizen_goal(KaizenGoalCreate(goal="c", date=_local(2024, 5, 8)))
    storage.create_kaizen_goal(
        KaizenGoalCreate(goal="d", date=_local(2024, 4, 30, 23, 59)),
    )

    results = storage.get_kaizen_goals_by_date_range(start, end)

    assert results == [last, first]


def test_kaizen_goals_by_date_range_accepts_naive_bounds(storage: MemStorage) -> None:
    goal = storage.create_kaizen_goal(
        KaizenGoalCreate(goal="a", date=_local(2024, 5, 3, 12)),
    )

    results = storage.get_kaizen_goals_by_date_range(
        datetime(2024, 5, 3),  # noqa: DTZ001
        datetime(2024, 5, 4),  # noqa: DTZ001
    )

    assert results == [goal]


def test_kaizen_goals_by_date_range_accepts_far_aware_bounds(
    storage: MemStorage,
) -> None:
    goal = storage.create_kaizen_goal(
        KaizenGoalCreate(goal="a", date=_local(2024, 5, 3, 12)),
    )

    results = storage.get_kaizen_goals_by_date_range(
        datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=14))),
        datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=-12))),
    )

    assert results == [goal]


@pytest.mark.usefixtures("east_of_utc")
def test_kaizen_goals_by_date_range_rejects_unrepresentable_naive_bound(
    storage: MemStorage,
) -> None:
    with pytest.raises(ValueError, match="out of range"):
        storage.get_kaizen_goals_by_date_range(
            datetime(1, 1, 1),  # noqa: DTZ001
            datetime(2024, 5, 4),  # noqa: DTZ001
        )


def test_eisenhower_task_lifecycle(storage: MemStorage, clock: FakeClock) -> None:
    note = storage.create_note(NoteCreate(title="Context"))
    task = storage.create_eisenhower_task(
        EisenhowerTaskCreate(
            title="File taxes",
            quadrant="urgent-important",
            note_id=note.id,
        ),
    )
    assert task.completed is False
    assert task.created_at == clock.now

    clock.advance(hours=1)
    updated = storage.update_eisenhower_task(
        task.id,
        EisenhowerTaskPatch(quadrant="not-urgent-important", completed=True),
    )

    assert updated is not None
    assert updated.quadrant == "not-urgent-important"
    assert updated.completed is True
    assert updated.created_at == task.created_at
    assert updated.note_id == note.id


def test_deleting_note_leaves_linked_task(storage: MemStorage) -> None:
    note = storage.create_note(NoteCreate(title="Context"))
    task = storage.create_eisenhower_task(
        EisenhowerTaskCreate(
            title="Call",
            quadrant="urgent-not-important",
            note_id=note.id,
        ),
    )

    assert storage.delete_note(note.id) is True
    assert storage.get_eisenhower_task(task.id) == task


def test_eisenhower_patch_can_clear_note_link(storage: MemStorage) -> None:
    task = storage.create_eisenhower_task(
        EisenhowerTaskCreate(title="Call", quadrant="urgent-important", note_id="n1"),
    )

    updated = storage.update_eisenhower_task(
        task.id,
        EisenhowerTaskPatch.model_validate({"noteId": None}),
    )

    assert updated is not None
    assert updated.note_id is None


def test_eisenhower_tasks_newest_first(storage: MemStorage, clock: FakeClock) -> None:
    older = storage.create_eisenhower_task(
        EisenhowerTaskCreate(title="a", quadrant="urgent-important"),
    )
    clock.advance(seconds=1)
    newer = storage.create_eisenhower_task(
        EisenhowerTaskCreate(title="b", quadrant="urgent-important"),
    )

    assert storage.list_eisenhower_tasks() == [newer, older]


def test_custom_id_factory() -> None:
    ids = iter(["n-1", "n-2"])
    store = MemStorage(id_factory=lambda: next(ids))

    assert store.create_note(NoteCreate(title="a")).id == "n-1"
    assert store.create_note(NoteCreate(title="b")).id == "n-2"
