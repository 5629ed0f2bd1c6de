"""In-memory entity store.

``MemStorage`` keeps notes, Pomodoro sessions, Kaizen goals and Eisenhower
tasks in four dictionaries keyed by id. Nothing survives the process. Every
operation is a single dictionary read or write, so handlers running on one
event loop never observe a half-applied change.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Protocol

from focusnotes.models.entities import (
    EisenhowerTask,
    KaizenGoal,
    Note,
    PomodoroSession,
)

if TYPE_CHECKING:
    from focusnotes.models.schemas import (
        EisenhowerTaskCreate,
        EisenhowerTaskPatch,
        KaizenGoalCreate,
        KaizenGoalPatch,
        NoteCreate,
        NotePatch,
        PomodoroSessionCreate,
    )

logger = logging.getLogger(__name__)

type Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def new_id() -> str:
    """Return a fresh opaque record identifier."""
    return str(uuid.uuid4())


def _newest_first[R](
    records: Iterable[R],
    key: Callable[[R], datetime],
) -> list[R]:
    """Sort by ``key`` descending; among equal keys the last inserted wins."""
    return sorted(reversed(list(records)), key=key, reverse=True)


def _note_recency(note: Note) -> datetime:
    return note.updated_at


def _parse_day(value: str) -> date | None:
    """Return the local calendar day named by ``value``.

    Accepts ``YYYY-MM-DD`` or a full ISO 8601 timestamp. Timestamps with an
    offset are converted to local time first. Returns ``None`` when the value
    cannot be parsed.
    """
    try:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
    except (ValueError, OverflowError):
        return None
    return parsed.date()


def _assume_local(value: datetime) -> datetime:
    """Read a naive ``value`` as local time. Aware values pass through.

    Raises:
        ValueError: ``value`` has no local equivalent inside the ``datetime``
            range.

    """
    if value.tzinfo is not None:
        return value
    try:
        return value.astimezone()
    except OverflowError as e:
        msg = f"{value.isoformat()} is out of range"
        raise ValueError(msg) from e


class Storage(Protocol):
    """Operations the API needs from a store."""

    # Notes
    def list_notes(self) -> list[Note]: ...
    def get_note(self, note_id: str) -> Note | None: ...
    def create_note(self, data: NoteCreate) -> Note: ...
    def update_note(self, note_id: str, patch: NotePatch) -> Note | None: ...
    def delete_note(self, note_id: str) -> bool: ...
    def search_notes(self, query: str) -> list[Note]: ...
    def get_notes_by_tag(self, tag: str) -> list[Note]: ...
    def get_notes_by_date(self, day: str) -> list[Note]: ...

    # Pomodoro sessions
    def list_pomodoro_sessions(self) -> list[PomodoroSession]: ...
    def get_pomodoro_session(self, session_id: str) -> PomodoroSession | None: ...
    def create_pomodoro_session(
        self,
        data: PomodoroSessionCreate,
    ) -> PomodoroSession: ...
    def delete_pomodoro_session(self, session_id: str) -> bool: ...

    # Kaizen goals
    def list_kaizen_goals(self) -> list[KaizenGoal]: ...
    def get_kaizen_goals_by_date_range(
        self,
        start: datetime,
        end: datetime,
    ) -> list[KaizenGoal]: ...
    def get_kaizen_goal(self, goal_id: str) -> KaizenGoal | None: ...
    def create_kaizen_goal(self, data: KaizenGoalCreate) -> KaizenGoal: ...
    def update_kaizen_goal(
        self,
        goal_id: str,
        patch: KaizenGoalPatch,
    ) -> KaizenGoal | None: ...
    def delete_kaizen_goal(self, goal_id: str) -> bool: ...

    # Eisenhower tasks
    def list_eisenhower_tasks(self) -> list[EisenhowerTask]: ...
    def get_eisenhower_task(self, task_id: str) -> EisenhowerTask | None: ...
    def create_eisenhower_task(self, data: EisenhowerTaskCreate) -> EisenhowerTask: ...
    def update_eisenhower_task(
        self,
        task_id: str,
        patch: EisenhowerTaskPatch,
    ) -> EisenhowerTask | None: ...
    def delete_eisenhower_task(self, task_id: str) -> bool: ...


class MemStorage:
    """Volatile, unbounded store holding every record for the process lifetime.

    Args:
        clock: Source of "now" for timestamps. Defaults to local wall time.
        id_factory: Source of record identifiers.

    """

    def __init__(
        self,
        clock: Clock = local_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        """Create an empty store."""
        self._clock = clock
        self._new_id = id_factory
        self._notes: dict[str, Note] = {}
        self._pomodoro_sessions: dict[str, PomodoroSession] = {}
        self._kaizen_goals: dict[str, KaizenGoal] = {}
        self._eisenhower_tasks: dict[str, EisenhowerTask] = {}

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def list_notes(self) -> list[Note]:
        """Return all notes, most recently updated first."""
        return _newest_first(self._notes.values(), _note_recency)

    def get_note(self, note_id: str) -> Note | None:
        """Return the note or ``None``."""
        return self._notes.get(note_id)

    def create_note(self, data: NoteCreate) -> Note:
        """Store a new note. ``createdAt`` and ``updatedAt`` start equal."""
        now = self._clock()
        note = Note(
            id=self._new_id(),
            title=data.title,
            content=data.content,
            tags=list(data.tags),
            is_favorite=data.is_favorite,
            created_at=now,
            updated_at=now,
        )
        self._notes[note.id] = note
        logger.debug("Created note %s", note.id)
        return note

    def update_note(self, note_id: str, patch: NotePatch) -> Note | None:
        """Merge ``patch`` onto the note and refresh ``updatedAt``.

        ``updatedAt`` is refreshed even when the patch is empty, and never moves
        backwards if the clock does.
        """
        note = self._notes.get(note_id)
        if note is None:
            return None
        changes = patch.changes()
        changes["updated_at"] = max(self._clock(), note.updated_at)
        updated = note.model_copy(update=changes)
        self._notes[note_id] = updated
        return updated

    def delete_note(self, note_id: str) -> bool:
        """Remove the note. Tasks pointing at it keep their ``noteId``."""
        return self._notes.pop(note_id, None) is not None

    def search_notes(self, query: str) -> list[Note]:
        """Case-insensitive substring match on title, content or any tag."""
        needle = query.lower()
        matches = (
            note
            for note in self._notes.values()
            if needle in note.title.lower()
            or needle in note.content.lower()
            or any(needle in tag.lower() for tag in note.tags)
        )
        return _newest_first(matches, _note_recency)

    def get_notes_by_tag(self, tag: str) -> list[Note]:
        """Return notes carrying exactly ``tag``."""
        matches = (note for note in self._notes.values() if tag in note.tags)
        return _newest_first(matches, _note_recency)

    def get_notes_by_date(self, day: str) -> list[Note]:
        """Return notes created during the local calendar day named by ``day``.

        Both ends of the day are inclusive. An unparseable ``day`` matches
        nothing.
        """
        target = _parse_day(day)
        if target is None:
            logger.info("Ignoring unparseable note date %r", day)
            return []
        try:
            start = _assume_local(datetime.combine(target, time.min))
            end = _assume_local(datetime.combine(target, time.max))
        except ValueError:
            logger.info("Ignoring out-of-range note date %r", day)
            return []
        matches = (
            note for note in self._notes.values() if start <= note.created_at <= end
        )
        return _newest_first(matches, _note_recency)

    # ------------------------------------------------------------------
    # Pomodoro sessions
    # ------------------------------------------------------------------

    def list_pomodoro_sessions(self) -> list[PomodoroSession]:
        """Return all sessions, most recently completed first."""
        return _newest_first(
            self._pomodoro_sessions.values(),
            lambda session: session.completed_at,
        )

    def get_pomodoro_session(self, session_id: str) -> PomodoroSession | None:
        """Return the session or ``None``."""
        return self._pomodoro_sessions.get(session_id)

    def create_pomodoro_session(self, data: PomodoroSessionCreate) -> PomodoroSession:
        """Record a finished interval, stamped with the current time."""
        session = PomodoroSession(
            id=self._new_id(),
            duration=data.duration,
            type=data.type,
            completed_at=self._clock(),
        )
        self._pomodoro_sessions[session.id] = session
        return session

    def delete_pomodoro_session(self, session_id: str) -> bool:
        """Remove the session."""
        return self._pomodoro_sessions.pop(session_id, None) is not None

    # ------------------------------------------------------------------
    # Kaizen goals
    # ------------------------------------------------------------------

    def list_kaizen_goals(self) -> list[KaizenGoal]:
        """Return all goals, latest ``date`` first."""
        return _newest_first(self._kaizen_goals.values(), lambda goal: goal.date)

    def get_kaizen_goals_by_date_range(
        self,
        start: datetime,
        end: datetime,
    ) -> list[KaizenGoal]:
        """Return goals whose ``date`` lies in ``[start, end]``.

        Naive bounds are read as local time.

        Raises:
            ValueError: A naive bound has no local equivalent.

        """
        start, end = _assume_local(start), _assume_local(end)
        matches = (
            goal for goal in self._kaizen_goals.values() if start <= goal.date <= end
        )
        return _newest_first(matches, lambda goal: goal.date)

    def get_kaizen_goal(self, goal_id: str) -> KaizenGoal | None:
        """Return the goal or ``None``."""
        return self._kaizen_goals.get(goal_id)

    def create_kaizen_goal(self, data: KaizenGoalCreate) -> KaizenGoal:
        """Store a new goal, dated now unless the payload says otherwise."""
        goal = KaizenGoal(
            id=self._new_id(),
            goal=data.goal,
            date=data.date if data.date is not None else self._clock(),
            completed=data.completed,
        )
        self._kaizen_goals[goal.id] = goal
        return goal

    def update_kaizen_goal(
        self,
        goal_id: str,
        patch: KaizenGoalPatch,
    ) -> KaizenGoal | None:
        """Merge ``patch`` onto the goal. No timestamp is refreshed."""
        goal = self._kaizen_goals.get(goal_id)
        if goal is None:
            return None
        updated = goal.model_copy(update=patch.changes())
        self._kaizen_goals[goal_id] = updated
        return updated

    def delete_kaizen_goal(self, goal_id: str) -> bool:
        """Remove the goal."""
        return self._kaizen_goals.pop(goal_id, None) is not None

    # ------------------------------------------------------------------
    # Eisenhower tasks
    # ------------------------------------------------------------------

    def list_eisenhower_tasks(self) -> list[EisenhowerTask]:
        """Return all tasks, newest first."""
        return _newest_first(
            self._eisenhower_tasks.values(),
            lambda task: task.created_at,
        )

    def get_eisenhower_task(self, task_id: str) -> EisenhowerTask | None:
        """Return the task or ``None``."""
        return self._eisenhower_tasks.get(task_id)

    def create_eisenhower_task(self, data: EisenhowerTaskCreate) -> EisenhowerTask:
        """Store a new task."""
        task = EisenhowerTask(
            id=self._new_id(),
            title=data.title,
            quadrant=data.quadrant,
            completed=data.completed,
            note_id=data.note_id,
            created_at=self._clock(),
        )
        self._eisenhower_tasks[task.id] = task
        return task

    def update_eisenhower_task(
        self,
        task_id: str,
        patch: EisenhowerTaskPatch,
    ) -> EisenhowerTask | None:
        """Merge ``patch`` onto the task. ``createdAt`` never changes."""
        task = self._eisenhower_tasks.get(task_id)
        if task is None:
            return None
        updated = task.model_copy(update=patch.changes())
        self._eisenhower_tasks[task_id] = updated
        return updated

    def delete_eisenhower_task(self, task_id: str) -> bool:
        """Remove the task."""
        return self._eisenhower_tasks.pop(task_id, None) is not None
