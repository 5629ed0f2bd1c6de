"""Record types held by the store.

Records serialize with camelCase keys (``isFavorite``, ``createdAt``...) which
is the shape the single-page frontend consumes.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SessionType = Literal["work", "break"]

Quadrant = Literal[
    "urgent-important",
    "not-urgent-important",
    "urgent-not-important",
    "not-urgent-not-important",
]


class Record(BaseModel):
    """Base for stored records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str


class Note(Record):
    """Free-form note."""

    title: str
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    created_at: datetime
    updated_at: datetime


class PomodoroSession(Record):
    """Completed Pomodoro interval. Sessions are never updated."""

    duration: int
    type: SessionType
    completed_at: datetime


class KaizenGoal(Record):
    """Daily improvement goal, attached to the calendar day of ``date``."""

    goal: str
    date: datetime
    completed: bool = False


class EisenhowerTask(Record):
    """Task placed in one of the four Eisenhower quadrants.

    ``note_id`` is a loose association with a note; it is not checked and
    deleting the note leaves the task untouched.
    """

    title: str
    quadrant: Quadrant
    completed: bool = False
    note_id: str | None = None
    created_at: datetime
