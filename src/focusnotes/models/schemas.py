"""Request payload schemas.

Every entity has a create schema and, where records are mutable, a patch
schema whose fields are all optional. Types are strict: ``"true"`` is not a
boolean and ``"25"`` is not a duration. Unknown keys (including ``id`` and
server-managed timestamps) are dropped.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    Strict,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from focusnotes.models.entities import Quadrant, SessionType


def _to_local(value: datetime) -> datetime:
    """Return ``value`` as an aware datetime in the server's timezone.

    Naive datetimes are taken to be local time already. Values whose local
    equivalent falls outside the ``datetime`` range are rejected.
    """
    try:
        return value.astimezone()
    except OverflowError as e:
        msg = "date is out of range"
        raise ValueError(msg) from e


NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]
LocalDatetime = Annotated[datetime, Strict(strict=False), AfterValidator(_to_local)]


class InputSchema(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )


class PatchSchema(InputSchema):
    """Partial update payload.

    Omitted fields stay untouched. An explicit ``null`` is rejected unless the
    field is listed in ``nullable_fields``.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:  # noqa: ANN401
        if value is None and info.field_name not in cls.nullable_fields:
            msg = "may not be null"
            raise ValueError(msg)
        return value

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields keyed by record attribute name."""
        return self.model_dump(exclude_unset=True)


class NoteCreate(InputSchema):
    """Note creation payload."""

    title: str
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class NotePatch(PatchSchema):
    """Note update payload."""

    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    is_favorite: bool | None = None


class PomodoroSessionCreate(InputSchema):
    """Pomodoro session payload, sent once the interval has finished."""

    duration: PositiveInt
    type: SessionType


class KaizenGoalCreate(InputSchema):
    """Kaizen goal creation payload. ``date`` defaults to now."""

    goal: NonEmptyStr
    date: LocalDatetime | None = None
    completed: bool = False


class KaizenGoalPatch(PatchSchema):
    """Kaizen goal update payload."""

    goal: NonEmptyStr | None = None
    date: LocalDatetime | None = None
    completed: bool | None = None


class EisenhowerTaskCreate(InputSchema):
    """Eisenhower task creation payload."""

    title: NonEmptyStr
    quadrant: Quadrant
    completed: bool = False
    note_id: str | None = None


class EisenhowerTaskPatch(PatchSchema):
    """Eisenhower task update payload."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"note_id"})

    title: NonEmptyStr | None = None
    quadrant: Quadrant | None = None
    completed: bool | None = None
    note_id: str | None = None
