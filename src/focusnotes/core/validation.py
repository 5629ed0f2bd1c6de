"""Payload validation.

Each entity has explicit validation functions that take the decoded JSON body
and return either ``Valid(value)`` or ``Invalid(reasons)``. Validation never
touches the store.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from focusnotes.models.schemas import (
    EisenhowerTaskCreate,
    EisenhowerTaskPatch,
    KaizenGoalCreate,
    KaizenGoalPatch,
    NoteCreate,
    NotePatch,
    PomodoroSessionCreate,
)

BODY_FIELD = "body"
NOT_AN_OBJECT = "expected a JSON object"


@dataclass(frozen=True)
class FieldError:
    """One reason a payload was rejected."""

    field: str
    message: str


@dataclass(frozen=True)
class Valid[T]:
    """Accepted payload."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Rejected payload with one reason per offending field."""

    reasons: tuple[FieldError, ...]

    def describe(self) -> str:
        """Render the reasons on one line for logging."""
        return "; ".join(f"{r.field}: {r.message}" for r in self.reasons)


type ValidationResult[T] = Valid[T] | Invalid


def _field_name(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or BODY_FIELD


def _validate[M: BaseModel](schema: type[M], payload: object) -> ValidationResult[M]:
    if not isinstance(payload, dict):
        return Invalid((FieldError(BODY_FIELD, NOT_AN_OBJECT),))
    try:
        return Valid(schema.model_validate(payload))
    except ValidationError as e:
        return Invalid(
            tuple(
                FieldError(_field_name(error["loc"]), error["msg"])
                for error in e.errors()
            ),
        )


def validate_note_create(payload: object) -> ValidationResult[NoteCreate]:
    """Validate a note creation body."""
    return _validate(NoteCreate, payload)


def validate_note_patch(payload: object) -> ValidationResult[NotePatch]:
    """Validate a note update body."""
    return _validate(NotePatch, payload)


def validate_pomodoro_session_create(
    payload: object,
) -> ValidationResult[PomodoroSessionCreate]:
    """Validate a Pomodoro session body."""
    return _validate(PomodoroSessionCreate, payload)


def validate_kaizen_goal_create(payload: object) -> ValidationResult[KaizenGoalCreate]:
    """Validate a Kaizen goal creation body."""
    return _validate(KaizenGoalCreate, payload)


def validate_kaizen_goal_patch(payload: object) -> ValidationResult[KaizenGoalPatch]:
    """Validate a Kaizen goal update body."""
    return _validate(KaizenGoalPatch, payload)


def validate_eisenhower_task_create(
    payload: object,
) -> ValidationResult[EisenhowerTaskCreate]:
    """Validate an Eisenhower task creation body."""
    return _validate(EisenhowerTaskCreate, payload)


def validate_eisenhower_task_patch(
    payload: object,
) -> ValidationResult[EisenhowerTaskPatch]:
    """Validate an Eisenhower task update body."""
    return _validate(EisenhowerTaskPatch, payload)
