"""Pomodoro session endpoints.

Sessions are append-only: the timer posts one record per finished interval
and there is no update or delete route.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from focusnotes.api.deps import JsonBody, StorageDep, require_valid
from focusnotes.core.validation import validate_pomodoro_session_create
from focusnotes.models.entities import PomodoroSession

router = APIRouter(prefix="/api/pomodoro-sessions", tags=["pomodoro"])
logger = logging.getLogger(__name__)

INVALID_SESSION = "Invalid session data"


@router.get("")
async def list_pomodoro_sessions_endpoint(
    storage: StorageDep,
) -> list[PomodoroSession]:
    """List sessions, most recently completed first."""
    try:
        return storage.list_pomodoro_sessions()
    except Exception as e:
        logger.exception("Failed to fetch pomodoro sessions")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch pomodoro sessions",
        ) from e


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pomodoro_session_endpoint(
    payload: JsonBody,
    storage: StorageDep,
) -> PomodoroSession:
    """Record a completed work or break interval."""
    data = require_valid(validate_pomodoro_session_create(payload), INVALID_SESSION)

    try:
        return storage.create_pomodoro_session(data)
    except Exception as e:
        logger.exception("Failed to create pomodoro session")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create pomodoro session",
        ) from e
