"""Kaizen goal endpoints."""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Response, status

from focusnotes.api.deps import JsonBody, StorageDep, require_valid
from focusnotes.api.errors import INVALID_REQUEST
from focusnotes.core.validation import (
    validate_kaizen_goal_create,
    validate_kaizen_goal_patch,
)
from focusnotes.models.entities import KaizenGoal

router = APIRouter(prefix="/api/kaizen-goals", tags=["kaizen"])
logger = logging.getLogger(__name__)

GOAL_NOT_FOUND = "Goal not found"
INVALID_GOAL = "Invalid goal data"


@router.get("")
async def list_kaizen_goals_endpoint(storage: StorageDep) -> list[KaizenGoal]:
    """List goals, latest date first."""
    try:
        return storage.list_kaizen_goals()
    except Exception as e:
        logger.exception("Failed to fetch kaizen goals")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch kaizen goals",
        ) from e


@router.get("/range")
async def kaizen_goals_in_range_endpoint(
    start: datetime,
    end: datetime,
    storage: StorageDep,
) -> list[KaizenGoal]:
    """List goals dated between ``start`` and ``end``, both inclusive."""
    try:
        return storage.get_kaizen_goals_by_date_range(start, end)
    except ValueError as e:
        logger.info("Rejected kaizen goal range %s..%s: %s", start, end, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_REQUEST,
        ) from e
    except Exception as e:
        logger.exception("Failed to fetch kaizen goals by date range")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch kaizen goals",
        ) from e


@router.get("/{goal_id}")
async def get_kaizen_goal_endpoint(goal_id: str, storage: StorageDep) -> KaizenGoal:
    """Get a goal by ID."""
    try:
        goal = storage.get_kaizen_goal(goal_id)
    except Exception as e:
        logger.exception("Failed to fetch kaizen goal")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch kaizen goal",
        ) from e

    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GOAL_NOT_FOUND)
    return goal


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_kaizen_goal_endpoint(
    payload: JsonBody,
    storage: StorageDep,
) -> KaizenGoal:
    """Create a goal, dated today unless ``date`` is given."""
    data = require_valid(validate_kaizen_goal_create(payload), INVALID_GOAL)

    try:
        return storage.create_kaizen_goal(data)
    except Exception as e:
        logger.exception("Failed to create kaizen goal")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create kaizen goal",
        ) from e


@router.patch("/{goal_id}")
async def update_kaizen_goal_endpoint(
    goal_id: str,
    payload: JsonBody,
    storage: StorageDep,
) -> KaizenGoal:
    """Apply a partial update, typically toggling ``completed``."""
    patch = require_valid(validate_kaizen_goal_patch(payload), INVALID_GOAL)

    try:
        goal = storage.update_kaizen_goal(goal_id, patch)
    except Exception as e:
        logger.exception("Failed to update kaizen goal")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update kaizen goal",
        ) from e

    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GOAL_NOT_FOUND)
    return goal


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_kaizen_goal_endpoint(goal_id: str, storage: StorageDep) -> Response:
    """Delete a goal."""
    try:
        deleted = storage.delete_kaizen_goal(goal_id)
    except Exception as e:
        logger.exception("Failed to delete kaizen goal")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete kaizen goal",
        ) from e

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GOAL_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
