"""Eisenhower task endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from focusnotes.api.deps import JsonBody, StorageDep, require_valid
from focusnotes.core.validation import (
    validate_eisenhower_task_create,
    validate_eisenhower_task_patch,
)
from focusnotes.models.entities import EisenhowerTask

router = APIRouter(prefix="/api/eisenhower-tasks", tags=["eisenhower"])
logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"
INVALID_TASK = "Invalid task data"


@router.get("")
async def list_eisenhower_tasks_endpoint(storage: StorageDep) -> list[EisenhowerTask]:
    """List tasks, newest first. The client groups them by quadrant."""
    try:
        return storage.list_eisenhower_tasks()
    except Exception as e:
        logger.exception("Failed to fetch eisenhower tasks")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch eisenhower tasks",
        ) from e


@router.get("/{task_id}")
async def get_eisenhower_task_endpoint(
    task_id: str,
    storage: StorageDep,
) -> EisenhowerTask:
    """Get a task by ID."""
    try:
        task = storage.get_eisenhower_task(task_id)
    except Exception as e:
        logger.exception("Failed to fetch eisenhower task")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch eisenhower task",
        ) from e

    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_eisenhower_task_endpoint(
    payload: JsonBody,
    storage: StorageDep,
) -> EisenhowerTask:
    """Create a task in one of the four quadrants."""
    data = require_valid(validate_eisenhower_task_create(payload), INVALID_TASK)

    try:
        return storage.create_eisenhower_task(data)
    except Exception as e:
        logger.exception("Failed to create eisenhower task")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create eisenhower task",
        ) from e


@router.patch("/{task_id}")
async def update_eisenhower_task_endpoint(
    task_id: str,
    payload: JsonBody,
    storage: StorageDep,
) -> EisenhowerTask:
    """Apply a partial update. ``noteId`` may be cleared with ``null``."""
    patch = require_valid(validate_eisenhower_task_patch(payload), INVALID_TASK)

    try:
        task = storage.update_eisenhower_task(task_id, patch)
    except Exception as e:
        logger.exception("Failed to update eisenhower task")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update eisenhower task",
        ) from e

    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_eisenhower_task_endpoint(
    task_id: str,
    storage: StorageDep,
) -> Response:
    """Delete a task."""
    try:
        deleted = storage.delete_eisenhower_task(task_id)
    except Exception as e:
        logger.exception("Failed to delete eisenhower task")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete eisenhower task",
        ) from e

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
