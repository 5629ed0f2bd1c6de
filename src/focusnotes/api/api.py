"""API router configuration."""

from fastapi import APIRouter

from focusnotes.api.endpoints import eisenhower, kaizen, notes, pomodoro

router = APIRouter()
router.include_router(notes.router)
router.include_router(pomodoro.router)
router.include_router(kaizen.router)
router.include_router(eisenhower.router)
