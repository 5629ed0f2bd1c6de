"""Note endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from focusnotes.api.deps import JsonBody, StorageDep, require_valid
from focusnotes.core.validation import validate_note_create, validate_note_patch
from focusnotes.models.entities import Note

router = APIRouter(prefix="/api/notes", tags=["notes"])
logger = logging.getLogger(__name__)

NOTE_NOT_FOUND = "Note not found"
INVALID_NOTE = "Invalid note data"


@router.get("")
async def list_notes_endpoint(storage: StorageDep) -> list[Note]:
    """List all notes, most recently updated first."""
    try:
        return storage.list_notes()
    except Exception as e:
        logger.exception("Failed to fetch notes")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notes",
        ) from e


@router.get("/search/{query}")
async def search_notes_endpoint(query: str, storage: StorageDep) -> list[Note]:
    """Search titles, contents and tags, ignoring case."""
    try:
        return storage.search_notes(query)
    except Exception as e:
        logger.exception("Failed to search notes")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search notes",
        ) from e


@router.get("/tag/{tag}")
async def notes_by_tag_endpoint(tag: str, storage: StorageDep) -> list[Note]:
    """List notes carrying the exact tag."""
    try:
        return storage.get_notes_by_tag(tag)
    except Exception as e:
        logger.exception("Failed to fetch notes by tag")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notes by tag",
        ) from e


@router.get("/date/{day}")
async def notes_by_date_endpoint(day: str, storage: StorageDep) -> list[Note]:
    """List notes created on the given local calendar day."""
    try:
        return storage.get_notes_by_date(day)
    except Exception as e:
        logger.exception("Failed to fetch notes by date")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notes by date",
        ) from e


@router.get("/{note_id}")
async def get_note_endpoint(note_id: str, storage: StorageDep) -> Note:
    """Get a note by ID."""
    try:
        note = storage.get_note(note_id)
    except Exception as e:
        logger.exception("Failed to fetch note")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch note",
        ) from e

    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOTE_NOT_FOUND)
    return note


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note_endpoint(payload: JsonBody, storage: StorageDep) -> Note:
    """Create a new note."""
    data = require_valid(validate_note_create(payload), INVALID_NOTE)

    try:
        return storage.create_note(data)
    except Exception as e:
        logger.exception("Failed to create note")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create note",
        ) from e


@router.patch("/{note_id}")
async def update_note_endpoint(
    note_id: str,
    payload: JsonBody,
    storage: StorageDep,
) -> Note:
    """Apply a partial update. ``updatedAt`` is always refreshed."""
    patch = require_valid(validate_note_patch(payload), INVALID_NOTE)

    try:
        note = storage.update_note(note_id, patch)
    except Exception as e:
        logger.exception("Failed to update note")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update note",
        ) from e

    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOTE_NOT_FOUND)
    return note


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note_endpoint(note_id: str, storage: StorageDep) -> Response:
    """Delete a note. Tasks referencing it are left alone."""
    try:
        deleted = storage.delete_note(note_id)
    except Exception as e:
        logger.exception("Failed to delete note")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete note",
        ) from e

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOTE_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
