"""
CaseDesk Backend: Notes Route Handlers
======================================

What:  HTTP surface for notes.
How:   Thin handlers delegating to NoteService. Writes require a bearer
       token through the ``require_auth`` dependency.

Routes:
    GET    /api/notes          → 200 [NoteRecord, ...] ascending id
    POST   /api/notes          → 201 NoteRecord with generated id  (auth)
    PUT    /api/notes/{id}     → 200 {"message": ...}               (auth)
    DELETE /api/notes/{id}     → 200 {"message": ...}               (auth)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from casedesk.database import DataStore, get_store
from casedesk.middleware.auth import require_auth
from casedesk.schemas.common import ErrorResponse, MessageResponse
from casedesk.schemas.note import NoteCreate, NoteRecord, NoteUpdate
from casedesk.services.note_service import note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])

_WRITE_ERRORS = {
    401: {"description": "Missing bearer token", "model": ErrorResponse},
    403: {"description": "Invalid or expired token", "model": ErrorResponse},
    500: {"description": "Database error", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=List[NoteRecord],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all notes in creation order",
)
async def list_notes(store: DataStore = Depends(get_store)) -> List[NoteRecord]:
    return await note_service.list_notes(store)


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteRecord,
    responses=_WRITE_ERRORS,
    summary="Create a note",
    description=(
        "Stores a note and returns it with the id generated by the database. "
        "The returned content is the sanitized text that was stored."
    ),
    dependencies=[Depends(require_auth)],
)
async def create_note(
    payload: NoteCreate,
    store: DataStore = Depends(get_store),
) -> NoteRecord:
    return await note_service.create_note(store, payload)


@router.put(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses=_WRITE_ERRORS,
    summary="Replace the content of a note",
    dependencies=[Depends(require_auth)],
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    store: DataStore = Depends(get_store),
) -> MessageResponse:
    """Content-only update; the category is fixed at creation."""
    await note_service.update_note(store, note_id, payload)
    return MessageResponse(message="Note updated successfully")


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses=_WRITE_ERRORS,
    summary="Delete a note",
    dependencies=[Depends(require_auth)],
)
async def delete_note(
    note_id: int,
    store: DataStore = Depends(get_store),
) -> MessageResponse:
    await note_service.delete_note(store, note_id)
    return MessageResponse(message="Note deleted successfully")
