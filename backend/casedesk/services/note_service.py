"""
CaseDesk Backend: Note Service
==============================

What:  Record logic for notes: list, create, update content, delete.
How:   Each operation issues exactly one statement through the DataStore
       gateway. Note content is sanitized on create and on update.
Who:   Called by the /api/notes route handlers.

Statements:
    list    SELECT * FROM notes ORDER BY id ASC
    create  INSERT INTO notes (category, content) VALUES (...)   → generated id
    update  UPDATE notes SET content=:content WHERE id=:note_id
    delete  DELETE FROM notes WHERE id=:note_id

Design Decision:
    NoteService is stateless; the store is passed to every call. Tests hand
    in a mocked store and never need a database.
"""

import logging
from typing import List

from sqlalchemy import bindparam, delete, insert, select, update

from casedesk.database import DataStore
from casedesk.exceptions import DatabaseError
from casedesk.models.note import Note
from casedesk.schemas.note import NoteCreate, NoteRecord, NoteUpdate
from casedesk.services.sanitizer import sanitize

logger = logging.getLogger(__name__)

notes = Note.__table__

SELECT_NOTES = select(notes).order_by(notes.c.id.asc())
INSERT_NOTE = insert(notes)
UPDATE_NOTE_CONTENT = update(notes).where(notes.c.id == bindparam("note_id"))
DELETE_NOTE = delete(notes).where(notes.c.id == bindparam("note_id"))


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  all notes in id order
        - create_note(): sanitize, insert, return the stored record
        - update_note(): sanitize, replace content
        - delete_note(): remove by id

    Update and delete succeed even when no row has the given id.
    """

    async def list_notes(self, store: DataStore) -> List[NoteRecord]:
        """Every note, ascending id."""
        try:
            result = await store.query(SELECT_NOTES)
        except DatabaseError as e:
            logger.error("Database error listing notes: %s", e.context)
            raise DatabaseError(message="Failed to fetch notes", context=e.context) from e
        return [NoteRecord(**row) for row in result.rows]

    async def create_note(self, store: DataStore, payload: NoteCreate) -> NoteRecord:
        """
        Insert a note and return it with its store-generated id.

        The returned content is the sanitized text that was stored, not the
        raw input.

        Raises:
            DatabaseError: insert failed or no id was generated
        """
        content = sanitize(payload.content)
        try:
            result = await store.query(
                INSERT_NOTE,
                {"category": payload.category, "content": content},
            )
        except DatabaseError as e:
            logger.error("Database error creating note: %s", e.context)
            raise DatabaseError(message="Failed to create note", context=e.context) from e

        if result.inserted_id is None:
            logger.error("Note insert returned no generated id")
            raise DatabaseError(message="Failed to create note")

        logger.info("Note %s created (category=%s)", result.inserted_id, payload.category)
        return NoteRecord(id=result.inserted_id, category=payload.category, content=content)

    async def update_note(self, store: DataStore, note_id: int, payload: NoteUpdate) -> None:
        """Replace the content of one note."""
        try:
            result = await store.query(
                UPDATE_NOTE_CONTENT,
                {"content": sanitize(payload.content), "note_id": note_id},
            )
        except DatabaseError as e:
            logger.error("Database error updating note %s: %s", note_id, e.context)
            raise DatabaseError(
                message="Failed to update note",
                context={"note_id": note_id, **e.context},
            ) from e
        if result.rowcount == 0:
            logger.info("Note %s not updated: no matching row", note_id)

    async def delete_note(self, store: DataStore, note_id: int) -> None:
        """Remove one note by id."""
        try:
            result = await store.query(DELETE_NOTE, {"note_id": note_id})
        except DatabaseError as e:
            logger.error("Database error deleting note %s: %s", note_id, e.context)
            raise DatabaseError(
                message="Failed to delete note",
                context={"note_id": note_id, **e.context},
            ) from e
        if result.rowcount == 0:
            logger.info("Note %s not deleted: no matching row", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService is stateless; one instance serves every request
note_service = NoteService()
