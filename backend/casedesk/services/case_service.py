"""
CaseDesk Backend: Case Service
==============================

What:  Record logic for support cases: list, create, update, delete.
How:   Each operation sanitizes its free-text fields and issues exactly one
       statement through the DataStore gateway.
Who:   Called by the /api/cases route handlers.

Statements:
    list    SELECT * FROM cases ORDER BY created_at DESC
    create  INSERT INTO cases (id, title, ..., resolved_at) VALUES (...)
    update  UPDATE cases SET title=..., ..., resolved_at=... WHERE id=:case_id
    delete  DELETE FROM cases WHERE id=:case_id

Missing rows:
    Update and delete do not check the affected-row count. Targeting an id
    that does not exist reports success; the zero-row outcome is logged.
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import bindparam, delete, insert, select, update

from casedesk.database import DataStore
from casedesk.exceptions import DatabaseError
from casedesk.models.case import Case
from casedesk.schemas.case import CaseCreate, CaseRecord, CaseUpdate
from casedesk.services.sanitizer import sanitize

logger = logging.getLogger(__name__)

cases = Case.__table__

SELECT_CASES = select(cases).order_by(cases.c.created_at.desc())
INSERT_CASE = insert(cases)
UPDATE_CASE = update(cases).where(cases.c.id == bindparam("case_id"))
DELETE_CASE = delete(cases).where(cases.c.id == bindparam("case_id"))


class CaseService:
    """
    Business logic layer for case operations.

    Error Handling Strategy:
        Gateway failures arrive as DatabaseError with driver detail in the
        context. They are logged here and re-raised with a message naming the
        failed operation, which is all the client gets to see.
    """

    async def list_cases(self, store: DataStore) -> List[CaseRecord]:
        """Every case, newest ``created_at`` first."""
        try:
            result = await store.query(SELECT_CASES)
        except DatabaseError as e:
            raise self._fail("Failed to fetch cases", e) from e
        return [CaseRecord(**row) for row in result.rows]

    async def create_case(self, store: DataStore, payload: CaseCreate) -> None:
        """
        Insert one case with its caller-assigned id.

        Raises:
            DatabaseError: duplicate id, constraint violation, store unavailable
        """
        params = {
            "id": payload.id,
            "title": payload.title,
            "category": payload.category,
            "priority": payload.priority,
            "description": sanitize(payload.description),
            "resolution": sanitize(payload.resolution),
            "created_at": payload.created_at or datetime.now(timezone.utc),
            "resolved_at": payload.resolved_at,
        }
        try:
            await store.query(INSERT_CASE, params)
        except DatabaseError as e:
            raise self._fail("Failed to create case", e, case_id=payload.id) from e
        logger.info("Case %s created", payload.id)

    async def update_case(self, store: DataStore, case_id: str, payload: CaseUpdate) -> None:
        """Overwrite every editable field of one case."""
        params = {
            "title": payload.title,
            "category": payload.category,
            "priority": payload.priority,
            "description": sanitize(payload.description),
            "resolution": sanitize(payload.resolution),
            "resolved_at": payload.resolved_at,
            "case_id": case_id,
        }
        try:
            result = await store.query(UPDATE_CASE, params)
        except DatabaseError as e:
            raise self._fail("Failed to update case", e, case_id=case_id) from e
        self._log_outcome("updated", case_id, result.rowcount)

    async def delete_case(self, store: DataStore, case_id: str) -> None:
        """Remove one case by id."""
        try:
            result = await store.query(DELETE_CASE, {"case_id": case_id})
        except DatabaseError as e:
            raise self._fail("Failed to delete case", e, case_id=case_id) from e
        self._log_outcome("deleted", case_id, result.rowcount)

    @staticmethod
    def _log_outcome(action: str, case_id: str, rowcount: int) -> None:
        if rowcount == 0:
            logger.info("Case %s not %s: no matching row", case_id, action)
        else:
            logger.info("Case %s %s", case_id, action)

    @staticmethod
    def _fail(message: str, error: DatabaseError, **context) -> DatabaseError:
        context.update(error.context)
        logger.error("%s: %s", message, context)
        return DatabaseError(message=message, context=context)


# ── Singleton Instance ────────────────────────────────────────────────────
case_service = CaseService()
