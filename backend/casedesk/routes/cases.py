"""
CaseDesk Backend: Case Route Handlers
=====================================

What:  HTTP surface for support cases.
How:   Each handler maps one verb + path onto one CaseService call. Writes
       declare the ``require_auth`` dependency; the list endpoint is public.

Routes:
    GET    /api/cases          → 200 [CaseRecord, ...] newest first
    POST   /api/cases          → 201 {"message": ...}        (auth)
    PUT    /api/cases/{id}     → 200 {"message": ...}        (auth)
    DELETE /api/cases/{id}     → 200 {"message": ...}        (auth)

Store failures become 500 through the global DatabaseError handler.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from casedesk.database import DataStore, get_store
from casedesk.middleware.auth import require_auth
from casedesk.schemas.case import CaseCreate, CaseRecord, CaseUpdate
from casedesk.schemas.common import ErrorResponse, MessageResponse
from casedesk.services.case_service import case_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Cases"])

_WRITE_ERRORS = {
    401: {"description": "Missing bearer token", "model": ErrorResponse},
    403: {"description": "Invalid or expired token", "model": ErrorResponse},
    500: {"description": "Database error", "model": ErrorResponse},
}


@router.get(
    "/cases",
    response_model=List[CaseRecord],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all cases, newest first",
)
async def list_cases(store: DataStore = Depends(get_store)) -> List[CaseRecord]:
    return await case_service.list_cases(store)


@router.post(
    "/cases",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses=_WRITE_ERRORS,
    summary="Create a case with a caller-assigned id",
    dependencies=[Depends(require_auth)],
)
async def create_case(
    payload: CaseCreate,
    store: DataStore = Depends(get_store),
) -> MessageResponse:
    """
    Create a case.

    The client supplies the id and the creation time. Description and
    resolution are sanitized before they are stored.
    """
    await case_service.create_case(store, payload)
    return MessageResponse(message="Case created successfully")


@router.put(
    "/cases/{case_id}",
    response_model=MessageResponse,
    responses=_WRITE_ERRORS,
    summary="Replace the editable fields of a case",
    dependencies=[Depends(require_auth)],
)
async def update_case(
    case_id: str,
    payload: CaseUpdate,
    store: DataStore = Depends(get_store),
) -> MessageResponse:
    """
    Full update of title, category, priority, description, resolution and
    resolved_at. An unknown id still answers 200.
    """
    await case_service.update_case(store, case_id, payload)
    return MessageResponse(message="Case updated successfully")


@router.delete(
    "/cases/{case_id}",
    response_model=MessageResponse,
    responses=_WRITE_ERRORS,
    summary="Delete a case",
    dependencies=[Depends(require_auth)],
)
async def delete_case(
    case_id: str,
    store: DataStore = Depends(get_store),
) -> MessageResponse:
    await case_service.delete_case(store, case_id)
    return MessageResponse(message="Case deleted successfully")
