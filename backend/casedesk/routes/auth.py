"""
CaseDesk Backend: Login Route
=============================

What:  POST /api/login exchanges the admin password for a bearer token.
How:   Constant-time comparison against ``Settings.admin_password``; on a
       match the TokenService signs ``{"role": "admin"}``.

Responses:
    200 {"token": "<jwt>"}
    401 {"error": "Invalid password", ...}   (wrong or missing password,
                                             no token issued)
"""

import logging
import secrets

from fastapi import APIRouter, Depends, Request

from casedesk.exceptions import InvalidCredentialsError
from casedesk.middleware.auth import get_token_service
from casedesk.middleware.request_id import request_id_var
from casedesk.schemas.auth import LoginRequest, TokenResponse
from casedesk.schemas.common import ErrorResponse
from casedesk.services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

ADMIN_ROLE = "admin"


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"description": "Wrong password", "model": ErrorResponse}},
    summary="Log in with the admin password",
)
async def login(
    payload: LoginRequest,
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    expected = request.app.state.settings.admin_password
    submitted = payload.password or ""
    if not secrets.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("[%s] Failed login attempt", request_id_var.get(""))
        raise InvalidCredentialsError()

    token = token_service.issue({"role": ADMIN_ROLE})
    logger.info("[%s] Admin login succeeded", request_id_var.get(""))
    return TokenResponse(token=token)
