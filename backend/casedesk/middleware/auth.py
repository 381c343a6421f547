"""
CaseDesk Backend: Auth Guard
============================

What:  Request-level gate in front of every create/update/delete endpoint.
How:   A FastAPI dependency, so it runs only on the routes that declare it.
       Read endpoints and login never see it.

Request states:
    no token                    → AuthenticationRequiredError (401)
    token fails verification    → ForbiddenError (403)
    token verifies              → claims stored on request.state.claims,
                                  request continues

Token extraction:
    The token is the second whitespace-separated segment of the
    ``Authorization`` header. The scheme word in front of it is not checked,
    so ``Bearer abc`` and ``Token abc`` both yield ``abc``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from casedesk.exceptions import (
    AuthenticationRequiredError,
    ForbiddenError,
    TokenVerificationError,
)
from casedesk.middleware.request_id import request_id_var
from casedesk.services.token_service import TokenService

logger = logging.getLogger(__name__)


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """
    Second segment of an ``Authorization`` header value, or None.

    Example:
        >>> extract_bearer_token("Bearer abc.def.ghi")
        'abc.def.ghi'
        >>> extract_bearer_token("Bearer") is None
        True
    """
    if not header_value:
        return None
    parts = header_value.split()
    if len(parts) < 2:
        return None
    return parts[1]


def get_token_service(request: Request) -> TokenService:
    """FastAPI dependency returning the application's TokenService."""
    return request.app.state.token_service


async def require_auth(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """
    Verify the request's bearer token and return its claims.

    Example usage in a route:
        @router.delete("/cases/{case_id}")
        async def delete_case(case_id: str, claims: dict = Depends(require_auth)):
            ...

    Raises:
        AuthenticationRequiredError: header missing or has no token segment
        ForbiddenError: token malformed, badly signed or expired
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise AuthenticationRequiredError()

    try:
        claims = token_service.verify(token)
    except TokenVerificationError as e:
        logger.warning(
            "[%s] Rejected token on %s %s (%s)",
            request_id_var.get(""),
            request.method,
            request.url.path,
            e.context.get("reason", "unknown"),
        )
        raise ForbiddenError() from e

    request.state.claims = claims
    return claims
