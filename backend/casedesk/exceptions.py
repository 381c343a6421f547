"""
CaseDesk Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the failure scenarios of the API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       JSON error responses with the matching HTTP status code.
Who:   Raised by services, the token service and the auth guard.

Exception Hierarchy:
    CaseDeskError (base)
    ├── AuthenticationRequiredError  → 401 Unauthorized (no bearer token)
    ├── InvalidCredentialsError      → 401 Unauthorized (wrong login password)
    ├── ForbiddenError               → 403 Forbidden (token rejected)
    ├── TokenVerificationError       → raised by TokenService, mapped to 403
    └── DatabaseError                → 500 Internal Server Error

The context dict is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


class CaseDeskError(Exception):
    """
    Base exception for all CaseDesk application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationRequiredError(CaseDeskError):
    """
    Raised when a protected endpoint is called without a bearer token.

    When:    No ``Authorization`` header, or a header with no token segment.
    HTTP:    401 Unauthorized, with ``WWW-Authenticate: Bearer``.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(CaseDeskError):
    """Raised by the login route when the submitted password does not match."""

    def __init__(
        self,
        message: str = "Invalid password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TokenVerificationError(CaseDeskError):
    """
    The single verification failure outcome of ``TokenService.verify``.

    Malformed tokens, bad signatures and expired tokens all raise this one
    type. The underlying reason is kept in ``context`` for logging only.
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(CaseDeskError):
    """
    Raised by the auth guard when a presented token fails verification.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CaseDeskError):
    """
    Raised when a database statement fails.

    When:    Connection refused or timed out, pool exhausted, constraint
             violation, driver error.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client names the failed operation only.
        The driver message and error code stay in ``context`` and are logged
        server-side with the request id.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
