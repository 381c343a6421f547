"""
CaseDesk Backend: Login Schemas
===============================
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Body of POST /api/login. A missing password is a failed login, not a malformed body."""
    password: Optional[str] = Field(default=None, description="Admin password")


class TokenResponse(BaseModel):
    """
    What:  Successful login result.
    How:   Clients send the token back as ``Authorization: Bearer <token>``.
    """
    token: str = Field(description="Signed bearer token, valid for 24 hours by default")
