"""
CaseDesk Backend: Case Request/Response Schemas
===============================================

What:  Pydantic models for the /api/cases endpoints.
How:   FastAPI validates request bodies against these models and serializes
       list results through ``CaseRecord``.

Input policy:
    Only the case id is required. Every other field is optional and binds as
    NULL when omitted; database constraints decide whether that is accepted.

Timestamps:
    Offset-aware input is converted to UTC before it reaches the store, and
    naive values read back are tagged as UTC. Ordering by ``created_at`` then
    follows the actual instant on every backend, including those that keep
    no offset in the column.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes become UTC; naive ones are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CaseRecord(BaseModel):
    """
    What:  One row of the ``cases`` table as returned by GET /api/cases.
    """
    id: str = Field(description="Caller-assigned case identifier")
    title: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    description: Optional[str] = None
    resolution: Optional[str] = None
    created_at: datetime = Field(description="When the case was opened (UTC)")
    resolved_at: Optional[datetime] = Field(default=None, description="Null while open")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "resolved_at")
    @classmethod
    def as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class CaseUpdate(BaseModel):
    """
    What:  Body of PUT /api/cases/{id}.
    How:   A full update: every field below is written, omitted ones as NULL.
    """
    title: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    description: Optional[str] = None
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None

    @field_validator("resolved_at")
    @classmethod
    def resolved_at_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class CaseCreate(CaseUpdate):
    """
    What:  Body of POST /api/cases.
    How:   The web client generates the id (a millisecond timestamp) and sends
           it either as a number or a string; both are stored as text.
    """
    id: Union[int, str] = Field(description="Caller-assigned case identifier")
    created_at: Optional[datetime] = Field(
        default=None,
        description="Opening time; the server uses the current UTC time when omitted",
    )

    @field_validator("id")
    @classmethod
    def normalize_id(cls, v: Union[int, str]) -> str:
        """
        Stores numeric and string ids in the same text column.

        The value is kept exactly as sent so later PUT/DELETE calls with the
        same id find the row; only blank ids are refused.
        """
        value = str(v)
        if not value.strip():
            raise ValueError("id must not be blank")
        return value

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)
