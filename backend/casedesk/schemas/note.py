"""
CaseDesk Backend: Note Request/Response Schemas
===============================================

What:  Pydantic models for the /api/notes endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field


class NoteRecord(BaseModel):
    """
    What:  One row of the ``notes`` table.
    Who:   Returned as list items by GET /api/notes and as the body of
           POST /api/notes (with the id the store generated).
    """
    id: int = Field(description="Store-generated note identifier")
    category: Optional[str] = Field(default=None, description="Note category")
    content: Optional[str] = Field(default=None, description="Sanitized note body")

    model_config = {"from_attributes": True}


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    category: Optional[str] = None
    content: Optional[str] = None


class NoteUpdate(BaseModel):
    """Body of PUT /api/notes/{id}. Only the content is editable."""
    content: Optional[str] = None
