"""
CaseDesk Backend: Note SQLAlchemy Model
=======================================

What:  ORM declaration of the ``notes`` table.
Who:   Read by NoteService through ``Note.__table__`` and by
       ``DataStore.create_all`` for local schemas.

Table Design:
    - id: Autoincrement integer generated by the database and handed back to
      the client on insert. Listing orders by it, so it doubles as the
      creation order.
    - category: Free-form tag chosen by the client.
    - content: Free text, sanitized before every write.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from casedesk.database import Base


class Note(Base):
    """
    A categorized free-text note.

    Lifecycle:
        1. Inserted with category + content; the store assigns the id
        2. Content-only updates by id
        3. Hard-deleted by id
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-generated identifier",
    )

    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Note body (sanitized)",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, category='{self.category}')>"
