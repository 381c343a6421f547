"""
CaseDesk Backend: Case SQLAlchemy Model
=======================================

What:  ORM declaration of the ``cases`` table (support tickets).
Who:   Read by CaseService through ``Case.__table__`` and by
       ``DataStore.create_all`` for local schemas.

Table Design:
    - id: Assigned by the client at creation time (the web client uses a
      millisecond timestamp). Stored as a string so any opaque identifier fits.
    - description / resolution: Free text, sanitized before every write.
    - created_at: Supplied by the client; drives the newest-first listing.
    - resolved_at: NULL until the case is resolved.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from casedesk.database import Base


class Case(Base):
    """
    A support case.

    Lifecycle:
        1. Inserted with the full field set and a caller-chosen id
        2. Updated in place (all editable fields at once)
        3. Hard-deleted by id
    """

    __tablename__ = "cases"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Caller-assigned identifier",
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    priority: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Problem description (sanitized)",
    )
    resolution: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="How the case was resolved (sanitized)",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the case was opened",
    )
    resolved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the case was resolved; NULL while open",
    )

    # Listing is always newest first
    __table_args__ = (
        Index("idx_cases_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Case(id='{self.id}', priority='{self.priority}')>"
