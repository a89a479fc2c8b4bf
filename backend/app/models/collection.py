"""
Creator Swipes Backend — Collection SQLAlchemy Model
=====================================================

What:  ORM model representing the `collections` table.
Who:   Read and written by CollectionService only.

Table Design:
    - created_by: owning user; every query in CollectionService filters on it
    - items: ordered JSON array of swipe id strings (references, not embedded
      swipes). The list is replaced wholesale on append, since in-place
      mutation of a JSON column is not tracked by the ORM.
    - Deleting a collection leaves the referenced swipes untouched.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Collection(Base):
    """A named, described grouping of swipe references owned by one user."""

    __tablename__ = "collections"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
    )

    items: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<Collection(id={self.id}, name='{self.name}', "
            f"created_by={self.created_by}, items={len(self.items or [])})>"
        )
