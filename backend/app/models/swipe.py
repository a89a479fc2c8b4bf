"""
Creator Swipes Backend — Swipe SQLAlchemy Model
================================================

What:  ORM model representing the `swipes` table: a saved link with metadata.
Who:   Written by SwipeService; referenced (by id only) from collections.

`user_id` is an opaque string supplied by the client. It is deliberately not a
foreign key: swipes may be written for ids the users table does not know.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Swipe(Base):
    """A bookmarked link tagged by platform. Never updated once written."""

    __tablename__ = "swipes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    platform: Mapped[str] = mapped_column(String(100), nullable=False)
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Swipe(id={self.id}, platform='{self.platform}', user_id='{self.user_id}')>"
