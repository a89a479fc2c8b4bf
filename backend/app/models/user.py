"""
Creator Swipes Backend — User SQLAlchemy Model
===============================================

What:  ORM model representing the `users` table.
Who:   Read by AuthService (login) and CollectionService (quota lookup).
When:  Rows are created by an external registration process; nothing in this
       service writes to the table.

Column notes:
    - password: bcrypt hash, never the plaintext
    - google_token / stripe_customer_id / two_fa_*: carried for the external
      OAuth, billing and 2FA processes; unused by the API itself
    - max_collections / max_swipes_per_collection: free-tier quotas; NULL
      means "use the configured default"
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """An account that can log in and own collections."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        nullable=False,
        comment="Login name, matched exactly",
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    google_token: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    stripe_customer_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    two_fa_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    two_fa_secret: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # ── Free-tier quotas ──────────────────────────────────────────────────
    max_collections: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        default=5,
        comment="Maximum number of collections this user may own",
    )
    max_swipes_per_collection: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        default=20,
        comment="Maximum number of swipe ids per collection",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
