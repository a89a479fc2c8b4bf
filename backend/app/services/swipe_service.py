"""
Creator Swipes Backend — Swipe Service
=======================================

What:  Persists new swipes (saved links).
Who:   Called by POST /addSwipe.

The supplied user id is stored verbatim. It is not checked against the users
table; whether the caller must own it is decided by the route
(settings.require_auth_for_swipes).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.swipe import Swipe
from app.schemas.common import MessageResponse
from app.schemas.swipe import SwipeCreate

logger = logging.getLogger(__name__)


class SwipeService:

    async def add_swipe(self, db: AsyncSession, data: SwipeCreate) -> Swipe:
        """
        Inserts one swipe with a server-assigned created_at.

        Raises:
            DatabaseError: "Failed to add swipe" for any persistence failure (→ 500)
        """
        swipe = Swipe(
            user_id=data.user_id,
            url=data.url,
            platform=data.platform,
            tags=list(data.tags),
            notes=data.notes,
            created_at=datetime.now(timezone.utc),
        )
        try:
            db.add(swipe)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to persist swipe for user_id=%s: %s", data.user_id, str(e))
            raise DatabaseError(
                message="Failed to add swipe",
                context={"error_type": type(e).__name__},
            )

        logger.info("Swipe %s added (user_id=%s, platform=%s)", swipe.id, swipe.user_id, swipe.platform)
        return swipe

    async def create(self, db: AsyncSession, data: SwipeCreate) -> MessageResponse:
        await self.add_swipe(db, data)
        return MessageResponse(message="Swipe added successfully")


swipe_service = SwipeService()
