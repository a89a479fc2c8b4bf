"""
Creator Swipes Backend — Collection Service
============================================

What:  Create, list, rename, delete, and append-to for user-owned collections.
Who:   Called by the routes in app.routes.collections with the caller's id.

Ownership:
    Every lookup is `WHERE id = :id AND created_by = :caller`. A collection
    owned by someone else is therefore indistinguishable from a missing one
    and yields NotFoundError (404).

Quotas:
    create   → COUNT(*) of the caller's collections vs. max_collections
    add_item → len(items) vs. max_swipes_per_collection
    Limits come from the caller's users row; a missing row or NULL column
    falls back to settings.default_max_*. The check and the write are two
    separate round trips with no isolation, so concurrent requests can
    overshoot a quota.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError, NotFoundError, QuotaExceededError
from app.models.collection import Collection
from app.models.user import User
from app.schemas.collection import (
    CollectionCreate,
    CollectionItemAdd,
    CollectionResponse,
    CollectionUpdate,
)
from app.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class CollectionService:
    """
    Business logic for collection operations.

    Error Handling Strategy:
        SQLAlchemy errors are logged and wrapped in DatabaseError (→ 500).
        NotFoundError and QuotaExceededError propagate unchanged.
    """

    # ── Quota helpers ─────────────────────────────────────────────────────

    async def _load_user(self, db: AsyncSession, user_id: uuid.UUID) -> Optional[User]:
        try:
            return await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error loading user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

    async def collection_limit(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        """Maximum number of collections `user_id` may own."""
        user = await self._load_user(db, user_id)
        if user is not None and user.max_collections is not None:
            return user.max_collections
        return settings.default_max_collections

    async def swipe_limit(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        """Maximum number of swipe ids per collection for `user_id`."""
        user = await self._load_user(db, user_id)
        if user is not None and user.max_swipes_per_collection is not None:
            return user.max_swipes_per_collection
        return settings.default_max_swipes_per_collection

    async def _get_owned(
        self, db: AsyncSession, collection_id: uuid.UUID, user_id: uuid.UUID
    ) -> Collection:
        """
        SELECT ... WHERE id = :collection_id AND created_by = :user_id

        Raises:
            NotFoundError: no such collection for this owner
        """
        try:
            result = await db.execute(
                select(Collection).where(
                    Collection.id == collection_id,
                    Collection.created_by == user_id,
                )
            )
            collection = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching collection %s: %s", collection_id, str(e))
            raise DatabaseError(context={"collection_id": str(collection_id)})

        if collection is None:
            logger.info("Collection %s not found for user %s", collection_id, user_id)
            raise NotFoundError(resource="collection", resource_id=str(collection_id))
        return collection

    async def _commit(self, db: AsyncSession, action: str, **context) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error while trying to %s: %s | %s", action, str(e), context)
            raise DatabaseError(context={"action": action, **context})

    # ── Operations ────────────────────────────────────────────────────────

    async def create(
        self, db: AsyncSession, user_id: uuid.UUID, data: CollectionCreate
    ) -> MessageResponse:
        """
        Count-then-insert.

        Raises:
            QuotaExceededError: caller already owns max_collections (→ 403)
        """
        limit = await self.collection_limit(db, user_id)

        try:
            result = await db.execute(
                select(func.count(Collection.id)).where(Collection.created_by == user_id)
            )
            owned = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error counting collections for %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

        if owned >= limit:
            logger.info("User %s hit collection limit (%d/%d)", user_id, owned, limit)
            raise QuotaExceededError(message="Collection limit reached", limit=limit)

        now = datetime.now(timezone.utc)
        collection = Collection(
            name=data.name,
            description=data.description,
            created_by=user_id,
            items=[],
            created_at=now,
            updated_at=now,
        )
        db.add(collection)
        await self._commit(db, "create collection", user_id=str(user_id))

        logger.info("Collection %s created by user %s", collection.id, user_id)
        return MessageResponse(message="Collection created successfully")

    async def list_for_user(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> List[CollectionResponse]:
        """All collections owned by the caller, oldest first, unpaginated."""
        try:
            result = await db.execute(
                select(Collection)
                .where(Collection.created_by == user_id)
                .order_by(Collection.created_at)
            )
            collections = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing collections for %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

        return [CollectionResponse.model_validate(c) for c in collections]

    async def update(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        collection_id: uuid.UUID,
        data: CollectionUpdate,
    ) -> MessageResponse:
        """Overwrites name and description and bumps updated_at."""
        collection = await self._get_owned(db, collection_id, user_id)

        collection.name = data.name
        collection.description = data.description
        collection.updated_at = datetime.now(timezone.utc)
        await self._commit(db, "update collection", collection_id=str(collection_id))

        logger.info("Collection %s updated", collection_id)
        return MessageResponse(message="Collection updated successfully")

    async def delete(
        self, db: AsyncSession, user_id: uuid.UUID, collection_id: uuid.UUID
    ) -> MessageResponse:
        """
        Ownership lookup, then DELETE by id alone.

        Referenced swipes are left in place.
        """
        await self._get_owned(db, collection_id, user_id)

        try:
            await db.execute(delete(Collection).where(Collection.id == collection_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting collection %s: %s", collection_id, str(e))
            raise DatabaseError(context={"collection_id": str(collection_id)})
        await self._commit(db, "delete collection", collection_id=str(collection_id))

        logger.info("Collection %s deleted by user %s", collection_id, user_id)
        return MessageResponse(message="Collection deleted successfully")

    async def add_item(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        collection_id: uuid.UUID,
        data: CollectionItemAdd,
    ) -> MessageResponse:
        """
        Appends a swipe id to the collection.

        The swipe id is not checked for existence or ownership, and duplicates
        are allowed.

        Raises:
            NotFoundError: collection missing or not owned (→ 404)
            QuotaExceededError: collection already holds max_swipes_per_collection (→ 403)
        """
        collection = await self._get_owned(db, collection_id, user_id)
        limit = await self.swipe_limit(db, user_id)

        current = list(collection.items or [])
        if len(current) >= limit:
            logger.info(
                "Collection %s hit swipe limit (%d/%d)", collection_id, len(current), limit
            )
            raise QuotaExceededError(
                message="Swipe limit reached for this collection", limit=limit
            )

        collection.items = current + [data.swipe_id]
        await self._commit(db, "add swipe to collection", collection_id=str(collection_id))

        logger.info("Swipe %s added to collection %s", data.swipe_id, collection_id)
        return MessageResponse(message="Swipe added to collection successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
collection_service = CollectionService()
