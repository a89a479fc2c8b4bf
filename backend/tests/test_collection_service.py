"""
Creator Swipes Backend — Collection Service Unit Tests
=======================================================

What:  Tests for CollectionService quota, ownership and persistence handling.
How:   Uses mock DB sessions (no real DB).

What we test:
    ✅ Quota resolution: user record first, configured default as fallback
    ✅ Create rejected at the collection quota without inserting
    ✅ Append rejected at the swipe quota, list left unchanged
    ✅ Missing/not-owned collection raises NotFoundError
    ✅ Commit failures surface as DatabaseError
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, QuotaExceededError
from app.schemas.collection import CollectionCreate, CollectionItemAdd, CollectionUpdate
from app.services.collection_service import CollectionService


def _scalar_result(value):
    result = MagicMock()
    result.scalar_one.return_value = value
    result.scalar_one_or_none.return_value = value
    return result


def _collection(owner: uuid.UUID, items=None):
    collection = MagicMock()
    collection.id = uuid.uuid4()
    collection.created_by = owner
    collection.items = list(items or [])
    collection.name = "Hooks"
    collection.description = "Opening lines"
    collection.updated_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return collection


class TestQuotaResolution:

    def setup_method(self):
        self.service = CollectionService()

    @pytest.mark.asyncio
    async def test_user_field_wins(self, mock_db_session):
        user = MagicMock(max_collections=2, max_swipes_per_collection=3)
        mock_db_session.get.return_value = user

        assert await self.service.collection_limit(mock_db_session, uuid.uuid4()) == 2
        assert await self.service.swipe_limit(mock_db_session, uuid.uuid4()) == 3

    @pytest.mark.asyncio
    async def test_missing_user_falls_back_to_defaults(self, mock_db_session):
        mock_db_session.get.return_value = None

        assert await self.service.collection_limit(mock_db_session, uuid.uuid4()) == 5
        assert await self.service.swipe_limit(mock_db_session, uuid.uuid4()) == 20

    @pytest.mark.asyncio
    async def test_null_field_falls_back_to_default(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock(max_collections=None, max_swipes_per_collection=None)

        assert await self.service.collection_limit(mock_db_session, uuid.uuid4()) == 5
        assert await self.service.swipe_limit(mock_db_session, uuid.uuid4()) == 20


class TestCreate:

    def setup_method(self):
        self.service = CollectionService()
        self.body = CollectionCreate(name="Hooks", description="Opening lines")

    @pytest.mark.asyncio
    async def test_create_under_quota(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(4)

        result = await self.service.create(mock_db_session, uuid.uuid4(), self.body)

        assert result.message == "Collection created successfully"
        mock_db_session.add.assert_called_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_at_quota_rejected(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(5)

        with pytest.raises(QuotaExceededError, match="Collection limit reached"):
            await self.service.create(mock_db_session, uuid.uuid4(), self.body)

        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(0)
        mock_db_session.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))

        with pytest.raises(DatabaseError):
            await self.service.create(mock_db_session, uuid.uuid4(), self.body)

        mock_db_session.rollback.assert_awaited_once()


class TestUpdateDelete:

    def setup_method(self):
        self.service = CollectionService()

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, mock_db_session):
        owner = uuid.uuid4()
        collection = _collection(owner)
        mock_db_session.execute.return_value = _scalar_result(collection)

        await self.service.update(
            mock_db_session, owner, collection.id,
            CollectionUpdate(name="Renamed", description="New"),
        )

        assert collection.name == "Renamed"
        assert collection.description == "New"
        assert collection.updated_at > datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(None)

        with pytest.raises(NotFoundError, match="Collection not found"):
            await self.service.update(
                mock_db_session, uuid.uuid4(), uuid.uuid4(),
                CollectionUpdate(name="x", description="y"),
            )

    @pytest.mark.asyncio
    async def test_delete_runs_second_query(self, mock_db_session):
        owner = uuid.uuid4()
        collection = _collection(owner)
        mock_db_session.execute.return_value = _scalar_result(collection)

        result = await self.service.delete(mock_db_session, owner, collection.id)

        assert result.message == "Collection deleted successfully"
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_not_found_skips_delete(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.delete(mock_db_session, uuid.uuid4(), uuid.uuid4())

        assert mock_db_session.execute.await_count == 1


class TestAddItem:

    def setup_method(self):
        self.service = CollectionService()

    @pytest.mark.asyncio
    async def test_appends_in_order(self, mock_db_session):
        owner = uuid.uuid4()
        collection = _collection(owner, items=["s1"])
        mock_db_session.execute.return_value = _scalar_result(collection)

        await self.service.add_item(mock_db_session, owner, collection.id, CollectionItemAdd(swipe_id="s2"))

        assert collection.items == ["s1", "s2"]
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_full_collection_rejected(self, mock_db_session):
        owner = uuid.uuid4()
        collection = _collection(owner, items=[f"s{i}" for i in range(20)])
        mock_db_session.execute.return_value = _scalar_result(collection)

        with pytest.raises(QuotaExceededError, match="Swipe limit reached"):
            await self.service.add_item(
                mock_db_session, owner, collection.id, CollectionItemAdd(swipe_id="s20")
            )

        assert len(collection.items) == 20
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_per_user_swipe_limit(self, mock_db_session):
        owner = uuid.uuid4()
        collection = _collection(owner, items=["s1", "s2"])
        mock_db_session.execute.return_value = _scalar_result(collection)
        mock_db_session.get.return_value = MagicMock(max_swipes_per_collection=2)

        with pytest.raises(QuotaExceededError):
            await self.service.add_item(
                mock_db_session, owner, collection.id, CollectionItemAdd(swipe_id="s3")
            )
