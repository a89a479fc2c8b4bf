"""
Creator Swipes Backend — Collection Routes
===========================================

What:  CRUD for the caller's collections plus appending swipe ids.
How:   Every route requires a token; the caller's id is passed to
       CollectionService, which scopes every lookup to that owner.

Status codes:
    201  created                     (createCollection)
    200  ok                          (everything else)
    401  no token / 403 bad token    (auth dependency)
    403  quota reached               (createCollection, addToCollection)
    404  missing or not owned        (update, delete, addToCollection)
    400  malformed body or id
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user_id
from app.database import get_db_session
from app.schemas.collection import (
    CollectionCreate,
    CollectionItemAdd,
    CollectionResponse,
    CollectionUpdate,
)
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.collection_service import collection_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Collections"],
    responses={
        401: {"description": "No token", "model": ErrorResponse},
        403: {"description": "Invalid token or quota reached", "model": ErrorResponse},
    },
)


@router.post(
    "/createCollection",
    status_code=201,
    response_model=MessageResponse,
    summary="Create a collection",
)
async def create_collection(
    body: CollectionCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await collection_service.create(db, user_id, body)


@router.get(
    "/getCollections",
    response_model=List[CollectionResponse],
    summary="List the caller's collections",
)
async def get_collections(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[CollectionResponse]:
    return await collection_service.list_for_user(db, user_id)


@router.put(
    "/updateCollection/{collection_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Collection not found", "model": ErrorResponse}},
    summary="Rename or re-describe a collection",
)
async def update_collection(
    collection_id: UUID,
    body: CollectionUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await collection_service.update(db, user_id, collection_id, body)


@router.delete(
    "/deleteCollection/{collection_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Collection not found", "model": ErrorResponse}},
    summary="Delete a collection",
)
async def delete_collection(
    collection_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await collection_service.delete(db, user_id, collection_id)


@router.post(
    "/addToCollection/{collection_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Collection not found", "model": ErrorResponse}},
    summary="Append a swipe id to a collection",
)
async def add_to_collection(
    collection_id: UUID,
    body: CollectionItemAdd,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await collection_service.add_item(db, user_id, collection_id, body)
