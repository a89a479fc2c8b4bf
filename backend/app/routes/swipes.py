"""
Creator Swipes Backend — Swipe Routes
======================================

What:  POST /addSwipe — saves a bookmarked link.
How:   Validates the body, delegates to SwipeService, returns 201.

Authentication:
    The route is open by default: any caller can write a swipe under any
    userId, and the Authorization header is not read at all, so a stale token
    does not block the write. With REQUIRE_AUTH_FOR_SWIPES=true a valid token
    is required and userId must equal the caller's id.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user_id
from app.config import settings
from app.database import get_db_session
from app.exceptions import ForbiddenError
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.swipe import SwipeCreate
from app.services.swipe_service import swipe_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Swipes"])


async def get_swipe_caller_id(request: Request) -> Optional[UUID]:
    """
    Resolves the caller only while REQUIRE_AUTH_FOR_SWIPES is on.

    Enforcement off: None, without touching the header.
    Enforcement on: same as get_current_user_id (401 no token, 403 bad token).
    """
    if not settings.require_auth_for_swipes:
        return None
    return await get_current_user_id(request)


def ensure_swipe_owner(caller_id: Optional[UUID], user_id: str) -> None:
    """
    Raises:
        ForbiddenError: enforcement on and userId is not the caller (→ 403)
    """
    if caller_id is None:
        return
    if user_id != str(caller_id):
        raise ForbiddenError(
            message="Cannot add swipes for another user",
            context={"caller_id": str(caller_id), "user_id": user_id},
        )


@router.post(
    "/addSwipe",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed request body", "model": ErrorResponse},
        500: {"description": "Failed to add swipe", "model": ErrorResponse},
    },
    summary="Save a swipe",
)
async def add_swipe(
    body: SwipeCreate,
    caller_id: Optional[UUID] = Depends(get_swipe_caller_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    ensure_swipe_owner(caller_id, body.user_id)
    return await swipe_service.create(db, body)
