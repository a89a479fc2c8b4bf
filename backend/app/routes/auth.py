"""
Creator Swipes Backend — Login Route
=====================================

What:  POST /login — exchanges a username and password for an access token.
How:   Validates the body, delegates to AuthService, returns {"token": ...}.

The returned token is sent back verbatim in the Authorization header of
protected requests.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.common import ErrorResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"description": "Malformed request body", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Log in and receive an access token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await auth_service.login(db, username=body.username, password=body.password)
