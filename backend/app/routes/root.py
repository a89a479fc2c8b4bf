"""
Creator Swipes Backend — Root Routes
=====================================

What:  The plain-text greeting and the token smoke-test endpoint.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.auth import get_current_user_id
from app.schemas.common import ErrorResponse

router = APIRouter(tags=["Root"])


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def home() -> str:
    return "Hello, Creator Swipes!"


@router.get(
    "/secure",
    response_class=PlainTextResponse,
    responses={
        401: {"description": "No token", "model": ErrorResponse},
        403: {"description": "Invalid or expired token", "model": ErrorResponse},
    },
    summary="Check that a token is accepted",
)
async def secure(user_id: UUID = Depends(get_current_user_id)) -> str:
    return "Secure data"
