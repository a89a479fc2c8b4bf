"""
Creator Swipes Backend — Authentication Utilities
==================================================

What:  Password hashing, access-token signing/verification, and the FastAPI
       dependency that protects routes.
Who:   AuthService (hash check + token issue) and every protected route
       (via Depends(get_current_user_id)).

Token format:
    HS256 JWT signed with settings.jwt_secret_key
    {
        "sub": "<user uuid>",
        "iat": <issued at>,
        "exp": <issued at + jwt_expire_days>
    }

Header format:
    Authorization: <jwt>            ← original wire format, no scheme
    Authorization: Bearer <jwt>     ← also accepted

Failure mapping:
    header missing/empty      → AuthenticationRequiredError (401)
    token invalid or expired  → InvalidTokenError (403)

Usage:
    @router.get("/secure")
    async def secure(user_id: UUID = Depends(get_current_user_id)):
        ...
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Request

from app.config import settings
from app.exceptions import AuthenticationRequiredError, InvalidTokenError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


# ── Passwords ─────────────────────────────────────────────────────────────

def hash_password(password: str) -> str:
    """Returns a salted bcrypt hash suitable for the users.password column."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Compares a plaintext password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error, so a
    corrupt user row cannot be told apart from a wrong password.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ── Tokens ────────────────────────────────────────────────────────────────

def create_access_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Signs a token identifying `user_id`, valid for jwt_expire_days by default."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.jwt_expire_days)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verifies signature and expiry and returns the user id carried in `sub`.

    Raises:
        InvalidTokenError: bad signature, expired, malformed, or no usable subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError(message="Token has expired")
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(context={"reason": type(exc).__name__})

    try:
        return uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise InvalidTokenError(context={"reason": "subject is not a user id"})


def _extract_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "").strip()
    if header.lower().startswith(BEARER_PREFIX):
        header = header[len(BEARER_PREFIX):].strip()
    return header or None


# ── FastAPI Dependencies ──────────────────────────────────────────────────

async def get_current_user_id(request: Request) -> uuid.UUID:
    """
    Dependency for protected routes: returns the caller's user id.

    The id is also stored on request.state.user_id for middleware and logs.
    """
    token = _extract_token(request)
    if token is None:
        raise AuthenticationRequiredError()

    user_id = decode_access_token(token)
    request.state.user_id = user_id
    return user_id

