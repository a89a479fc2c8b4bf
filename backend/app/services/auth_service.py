"""
Creator Swipes Backend — Auth Service
======================================

What:  Verifies username/password pairs and issues access tokens.
Who:   Called by POST /login.

Flow:
    SELECT * FROM users WHERE username = :username
    → bcrypt compare → sign token with the user's id

An unknown username and a wrong password raise the same
InvalidCredentialsError so responses do not reveal which usernames exist.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import create_access_token, verify_password
from app.exceptions import DatabaseError, InvalidCredentialsError
from app.models.user import User
from app.schemas.auth import TokenResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless login logic."""

    async def login(self, db: AsyncSession, username: str, password: str) -> TokenResponse:
        """
        Exchanges credentials for a signed token.

        Raises:
            InvalidCredentialsError: unknown user or wrong password (→ 401)
            DatabaseError: the lookup failed (→ 500)
        """
        try:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login lookup: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login attempt for username=%r", username)
            raise InvalidCredentialsError()

        token = create_access_token(user.id)
        logger.info("Issued access token for user %s", user.id)
        return TokenResponse(token=token)


auth_service = AuthService()
