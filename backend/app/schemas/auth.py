"""Creator Swipes Backend — Login request/response schemas."""

from pydantic import BaseModel, Field

from app.schemas.common import RequestModel


class LoginRequest(RequestModel):
    username: str = Field(min_length=1, description="Exact username")
    # Passwords are compared verbatim; whitespace is significant
    password: str = Field(min_length=1, description="Plaintext password")

    model_config = {"str_strip_whitespace": False}


class TokenResponse(BaseModel):
    """Returned by POST /login. The token goes into the Authorization header as-is."""
    token: str = Field(description="Signed access token (JWT)")
