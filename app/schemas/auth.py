"""Authentication schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import BaseSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    username: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class TokenResponse(BaseSchema):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminResponse(BaseSchema):
    """Administrator response schema."""

    id: int
    username: str
    is_active: bool
    last_login_at: datetime | None
