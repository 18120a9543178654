"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.security import verify_access_token
from app.models.admin import Admin


def get_current_admin(
    db: Annotated[Session, Depends(get_db)],
    authorization: str = Header(..., description="Bearer token"),
) -> Admin:
    """Extract and validate the current administrator from JWT token."""
    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")

    token = authorization[7:]  # Remove "Bearer " prefix
    payload = verify_access_token(token)

    if not payload:
        raise AuthenticationError("Invalid or expired token")

    admin_id_str = payload.get("sub")
    if not admin_id_str:
        raise AuthenticationError("Invalid token payload")

    try:
        admin_id = int(admin_id_str)
    except ValueError:
        raise AuthenticationError("Invalid admin ID in token")

    result = db.execute(select(Admin).where(Admin.id == admin_id))
    admin = result.scalar_one_or_none()

    if not admin:
        raise AuthenticationError("Admin not found")

    if not admin.is_active:
        raise AuthenticationError("Admin account is deactivated")

    return admin


# Type alias for dependency injection
CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]
