"""Administrator authentication service."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AuthenticationError, ConflictError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.admin import Admin
from app.schemas.auth import AdminResponse, LoginRequest, TokenResponse


class AuthService:
    """Authentication service."""

    def __init__(self, db: Session):
        self.db = db

    def login(self, request: LoginRequest) -> TokenResponse:
        """Authenticate an administrator and return an access token."""
        result = self.db.execute(
            select(Admin).where(Admin.username == request.username)
        )
        admin = result.scalar_one_or_none()

        if not admin:
            raise AuthenticationError("Invalid username or password")

        if not verify_password(request.password, admin.password_hash):
            raise AuthenticationError("Invalid username or password")

        if not admin.is_active:
            raise AuthenticationError("Admin account is deactivated")

        # Update last login
        admin.last_login_at = datetime.now(timezone.utc)
        self.db.flush()

        return TokenResponse(
            access_token=create_access_token(admin.id, admin.username),
            token_type="bearer",
            expires_in=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

    def create_admin(self, username: str, password: str) -> AdminResponse:
        """Create an administrator account."""
        existing = self.db.execute(
            select(Admin).where(Admin.username == username)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError(f"Admin '{username}' already exists")

        admin = Admin(username=username, password_hash=hash_password(password))
        self.db.add(admin)
        self.db.flush()
        self.db.refresh(admin)
        return AdminResponse.model_validate(admin)
