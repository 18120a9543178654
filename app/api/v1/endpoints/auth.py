"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.auth import AdminResponse, LoginRequest, TokenResponse
from app.services.auth import AuthService

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Authenticate an administrator and return an access token.
    """
    service = AuthService(db)
    return service.login(request)


@router.get("/me", response_model=AdminResponse)
def get_me(admin: CurrentAdmin):
    """Get the currently authenticated administrator."""
    return AdminResponse.model_validate(admin)
