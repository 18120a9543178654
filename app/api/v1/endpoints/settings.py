"""Portal settings endpoints (admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.portal import PortalSettingsResponse, PortalSettingsUpdate
from app.services.portal import PortalService

router = APIRouter()


@router.get("", response_model=PortalSettingsResponse)
def get_settings(
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Get portal settings."""
    return PortalSettingsResponse.model_validate(PortalService(db).get_settings())


@router.patch("", response_model=PortalSettingsResponse)
def update_settings(
    request: PortalSettingsUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Open or close results, set the countdown end or the announcement."""
    return PortalService(db).update_settings(request)
