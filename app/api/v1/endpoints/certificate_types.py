"""Certificate type endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.section import CertificateTypeCreate, CertificateTypeResponse
from app.services.section import SectionService

router = APIRouter()


@router.get("", response_model=list[CertificateTypeResponse])
def list_certificate_types(db: Annotated[Session, Depends(get_db)]):
    """List certificate types."""
    return SectionService(db).list_certificate_types()


@router.post("", response_model=CertificateTypeResponse)
def create_certificate_type(
    request: CertificateTypeCreate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a certificate type."""
    return SectionService(db).create_certificate_type(request)
