"""Section endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.common import MessageResponse
from app.schemas.section import SectionCreate, SectionResponse, SectionUpdate
from app.services.section import SectionService

router = APIRouter()


@router.get("", response_model=list[SectionResponse])
def list_sections(db: Annotated[Session, Depends(get_db)]):
    """List sections. Public, used by the objection form."""
    return SectionService(db).list_sections()


@router.post("", response_model=SectionResponse)
def create_section(
    request: SectionCreate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a section."""
    return SectionService(db).create_section(request)


@router.patch("/{section_id}", response_model=SectionResponse)
def update_section(
    section_id: int,
    request: SectionUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a section."""
    return SectionService(db).update_section(section_id, request)


@router.delete("/{section_id}", response_model=MessageResponse)
def delete_section(
    section_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a section that has no students."""
    SectionService(db).delete_section(section_id)
    return MessageResponse(message="Section deleted successfully")
