"""Subject endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.schemas.common import MessageResponse
from app.schemas.subject import SubjectCreate, SubjectResponse, SubjectUpdate
from app.services.subject import SubjectService

router = APIRouter()


@router.get("", response_model=list[SubjectResponse])
def list_subjects(
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    section_id: int | None = Query(None),
):
    """List subjects, optionally for one section."""
    return SubjectService(db).list_subjects(section_id)


@router.post("", response_model=SubjectResponse)
def create_subject(
    request: SubjectCreate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a subject. min_grade defaults to half of max_grade."""
    return SubjectService(db).create_subject(request)


@router.patch("/{subject_id}", response_model=SubjectResponse)
def update_subject(
    subject_id: int,
    request: SubjectUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a subject."""
    return SubjectService(db).update_subject(subject_id, request)


@router.delete("/{subject_id}", response_model=MessageResponse)
def delete_subject(
    subject_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a subject and its grades."""
    SubjectService(db).delete_subject(subject_id)
    return MessageResponse(message="Subject deleted successfully")
