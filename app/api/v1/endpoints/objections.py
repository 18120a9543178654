"""Objection endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import CurrentAdmin
from app.models.objection import ObjectionStatus
from app.schemas.common import MessageResponse
from app.schemas.objection import ObjectionCreate, ObjectionResponse, ObjectionUpdate
from app.services.objection import ObjectionService

router = APIRouter()


@router.post("", response_model=ObjectionResponse)
def create_objection(
    request: ObjectionCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Submit an objection to a published result. Public."""
    return ObjectionService(db).create_objection(request)


@router.get("", response_model=list[ObjectionResponse])
def list_objections(
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    status: ObjectionStatus | None = Query(None),
):
    """List objections, newest first."""
    return ObjectionService(db).list_objections(status)


@router.patch("/{objection_id}", response_model=ObjectionResponse)
def update_objection(
    objection_id: int,
    request: ObjectionUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Review an objection."""
    return ObjectionService(db).update_objection(objection_id, request)


@router.delete("/{objection_id}", response_model=MessageResponse)
def delete_objection(
    objection_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an objection."""
    ObjectionService(db).delete_objection(objection_id)
    return MessageResponse(message="Objection deleted successfully")
