"""Objection handling service."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.objection import Objection, ObjectionStatus
from app.models.section import Section
from app.schemas.objection import ObjectionCreate, ObjectionResponse, ObjectionUpdate

logger = logging.getLogger(__name__)


class ObjectionService:
    """Objection service. Status changes are unrestricted."""

    def __init__(self, db: Session):
        self.db = db

    def create_objection(self, request: ObjectionCreate) -> ObjectionResponse:
        """File a new objection with status 'new'."""
        if request.section_id is not None and self.db.get(Section, request.section_id) is None:
            raise NotFoundError("Section", str(request.section_id))

        objection = Objection(
            subscription_number=request.subscription_number,
            full_name=request.full_name,
            section_id=request.section_id,
            phone=request.phone or None,
            objection_text=request.objection_text,
            status=ObjectionStatus.NEW,
        )
        self.db.add(objection)
        self.db.flush()
        self.db.refresh(objection)
        logger.info(f"Objection {objection.id} filed for subscription number {objection.subscription_number}")
        return ObjectionResponse.model_validate(objection)

    def get_objection(self, objection_id: int) -> Objection:
        """Get objection by ID."""
        objection = self.db.get(Objection, objection_id)
        if not objection:
            raise NotFoundError("Objection", str(objection_id))
        return objection

    def list_objections(self, status: ObjectionStatus | None = None) -> list[ObjectionResponse]:
        """List objections, newest first."""
        query = select(Objection)
        if status is not None:
            query = query.where(Objection.status == status)
        query = query.order_by(Objection.created_at.desc(), Objection.id.desc())
        return [ObjectionResponse.model_validate(o) for o in self.db.execute(query).scalars().all()]

    def update_objection(self, objection_id: int, request: ObjectionUpdate) -> ObjectionResponse:
        """Change status and/or admin note; an empty note clears it."""
        objection = self.get_objection(objection_id)
        update_data = request.model_dump(exclude_unset=True)

        if update_data.get("status") is not None:
            objection.status = update_data["status"]
        if "admin_note" in update_data:
            objection.admin_note = update_data["admin_note"] or None

        self.db.flush()
        self.db.refresh(objection)
        return ObjectionResponse.model_validate(objection)

    def delete_objection(self, objection_id: int) -> None:
        """Delete an objection."""
        objection = self.get_objection(objection_id)
        self.db.delete(objection)
        self.db.flush()
