"""Subject management service."""

import math
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models.section import Section
from app.models.subject import Subject
from app.schemas.subject import SubjectCreate, SubjectResponse, SubjectUpdate


class SubjectService:
    """Subject management service."""

    def __init__(self, db: Session):
        self.db = db

    def list_subjects(self, section_id: int | None = None) -> list[SubjectResponse]:
        """List subjects, optionally restricted to one section."""
        query = select(Subject)
        if section_id is not None:
            query = query.where(Subject.section_id == section_id)
        query = query.order_by(Subject.section_id, Subject.id)
        result = self.db.execute(query)
        return [SubjectResponse.model_validate(s) for s in result.scalars().all()]

    def get_subject(self, subject_id: int) -> Subject:
        """Get subject by ID."""
        subject = self.db.get(Subject, subject_id)
        if not subject:
            raise NotFoundError("Subject", str(subject_id))
        return subject

    def create_subject(self, request: SubjectCreate) -> SubjectResponse:
        """Create a subject; a missing min grade becomes half the max grade, rounded down."""
        self._ensure_section(request.section_id)

        min_grade = request.min_grade
        if min_grade is None:
            min_grade = Decimal(math.floor(request.max_grade * Decimal("0.5")))

        subject = Subject(
            name=request.name,
            section_id=request.section_id,
            max_grade=request.max_grade,
            min_grade=min_grade,
        )
        self.db.add(subject)
        self.db.flush()
        self.db.refresh(subject)
        return SubjectResponse.model_validate(subject)

    def update_subject(self, subject_id: int, request: SubjectUpdate) -> SubjectResponse:
        """Update a subject, keeping min_grade within [0, max_grade]."""
        subject = self.get_subject(subject_id)
        update_data = request.model_dump(exclude_unset=True)

        if update_data.get("section_id") is not None:
            self._ensure_section(update_data["section_id"])

        max_grade = update_data.get("max_grade") or subject.max_grade
        min_grade = update_data["min_grade"] if "min_grade" in update_data else subject.min_grade
        if min_grade is not None and min_grade > max_grade:
            raise ValidationError(
                f"min_grade ({min_grade}) exceeds max_grade ({max_grade})",
                details={"min_grade": str(min_grade), "max_grade": str(max_grade)},
            )

        for field, value in update_data.items():
            if field in ("name", "section_id", "max_grade") and value is None:
                continue
            setattr(subject, field, value)
        self.db.flush()
        self.db.refresh(subject)
        return SubjectResponse.model_validate(subject)

    def delete_subject(self, subject_id: int) -> None:
        """Delete a subject together with its recorded grades."""
        subject = self.get_subject(subject_id)
        self.db.delete(subject)
        self.db.flush()

    def _ensure_section(self, section_id: int) -> None:
        if self.db.get(Section, section_id) is None:
            raise NotFoundError("Section", str(section_id))
