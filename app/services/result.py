"""Grade entry and result lookup service."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, ResultsNotAvailableError, ValidationError
from app.models.result import Result
from app.models.student import Student
from app.models.subject import Subject
from app.schemas.result import (
    ResultRecord,
    ResultResponse,
    ResultUpdate,
    ResultUpsert,
    StudentResult,
)
from app.schemas.student import StudentRecord
from app.schemas.subject import SubjectRecord
from app.services.evaluator import evaluate
from app.services.portal import PortalService, results_available
from app.services.student import StudentService, validate_subscription_number

logger = logging.getLogger(__name__)


class ResultService:
    """Result (grade) management service."""

    def __init__(self, db: Session):
        self.db = db

    def _to_response(self, record: Result) -> ResultResponse:
        response = ResultResponse.model_validate(record)
        response.subject_name = record.subject.name if record.subject else None
        return response

    def list_for_student(self, student_id: int) -> list[ResultResponse]:
        """List recorded grades of a student."""
        StudentService(self.db).get_student(student_id)
        result = self.db.execute(
            select(Result).where(Result.student_id == student_id).order_by(Result.subject_id, Result.id)
        )
        return [self._to_response(r) for r in result.scalars().all()]

    def get_result(self, result_id: int) -> Result:
        """Get result by ID."""
        record = self.db.get(Result, result_id)
        if not record:
            raise NotFoundError("Result", str(result_id))
        return record

    def upsert_result(self, student_id: int, request: ResultUpsert) -> ResultResponse:
        """Record a student's grade in a subject, overwriting any existing grade."""
        student = StudentService(self.db).get_student(student_id)
        subject = self.db.get(Subject, request.subject_id)
        if not subject:
            raise NotFoundError("Subject", str(request.subject_id))
        if subject.section_id != student.section_id:
            raise ValidationError(
                f"Subject '{subject.name}' does not belong to the student's section",
                details={"subject_id": subject.id, "section_id": student.section_id},
            )

        existing = self.db.execute(
            select(Result)
            .where(Result.student_id == student.id, Result.subject_id == subject.id)
            .order_by(Result.id)
        ).scalars().first()

        if existing:
            existing.grade = request.grade
            record = existing
        else:
            record = Result(student_id=student.id, subject_id=subject.id, grade=request.grade)
            self.db.add(record)

        self.db.flush()
        self.db.refresh(record)
        return self._to_response(record)

    def update_result(self, result_id: int, request: ResultUpdate) -> ResultResponse:
        """Update a grade."""
        record = self.get_result(result_id)
        record.grade = request.grade
        self.db.flush()
        self.db.refresh(record)
        return self._to_response(record)

    def delete_result(self, result_id: int) -> None:
        """Delete a grade."""
        record = self.get_result(result_id)
        self.db.delete(record)
        self.db.flush()

    def evaluate_student(self, student: Student) -> StudentResult:
        """Evaluate a student against the subjects of their section."""
        subjects = self.db.execute(
            select(Subject).where(Subject.section_id == student.section_id).order_by(Subject.id)
        ).scalars().all()
        results = self.db.execute(
            select(Result).where(Result.student_id == student.id).order_by(Result.id)
        ).scalars().all()

        return evaluate(
            StudentRecord.model_validate(student),
            [SubjectRecord.model_validate(s) for s in subjects],
            [ResultRecord.model_validate(r) for r in results],
            passing_percentage=settings.PASSING_PERCENTAGE,
        )

    def get_student_result(
        self,
        subscription_number: str,
        now: datetime | None = None,
    ) -> StudentResult:
        """Public lookup by subscription number, honouring the release gate."""
        number = validate_subscription_number(subscription_number)

        portal_settings = PortalService(self.db).get_settings()
        if not results_available(portal_settings, now):
            countdown_end = portal_settings.countdown_end
            raise ResultsNotAvailableError(countdown_end.isoformat() if countdown_end else None)

        student = StudentService(self.db).get_by_subscription_number(number)
        if student is None:
            logger.info(f"Result lookup for unknown subscription number {number}")
            raise NotFoundError("Subscription number", number)

        return self.evaluate_student(student)
