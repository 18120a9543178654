"""SQLAlchemy-backed store used by the result import."""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models.result import Result
from app.models.section import Section
from app.models.student import Student
from app.models.subject import Subject
from app.schemas.result import ResultRecord
from app.schemas.section import SectionRecord
from app.schemas.student import StudentCreate, StudentRecord
from app.schemas.subject import SubjectRecord

logger = logging.getLogger(__name__)


class SqlImportStore:
    """Import store over a session.

    Each write runs in its own SAVEPOINT, so a failed insert is rolled back on
    its own and the surrounding request transaction stays usable.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_sections(self) -> list[SectionRecord]:
        result = self.db.execute(select(Section).order_by(Section.id))
        return [SectionRecord.model_validate(s) for s in result.scalars().all()]

    def list_subjects(self) -> list[SubjectRecord]:
        result = self.db.execute(select(Subject).order_by(Subject.section_id, Subject.id))
        return [SubjectRecord.model_validate(s) for s in result.scalars().all()]

    def find_student_by_subscription_number(self, value: str) -> StudentRecord | None:
        result = self.db.execute(
            select(Student).where(Student.subscription_number == value)
        )
        student = result.scalar_one_or_none()
        return StudentRecord.model_validate(student) if student else None

    def create_student(self, data: StudentCreate) -> StudentRecord:
        student = Student(**data.model_dump())
        try:
            with self.db.begin_nested():
                self.db.add(student)
                self.db.flush()
        except IntegrityError as e:
            logger.debug(f"Student insert rejected: {e.orig}")
            raise ConflictError(
                f"Subscription number {data.subscription_number} already exists",
                details={"subscription_number": data.subscription_number},
            )
        return StudentRecord.model_validate(student)

    def find_result(self, student_id: int, subject_id: int) -> ResultRecord | None:
        result = self.db.execute(
            select(Result)
            .where(
                Result.student_id == student_id,
                Result.subject_id == subject_id,
            )
            .order_by(Result.id)
        )
        record = result.scalars().first()
        return ResultRecord.model_validate(record) if record else None

    def create_result(self, student_id: int, subject_id: int, grade: Decimal) -> ResultRecord:
        record = Result(student_id=student_id, subject_id=subject_id, grade=grade)
        with self.db.begin_nested():
            self.db.add(record)
            self.db.flush()
        return ResultRecord.model_validate(record)

    def update_result(self, result_id: int, grade: Decimal) -> None:
        with self.db.begin_nested():
            record = self.db.get(Result, result_id)
            if record is None:
                raise NotFoundError("Result", str(result_id))
            record.grade = grade
            self.db.flush()
