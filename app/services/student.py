"""Student management service."""

import re

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.section import Section
from app.models.student import Student
from app.schemas.student import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)
from app.services.grading import normalize_digits

SUBSCRIPTION_NUMBER_PATTERN = re.compile(r"^\d{4,20}$")


def normalize_subscription_number(value: str) -> str:
    """Convert Arabic-Indic digits and drop everything that is not a digit."""
    return re.sub(r"\D", "", normalize_digits(value or ""))


def validate_subscription_number(value: str) -> str:
    """Normalize a searched subscription number and require 4 to 20 digits."""
    normalized = normalize_subscription_number(value)
    if not SUBSCRIPTION_NUMBER_PATTERN.match(normalized):
        raise ValidationError(
            "Subscription number must be 4 to 20 digits",
            details={"value": value},
        )
    return normalized


class StudentService:
    """Student management service."""

    def __init__(self, db: Session):
        self.db = db

    def _to_response(self, student: Student) -> StudentResponse:
        response = StudentResponse.model_validate(student)
        response.section_name = student.section.name if student.section else None
        return response

    def create_student(self, request: StudentCreate) -> StudentResponse:
        """Create a new student. Certificate type defaults to the section's."""
        section = self._get_section(request.section_id)
        self._ensure_unique(request.subscription_number)

        student = Student(
            subscription_number=request.subscription_number,
            full_name=request.full_name,
            section_id=section.id,
            certificate_type_id=request.certificate_type_id or section.certificate_type_id,
            manual_fail=request.manual_fail,
        )
        self.db.add(student)
        try:
            self.db.flush()
        except IntegrityError:
            raise ConflictError(
                f"Subscription number {request.subscription_number} already exists"
            )
        self.db.refresh(student)
        return self._to_response(student)

    def get_student(self, student_id: int) -> Student:
        """Get student by ID."""
        student = self.db.get(Student, student_id)
        if not student:
            raise NotFoundError("Student", str(student_id))
        return student

    def get_student_response(self, student_id: int) -> StudentResponse:
        return self._to_response(self.get_student(student_id))

    def get_by_subscription_number(self, subscription_number: str) -> Student | None:
        """Find a student by subscription number; None when absent."""
        result = self.db.execute(
            select(Student).where(Student.subscription_number == subscription_number)
        )
        return result.scalar_one_or_none()

    def update_student(self, student_id: int, request: StudentUpdate) -> StudentResponse:
        """Update a student, including the manual fail override."""
        student = self.get_student(student_id)
        update_data = request.model_dump(exclude_unset=True)

        number = update_data.get("subscription_number")
        if number and number != student.subscription_number:
            self._ensure_unique(number)
        if update_data.get("section_id") is not None:
            self._get_section(update_data["section_id"])

        for field, value in update_data.items():
            if value is None and field != "certificate_type_id":
                continue
            setattr(student, field, value)
        self.db.flush()
        self.db.refresh(student)
        return self._to_response(student)

    def delete_student(self, student_id: int) -> None:
        """Delete a student and their results."""
        student = self.get_student(student_id)
        self.db.delete(student)
        self.db.flush()

    def list_students(
        self,
        filters: StudentFilter | None = None,
        page: int = 1,
        page_size: int = 50,
    ) -> PaginatedStudentResponse:
        """List students with filtering and pagination."""
        query = select(Student)

        if filters:
            if filters.section_id:
                query = query.where(Student.section_id == filters.section_id)
            if filters.search:
                search_term = f"%{filters.search}%"
                query = query.where(
                    or_(
                        Student.full_name.ilike(search_term),
                        Student.subscription_number.like(search_term),
                    )
                )

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.execute(count_query).scalar() or 0

        # Apply pagination
        offset = (page - 1) * page_size
        query = query.order_by(Student.id.desc()).offset(offset).limit(page_size)
        students = self.db.execute(query).scalars().all()

        return PaginatedStudentResponse(
            items=[self._to_response(s) for s in students],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=(total + page_size - 1) // page_size,
        )

    def _get_section(self, section_id: int) -> Section:
        section = self.db.get(Section, section_id)
        if not section:
            raise NotFoundError("Section", str(section_id))
        return section

    def _ensure_unique(self, subscription_number: str) -> None:
        if self.get_by_subscription_number(subscription_number) is not None:
            raise ConflictError(
                f"Subscription number {subscription_number} already exists",
                details={"subscription_number": subscription_number},
            )
