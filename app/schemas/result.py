"""Result (grade) schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.schemas.common import BaseSchema, Percentage
from app.schemas.student import StudentRecord
from app.schemas.subject import SubjectRecord


class ResultRecord(BaseSchema):
    """Result as read from the store."""

    id: int
    student_id: int
    subject_id: int
    grade: Decimal
    created_at: datetime | None = None


class ResultUpsert(BaseSchema):
    """Grade entry for one subject of a student; overwrites an existing grade."""

    subject_id: int
    grade: Decimal = Field(..., ge=0)


class ResultUpdate(BaseSchema):
    """Result update schema."""

    grade: Decimal = Field(..., ge=0)


class ResultResponse(ResultRecord):
    """Result response schema."""

    subject_name: str | None = None


# ==========================================
# Evaluated result
# ==========================================

class SubjectResultEntry(BaseSchema):
    """One subject line of an evaluated result."""

    subject: SubjectRecord
    grade: Decimal
    percentage: Percentage
    min_grade: Decimal
    passed: bool


class StudentResult(BaseSchema):
    """Full evaluated result of a student."""

    student: StudentRecord
    results: list[SubjectResultEntry]
    total_grade: Decimal
    max_total_grade: Decimal
    percentage: Percentage
    has_failed_subject: bool
    passed: bool
    grade_label: str
