"""Student schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import BaseSchema, PaginatedResponse


class StudentRecord(BaseSchema):
    """Student as read from the store."""

    id: int
    subscription_number: str
    full_name: str
    section_id: int
    certificate_type_id: int | None = None
    manual_fail: bool = False
    created_at: datetime | None = None


class StudentCreate(BaseSchema):
    """Student creation schema."""

    subscription_number: str = Field(..., min_length=1, max_length=20)
    full_name: str = Field(..., min_length=1, max_length=255)
    section_id: int
    certificate_type_id: int | None = None
    manual_fail: bool = False


class StudentUpdate(BaseSchema):
    """Student update schema."""

    subscription_number: str | None = Field(None, min_length=1, max_length=20)
    full_name: str | None = Field(None, min_length=1, max_length=255)
    section_id: int | None = None
    certificate_type_id: int | None = None
    manual_fail: bool | None = None


class StudentResponse(StudentRecord):
    """Student response schema."""

    section_name: str | None = None


class StudentFilter(BaseSchema):
    """Student filter options."""

    section_id: int | None = None
    search: str | None = None  # Name or subscription number


class PaginatedStudentResponse(PaginatedResponse):
    """Paginated student list."""

    items: list[StudentResponse]
