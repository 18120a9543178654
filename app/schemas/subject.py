"""Subject schemas."""

from decimal import Decimal

from pydantic import Field, model_validator

from app.schemas.common import BaseSchema


class SubjectRecord(BaseSchema):
    """Subject as read from the store."""

    id: int
    name: str
    section_id: int
    max_grade: Decimal
    min_grade: Decimal | None = None


class SubjectCreate(BaseSchema):
    """Subject creation schema. Missing min_grade defaults to half of max_grade."""

    name: str = Field(..., min_length=1, max_length=255)
    section_id: int
    max_grade: Decimal = Field(..., gt=0)
    min_grade: Decimal | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_min_grade(self) -> "SubjectCreate":
        if self.min_grade is not None and self.min_grade > self.max_grade:
            raise ValueError(
                f"min_grade ({self.min_grade}) exceeds max_grade ({self.max_grade})"
            )
        return self


class SubjectUpdate(BaseSchema):
    """Subject update schema. Bounds against the stored row are checked by the service."""

    name: str | None = Field(None, min_length=1, max_length=255)
    section_id: int | None = None
    max_grade: Decimal | None = Field(None, gt=0)
    min_grade: Decimal | None = Field(None, ge=0)


class SubjectResponse(SubjectRecord):
    """Subject response schema."""

    pass
