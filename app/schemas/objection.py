"""Objection schemas."""

from datetime import datetime

from pydantic import Field

from app.models.objection import ObjectionStatus
from app.schemas.common import BaseSchema


class ObjectionCreate(BaseSchema):
    """Public objection submission."""

    subscription_number: str = Field(..., min_length=1, max_length=20)
    full_name: str = Field(..., min_length=2, max_length=255)
    section_id: int | None = None
    phone: str | None = Field(None, max_length=50)
    objection_text: str = Field(..., min_length=5)


class ObjectionUpdate(BaseSchema):
    """Admin review of an objection."""

    status: ObjectionStatus | None = None
    admin_note: str | None = None


class ObjectionResponse(BaseSchema):
    """Objection response schema."""

    id: int
    subscription_number: str
    full_name: str
    section_id: int | None
    phone: str | None
    objection_text: str
    status: ObjectionStatus
    admin_note: str | None
    created_at: datetime
