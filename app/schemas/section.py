"""Certificate type and section schemas."""

from pydantic import Field

from app.schemas.common import BaseSchema


class CertificateTypeBase(BaseSchema):
    """Base certificate type schema."""

    name: str = Field(..., min_length=2, max_length=255)
    year: str = Field(..., min_length=4, max_length=20)
    is_active: bool = True


class CertificateTypeCreate(CertificateTypeBase):
    """Certificate type creation schema."""

    pass


class CertificateTypeResponse(CertificateTypeBase):
    """Certificate type response schema."""

    id: int


class SectionRecord(BaseSchema):
    """Section as read from the store."""

    id: int
    name: str
    certificate_type_id: int | None = None


class SectionCreate(BaseSchema):
    """Section creation schema."""

    name: str = Field(..., min_length=1, max_length=255)
    certificate_type_id: int | None = None


class SectionUpdate(BaseSchema):
    """Section update schema."""

    name: str | None = Field(None, min_length=1, max_length=255)
    certificate_type_id: int | None = None


class SectionResponse(SectionRecord):
    """Section response schema."""

    certificate_type: CertificateTypeResponse | None = None
