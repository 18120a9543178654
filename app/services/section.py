"""Certificate type and section management service."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models.certificate_type import CertificateType
from app.models.section import Section
from app.models.student import Student
from app.schemas.section import (
    CertificateTypeCreate,
    CertificateTypeResponse,
    SectionCreate,
    SectionResponse,
    SectionUpdate,
)


class SectionService:
    """Section and certificate type management service."""

    def __init__(self, db: Session):
        self.db = db

    # ==========================================
    # Certificate types
    # ==========================================

    def list_certificate_types(self) -> list[CertificateTypeResponse]:
        """List certificate types, newest year first."""
        result = self.db.execute(
            select(CertificateType).order_by(CertificateType.year.desc(), CertificateType.id)
        )
        return [CertificateTypeResponse.model_validate(c) for c in result.scalars().all()]

    def create_certificate_type(self, request: CertificateTypeCreate) -> CertificateTypeResponse:
        """Create a certificate type."""
        certificate_type = CertificateType(**request.model_dump())
        self.db.add(certificate_type)
        self.db.flush()
        self.db.refresh(certificate_type)
        return CertificateTypeResponse.model_validate(certificate_type)

    def _get_certificate_type(self, certificate_type_id: int) -> CertificateType:
        certificate_type = self.db.get(CertificateType, certificate_type_id)
        if not certificate_type:
            raise NotFoundError("Certificate type", str(certificate_type_id))
        return certificate_type

    # ==========================================
    # Sections
    # ==========================================

    def list_sections(self) -> list[SectionResponse]:
        """List all sections."""
        result = self.db.execute(select(Section).order_by(Section.id))
        return [SectionResponse.model_validate(s) for s in result.scalars().all()]

    def get_section(self, section_id: int) -> Section:
        """Get section by ID."""
        section = self.db.get(Section, section_id)
        if not section:
            raise NotFoundError("Section", str(section_id))
        return section

    def create_section(self, request: SectionCreate) -> SectionResponse:
        """Create a section."""
        if request.certificate_type_id is not None:
            self._get_certificate_type(request.certificate_type_id)

        section = Section(
            name=request.name,
            certificate_type_id=request.certificate_type_id,
        )
        self.db.add(section)
        self.db.flush()
        self.db.refresh(section)
        return SectionResponse.model_validate(section)

    def update_section(self, section_id: int, request: SectionUpdate) -> SectionResponse:
        """Update a section."""
        section = self.get_section(section_id)
        update_data = request.model_dump(exclude_unset=True)
        if update_data.get("certificate_type_id") is not None:
            self._get_certificate_type(update_data["certificate_type_id"])
        for field, value in update_data.items():
            if field == "name" and value is None:
                continue
            setattr(section, field, value)
        self.db.flush()
        self.db.refresh(section)
        return SectionResponse.model_validate(section)

    def delete_section(self, section_id: int) -> None:
        """Delete a section and its subjects. Refused while students are enrolled."""
        section = self.get_section(section_id)
        student_count = self.db.execute(
            select(func.count(Student.id)).where(Student.section_id == section_id)
        ).scalar() or 0
        if student_count:
            raise ConflictError(
                f"Section '{section.name}' still has {student_count} students",
                details={"student_count": student_count},
            )
        self.db.delete(section)
        self.db.flush()
