"""Certificate type model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import IDMixin


class CertificateType(Base, IDMixin):
    """Certificate (exam session) a section belongs to, e.g. general secondary 2024."""

    __tablename__ = "certificate_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    sections: Mapped[list["Section"]] = relationship(
        "Section",
        back_populates="certificate_type",
    )

    def __repr__(self) -> str:
        return f"<CertificateType(id={self.id}, name={self.name}, year={self.year})>"
