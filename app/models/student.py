"""Student model."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import CreatedAtMixin, IDMixin


class Student(Base, IDMixin, CreatedAtMixin):
    """Examinee identified externally by subscription number."""

    __tablename__ = "students"

    subscription_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    section_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("sections.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    certificate_type_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("certificate_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Administrative override: fail regardless of grades
    manual_fail: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    section: Mapped["Section"] = relationship("Section", lazy="selectin")
    certificate_type: Mapped["CertificateType"] = relationship(
        "CertificateType",
        lazy="selectin",
    )
    results: Mapped[list["Result"]] = relationship(
        "Result",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, subscription_number={self.subscription_number})>"
