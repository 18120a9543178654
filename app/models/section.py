"""Section model."""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import IDMixin


class Section(Base, IDMixin):
    """Study section (scientific, literary, ...) grouping subjects and students."""

    __tablename__ = "sections"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    certificate_type_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("certificate_types.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    certificate_type: Mapped["CertificateType"] = relationship(
        "CertificateType",
        back_populates="sections",
        lazy="selectin",
    )
    subjects: Mapped[list["Subject"]] = relationship(
        "Subject",
        back_populates="section",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Subject.id",
    )

    def __repr__(self) -> str:
        return f"<Section(id={self.id}, name={self.name})>"
