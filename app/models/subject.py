"""Subject model."""

from decimal import Decimal

from sqlalchemy import DECIMAL, BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import IDMixin


class Subject(Base, IDMixin):
    """Subject taught in exactly one section."""

    __tablename__ = "subjects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    section_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    max_grade: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False, default=Decimal("100"))
    # Passing threshold; NULL means floor(max_grade * 0.5)
    min_grade: Mapped[Decimal | None] = mapped_column(DECIMAL(10, 2), nullable=True)

    # Relationships
    section: Mapped["Section"] = relationship(
        "Section",
        back_populates="subjects",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Subject(id={self.id}, name={self.name}, section_id={self.section_id})>"
