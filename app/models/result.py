"""Result (grade) model."""

from decimal import Decimal

from sqlalchemy import DECIMAL, BigInteger, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import CreatedAtMixin, IDMixin


class Result(Base, IDMixin, CreatedAtMixin):
    """Grade a student obtained in one subject.

    At most one row per (student_id, subject_id) is expected. This is kept by
    the services through upserts rather than by a database constraint.
    """

    __tablename__ = "results"

    student_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )
    grade: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)

    # Relationships
    student: Mapped["Student"] = relationship("Student", back_populates="results")
    subject: Mapped["Subject"] = relationship("Subject", lazy="selectin")

    __table_args__ = (
        Index("ix_results_student_subject", "student_id", "subject_id"),
    )

    def __repr__(self) -> str:
        return f"<Result(student_id={self.student_id}, subject_id={self.subject_id}, grade={self.grade})>"
