"""Objection model."""

import enum

from sqlalchemy import BigInteger, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import CreatedAtMixin, IDMixin


class ObjectionStatus(str, enum.Enum):
    """Objection status enumeration. Any status may follow any other."""

    NEW = "new"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Objection(Base, IDMixin, CreatedAtMixin):
    """Objection filed against a published result."""

    __tablename__ = "objections"

    subscription_number: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    section_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("sections.id", ondelete="SET NULL"),
        nullable=True,
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    objection_text: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ObjectionStatus] = mapped_column(
        Enum(ObjectionStatus, values_callable=lambda e: [m.value for m in e]),
        default=ObjectionStatus.NEW,
        nullable=False,
        index=True,
    )
    admin_note: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    section: Mapped["Section"] = relationship("Section", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Objection(id={self.id}, subscription_number={self.subscription_number}, status={self.status})>"
