"""Portal settings model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.base import IDMixin, TimestampMixin

SETTINGS_ROW_ID = 1


class PortalSettings(Base, IDMixin, TimestampMixin):
    """Single-row table controlling when results are released."""

    __tablename__ = "portal_settings"

    is_results_open: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    countdown_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    announcement_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<PortalSettings(open={self.is_results_open}, countdown_end={self.countdown_end})>"
