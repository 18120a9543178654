"""Portal settings and result release gate."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models.portal_settings import SETTINGS_ROW_ID, PortalSettings
from app.schemas.portal import (
    Countdown,
    PortalSettingsResponse,
    PortalSettingsUpdate,
    PortalStatus,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def results_available(settings: PortalSettings, now: datetime | None = None) -> bool:
    """Results are visible once opened by hand or once the countdown has ended."""
    if settings.is_results_open:
        return True
    if settings.countdown_end is None:
        return False
    now = now or datetime.now(timezone.utc)
    return _as_utc(now) >= _as_utc(settings.countdown_end)


def countdown(settings: PortalSettings, now: datetime | None = None) -> Countdown | None:
    """Time left until countdown_end, or None when no countdown is configured."""
    if settings.countdown_end is None:
        return None
    now = now or datetime.now(timezone.utc)
    remaining = int((_as_utc(settings.countdown_end) - _as_utc(now)).total_seconds())
    if remaining <= 0:
        return Countdown(days=0, hours=0, minutes=0, seconds=0, total_seconds=0, is_expired=True)

    days, rest = divmod(remaining, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        total_seconds=remaining,
        is_expired=False,
    )


class PortalService:
    """Portal settings service."""

    def __init__(self, db: Session):
        self.db = db

    def get_settings(self) -> PortalSettings:
        """Get the settings row, creating it with results closed on first use."""
        settings = self.db.get(PortalSettings, SETTINGS_ROW_ID)
        if settings is None:
            settings = PortalSettings(id=SETTINGS_ROW_ID, is_results_open=False)
            self.db.add(settings)
            self.db.flush()
            logger.info("Created default portal settings")
        return settings

    def update_settings(self, request: PortalSettingsUpdate) -> PortalSettingsResponse:
        """Update the settings row."""
        settings = self.get_settings()
        update_data = request.model_dump(exclude_unset=True)
        if update_data.get("is_results_open") is None:
            update_data.pop("is_results_open", None)
        for field, value in update_data.items():
            setattr(settings, field, value)
        self.db.flush()
        self.db.refresh(settings)
        logger.info(
            f"Portal settings updated: open={settings.is_results_open}, countdown_end={settings.countdown_end}"
        )
        return PortalSettingsResponse.model_validate(settings)

    def get_status(self, now: datetime | None = None) -> PortalStatus:
        """Public landing-page state."""
        settings = self.get_settings()
        return PortalStatus(
            results_available=results_available(settings, now),
            announcement_text=settings.announcement_text,
            countdown_end=settings.countdown_end,
            countdown=countdown(settings, now),
        )
