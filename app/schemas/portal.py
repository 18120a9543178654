"""Portal settings and release-gate schemas."""

from datetime import datetime

from app.schemas.common import BaseSchema


class PortalSettingsResponse(BaseSchema):
    """Portal settings response schema."""

    is_results_open: bool
    countdown_end: datetime | None
    announcement_text: str | None
    updated_at: datetime | None = None


class PortalSettingsUpdate(BaseSchema):
    """Partial settings update; an explicit null clears countdown_end or the announcement."""

    is_results_open: bool | None = None
    countdown_end: datetime | None = None
    announcement_text: str | None = None


class Countdown(BaseSchema):
    """Time remaining until results are released."""

    days: int
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
    is_expired: bool


class PortalStatus(BaseSchema):
    """Public landing-page state."""

    results_available: bool
    announcement_text: str | None
    countdown_end: datetime | None
    countdown: Countdown | None
