"""Normalized all-day calendar event data model."""

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator
from pydantic.alias_generators import to_camel


class EventStatus(str, Enum):
    """Event status enumeration."""

    CONFIRMED = "confirmed"
    TENTATIVE = "tentative"
    CANCELLED = "cancelled"


class CalendarEvent(BaseModel):
    """
    Normalized all-day event.

    ``end_date`` is exclusive, following the Google Calendar convention: a
    single-day event on Jan 1 has ``start_date=2026-01-01`` and
    ``end_date=2026-01-02``. Field names accept and serialize to camelCase
    (``startDate``, ``colorId``) so payloads cached by the web client can be
    read back unchanged.
    """

    id: str
    summary: str = "(No title)"
    description: Optional[str] = None

    start_date: Optional[date] = None
    end_date: Optional[date] = None

    color_id: Optional[str] = None
    status: EventStatus = EventStatus.CONFIRMED
    calendar_id: str = "primary"
    background_color: Optional[str] = None
    html_link: Optional[str] = None

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, value):
        return value or "(No title)"

    @model_validator(mode="after")
    def _check_interval(self) -> "CalendarEvent":
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValueError(
                f"Event {self.id}: start_date {self.start_date} must be before "
                f"end_date {self.end_date}"
            )
        return self

    @property
    def has_dates(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @property
    def duration_days(self) -> int:
        """Number of days covered (0 when dates are missing)."""
        if not self.has_dates:
            return 0
        return (self.end_date - self.start_date).days

    @property
    def last_day(self) -> Optional[date]:
        """Last day the event covers (inclusive)."""
        if self.end_date is None:
            return None
        return self.end_date - timedelta(days=1)

    def overlaps(self, range_start: date, range_end: date) -> bool:
        """Whether ``[start_date, end_date)`` intersects ``[range_start, range_end)``."""
        if not self.has_dates:
            return False
        return self.start_date < range_end and self.end_date > range_start

    def covers(self, day: date) -> bool:
        return self.overlaps(day, day + timedelta(days=1))
