"""Abstract base class for calendar event readers."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from ..models.calendar import Calendar
from ..models.event import CalendarEvent


class CalendarReader(ABC):
    """Abstract base class for calendar event readers."""

    @abstractmethod
    def list_calendars(self) -> list[Calendar]:
        """
        List all available calendars.

        Returns:
            List of Calendar objects

        Raises:
            EventReadError: If listing calendars fails
        """

    @abstractmethod
    def read_events(
        self,
        calendar_ids: Optional[list[str]] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CalendarEvent]:
        """
        Read all-day events.

        Args:
            calendar_ids: Calendars to include (None for all)
            start_date: Keep events ending after this date
            end_date: Keep events starting before this date (exclusive)

        Returns:
            List of normalized CalendarEvent objects, sorted by start date

        Raises:
            EventReadError: If reading events fails
        """
