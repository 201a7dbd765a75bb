"""Reader for Google Calendar JSON exports."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..models.calendar import DEFAULT_CALENDAR_COLOR, Calendar
from ..models.event import CalendarEvent, EventStatus
from ..utils.exceptions import EventReadError
from .base import CalendarReader

logger = logging.getLogger(__name__)


def _event_id(item: Any) -> str:
    return item.get("id", "?") if isinstance(item, dict) else "?"


def transform_google_event(
    raw: dict[str, Any],
    calendar_id: str,
    background_color: str = DEFAULT_CALENDAR_COLOR,
) -> Optional[CalendarEvent]:
    """
    Transform a Google Calendar API event into the normalized model.

    Args:
        raw: Event resource as returned by ``events.list``
        calendar_id: Owning calendar
        background_color: Owning calendar's color

    Returns:
        CalendarEvent, or None for timed or cancelled events

    Raises:
        ValueError: If ``start`` or ``end`` is not an object
    """
    start = raw.get("start") or {}
    end = raw.get("end") or {}
    if not isinstance(start, dict) or not isinstance(end, dict):
        raise ValueError(f"Event {raw.get('id', '?')}: start and end must be objects")

    start = start.get("date")
    end = end.get("date")
    if not start or not end:
        return None
    if raw.get("status") == EventStatus.CANCELLED.value:
        return None

    return CalendarEvent(
        id=raw["id"],
        summary=raw.get("summary") or "(No title)",
        description=raw.get("description"),
        start_date=start,
        end_date=end,
        color_id=raw.get("colorId"),
        status=(
            EventStatus.TENTATIVE
            if raw.get("status") == EventStatus.TENTATIVE.value
            else EventStatus.CONFIRMED
        ),
        calendar_id=calendar_id,
        background_color=background_color,
        html_link=raw.get("htmlLink"),
    )


class GoogleExportReader(CalendarReader):
    """
    Read events from a JSON file.

    Two layouts are understood: the web client's cache,
    ``{"events": [...normalized events...]}`` (a bare list also works), and a
    raw API dump, ``{"calendars": [{"id", "summary", "backgroundColor",
    "items": [...]}]}``.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize export reader.

        Args:
            path: JSON file to read
        """
        self.path = Path(path)
        self._data: Optional[Any] = None

    @property
    def data(self) -> Any:
        """Lazy-load the export file."""
        if self._data is None:
            try:
                with open(self.path, encoding="utf-8") as f:
                    self._data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise EventReadError(f"Failed to read events from {self.path}: {e}") from e
        return self._data

    def list_calendars(self) -> list[Calendar]:
        """List calendars declared in the export, or implied by its events."""
        if isinstance(self.data, dict) and "calendars" in self.data:
            calendars = [
                Calendar(
                    id=cal["id"],
                    name=cal.get("summary") or cal["id"],
                    background_color=cal.get("backgroundColor") or DEFAULT_CALENDAR_COLOR,
                    is_primary=bool(cal.get("primary", False)),
                )
                for cal in self.data["calendars"]
                if cal.get("id")
            ]
        else:
            seen: dict[str, Calendar] = {}
            for event in self._load_events():
                if event.calendar_id not in seen:
                    seen[event.calendar_id] = Calendar(
                        id=event.calendar_id,
                        name=event.calendar_id,
                        background_color=event.background_color or DEFAULT_CALENDAR_COLOR,
                    )
            calendars = list(seen.values())

        logger.info(f"Found {len(calendars)} calendars in {self.path}")
        return calendars

    def read_events(
        self,
        calendar_ids: Optional[list[str]] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CalendarEvent]:
        """Read all-day events, optionally limited to calendars and a date range."""
        events = self._load_events()

        if calendar_ids:
            wanted = set(calendar_ids)
            events = [e for e in events if e.calendar_id in wanted]

        if start_date or end_date:
            events = [
                e for e in events
                if e.has_dates
                and (start_date is None or e.end_date > start_date)
                and (end_date is None or e.start_date < end_date)
            ]

        events.sort(key=lambda e: (e.start_date or date.max, e.id))
        logger.info(f"Read {len(events)} events from {self.path}")
        return events

    def _load_events(self) -> list[CalendarEvent]:
        data = self.data

        if isinstance(data, list):
            return self._normalized_events(data)
        if isinstance(data, dict) and "events" in data:
            return self._normalized_events(data["events"])
        if isinstance(data, dict) and "calendars" in data:
            return self._raw_events(data["calendars"])

        raise EventReadError(f"Unrecognized export format in {self.path}")

    def _normalized_events(self, items: list[dict[str, Any]]) -> list[CalendarEvent]:
        events = []
        for item in items:
            try:
                event = CalendarEvent.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping malformed event {_event_id(item)}: {e}")
                continue
            if event.status != EventStatus.CANCELLED:
                events.append(event)
        return events

    def _raw_events(self, calendars: list[dict[str, Any]]) -> list[CalendarEvent]:
        events = []
        for cal in calendars:
            calendar_id = cal.get("id") or "primary"
            color = cal.get("backgroundColor") or DEFAULT_CALENDAR_COLOR

            for item in cal.get("items", []):
                if not isinstance(item, dict):
                    logger.warning(f"Skipping malformed event ?: expected an object, got {item!r}")
                    continue
                try:
                    event = transform_google_event(item, calendar_id, color)
                except (KeyError, ValueError) as e:
                    logger.warning(f"Skipping malformed event {_event_id(item)}: {e}")
                    continue
                if event is not None:
                    events.append(event)
        return events
