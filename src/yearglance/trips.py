"""Trip and visit list aggregation."""

import re
from datetime import date, timedelta
from typing import Iterable, Optional

from .classify import is_trip, is_visit
from .config import RulesConfig, config
from .models.event import CalendarEvent
from .models.trip import MinimapDay, Trip, TripStatus
from .utils.date_utils import (
    MONTH_NAMES,
    WEEKDAY_NAMES,
    add_days,
    format_date_key,
    today as current_date,
    week_end,
    week_start,
)

TRIP_WORD_RE = re.compile(r"trip", re.IGNORECASE)
SEPARATOR_RE = re.compile(r"[-–—:]")
WHITESPACE_RE = re.compile(r"\s+")


def trip_status(event: CalendarEvent) -> TripStatus:
    """
    Planning state of a trip.

    A non-empty description wins over the "?" marker: once travel details are
    in, the trip counts as having info even if the title is still tentative.
    """
    if event.description and event.description.strip():
        return TripStatus.HAS_INFO
    if "?" in event.summary:
        return TripStatus.TODO
    return TripStatus.PENDING


def is_past(event: CalendarEvent, today: Optional[date] = None) -> bool:
    """Whether the last day of the event is strictly before today."""
    if event.last_day is None:
        return False
    if today is None:
        today = current_date(config.timezone)
    return event.last_day < today


def trip_from_event(
    event: CalendarEvent,
    today: Optional[date] = None,
    rules: Optional[RulesConfig] = None,
) -> Optional[Trip]:
    """Enrich a trip or visit event; None for any other event."""
    trip = is_trip(event, rules)
    visit = is_visit(event, rules)
    if not (trip or visit) or not event.has_dates:
        return None

    return Trip(
        event=event,
        trip_status=trip_status(event),
        is_past=is_past(event, today),
        is_visit=visit and not trip,
    )


def filter_and_enrich_trips(
    events: Iterable[CalendarEvent],
    today: Optional[date] = None,
    include_visits: bool = False,
    rules: Optional[RulesConfig] = None,
) -> list[Trip]:
    """
    Build the trip list.

    Args:
        events: All events
        today: Reference date for past/upcoming (defaults to today)
        include_visits: Also list "Visit:" events
        rules: Classification rules

    Returns:
        Trips sorted by start date
    """
    if today is None:
        today = current_date(config.timezone)

    trips = []
    for event in events:
        trip = trip_from_event(event, today, rules)
        if trip is None or (trip.is_visit and not include_visits):
            continue
        trips.append(trip)

    return sorted(trips, key=lambda t: (t.event.start_date, t.event.id))


def partition_trips(trips: Iterable[Trip]) -> tuple[list[Trip], list[Trip]]:
    """Split trips into (upcoming, past), keeping their order."""
    upcoming, past = [], []
    for trip in trips:
        (past if trip.is_past else upcoming).append(trip)
    return upcoming, past


def trip_display_name(trip: Trip) -> str:
    """
    Title without the "trip" keyword, question marks or separators.

    Todo trips keep a single trailing "?" to show they are still uncertain.
    """
    name = TRIP_WORD_RE.sub("", trip.event.summary)
    name = name.replace("?", "")
    name = SEPARATOR_RE.sub(" ", name)
    name = WHITESPACE_RE.sub(" ", name).strip() or "Unnamed Trip"

    if trip.trip_status == TripStatus.TODO:
        return f"{name}?"
    return name


def _day_label(value: date) -> str:
    return f"{WEEKDAY_NAMES[value.weekday()]} {MONTH_NAMES[value.month - 1]} {value.day}"


def format_trip_date_range(trip: Trip) -> str:
    """
    Human date range with weekday names.

    Examples: ``Sun Feb 15`` (one day), ``Sun Feb 15 - Sun 22`` (same month),
    ``Fri Feb 14 - Sun Mar 2``.
    """
    start = trip.event.start_date
    end = trip.event.last_day

    if start == end:
        return _day_label(start)
    if start.year == end.year and start.month == end.month:
        return f"{_day_label(start)} - {WEEKDAY_NAMES[end.weekday()]} {end.day}"
    return f"{_day_label(start)} - {_day_label(end)}"


def minimap_weeks(
    start_date: date,
    end_date: date,
    today: Optional[date] = None,
    max_weeks: Optional[int] = None,
) -> list[list[MinimapDay]]:
    """
    Monday-first weeks for the small calendar next to a trip.

    All weeks the trip touches are shown. Up to one week of context is added
    before and after while the total stays within ``max_weeks``.

    Args:
        start_date: First trip day
        end_date: Exclusive end date
        today: Date flagged as today
        max_weeks: Weeks shown when the trip leaves room (defaults to config)

    Returns:
        List of 7-day weeks
    """
    if today is None:
        today = current_date(config.timezone)
    if max_weeks is None:
        max_weeks = config.minimap_weeks

    first_week_day = week_start(start_date)
    last_week_day = week_end(end_date - timedelta(days=1))
    trip_weeks = ((last_week_day - first_week_day).days + 1) // 7

    available = max(0, max_weeks - trip_weeks)
    context_before = min(1, available // 2)
    context_after = min(1, available - context_before)

    display_start = add_days(first_week_day, -7 * context_before)
    display_end = add_days(last_week_day, 7 * context_after)

    days = []
    current = display_start
    while current <= display_end:
        days.append(
            MinimapDay(
                date_key=format_date_key(current),
                date=current,
                is_in_trip=start_date <= current < end_date,
                is_today=current == today,
            )
        )
        current += timedelta(days=1)

    return [days[i:i + 7] for i in range(0, len(days), 7)]
