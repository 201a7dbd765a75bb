"""Month-view event layout, one week at a time.

Bars are packed the way Google Calendar packs all-day events: the longest
events claim the top rows, and every other event drops to the first row that
is free across all of its visible days.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from ..models.event import CalendarEvent
from ..models.layout import CalendarDay, LayoutEvent
from ..utils.date_utils import group_into_weeks, month_grid_days

logger = logging.getLogger(__name__)


@dataclass
class WeekLayout:
    """Days and bar placements of one grid week."""

    days: list[CalendarDay]
    events: list[LayoutEvent] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return max((e.row for e in self.events), default=-1) + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": [d.model_dump(by_alias=True, mode="json") for d in self.days],
            "events": [e.model_dump(by_alias=True, mode="json") for e in self.events],
            "rowCount": self.row_count,
        }


@dataclass
class MonthLayout:
    """Week-by-week layout of one month grid."""

    year: int
    month: int
    weeks: list[WeekLayout] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "weeks": [w.to_dict() for w in self.weeks],
        }


def layout_sort_key(event: CalendarEvent) -> tuple[int, date, str]:
    """Longest first, then earliest start; the id only breaks exact ties."""
    return (-event.duration_days, event.start_date, event.id)


def _first_free_row(occupancy: list[list[bool]], start: int, end: int, width: int) -> int:
    row = 0
    while True:
        if row == len(occupancy):
            occupancy.append([False] * width)
        if not any(occupancy[row][start:end + 1]):
            for column in range(start, end + 1):
                occupancy[row][column] = True
            return row
        row += 1


def layout_events_for_week(
    events: Iterable[CalendarEvent], week_days: list[CalendarDay]
) -> list[LayoutEvent]:
    """
    Place the events that touch one week.

    Events are clipped to the week, then clipped again so they never draw on
    days of an adjacent month; an event that only touches such days is left
    out of this week.

    Args:
        events: All events (events without dates are ignored)
        week_days: The week's days, Monday first

    Returns:
        Layout records in placement order
    """
    if not week_days:
        return []

    width = len(week_days)
    week_start = week_days[0].date
    week_end = week_days[-1].date + timedelta(days=1)

    relevant = [e for e in events if e.overlaps(week_start, week_end)]
    ordered = sorted(relevant, key=layout_sort_key)

    occupancy: list[list[bool]] = []
    placed: list[LayoutEvent] = []

    for event in ordered:
        start_column = 0
        for index, day in enumerate(week_days):
            if day.date >= event.start_date:
                start_column = index
                break

        end_column = width - 1
        for index in range(width - 1, -1, -1):
            if week_days[index].date < event.end_date:
                end_column = index
                break

        while start_column <= end_column and not week_days[start_column].is_current_month:
            start_column += 1
        while end_column >= start_column and not week_days[end_column].is_current_month:
            end_column -= 1

        if start_column > end_column:
            continue

        row = _first_free_row(occupancy, start_column, end_column, width)
        placed.append(
            LayoutEvent(
                event=event,
                row=row,
                start_column=start_column,
                span_days=end_column - start_column + 1,
                continues_from_previous=event.start_date < week_start,
                continues_after=event.end_date > week_end,
            )
        )

    return placed


def layout_month(
    events: Iterable[CalendarEvent],
    year: int,
    month: int,
    today_date: Optional[date] = None,
) -> MonthLayout:
    """
    Lay out a whole month grid.

    Args:
        events: All events
        year: Calendar year
        month: Month number (1-12)
        today_date: Date flagged as today (defaults to the current date)

    Returns:
        MonthLayout with one WeekLayout per grid row
    """
    events = list(events)
    weeks = group_into_weeks(month_grid_days(year, month, today_date))
    result = MonthLayout(year=year, month=month)

    for week in weeks:
        result.weeks.append(WeekLayout(days=week, events=layout_events_for_week(events, week)))

    logger.debug(
        f"Laid out {year}-{month:02d}: {len(weeks)} weeks, "
        f"{sum(len(w.events) for w in result.weeks)} bars"
    )
    return result
