"""Continuous (linear) year view.

The whole year is drawn as one grid whose column count is a multiple of 7
chosen from the viewport width. Jan 1 is preceded by padding cells so that
weekdays line up in columns. An event bar that crosses the right edge of a
grid row is split into one segment per row, and bars are packed into tracks
independently for every row.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from ..classify import EventCategory, classify, decoration_color, is_birthday
from ..config import RulesConfig, config
from ..models.event import CalendarEvent
from ..models.layout import EMPTY_DECORATION, CalendarDay, DayDecoration, EventSegment
from ..utils.date_utils import day_of_week_monday, format_date_key, year_days
from ..utils.exceptions import LayoutError
from ..utils.palette import event_color

logger = logging.getLogger(__name__)

DECORATING = {EventCategory.TENTATIVE, EventCategory.TRIP, EventCategory.VISIT}


@dataclass
class LinearLayout:
    """Everything needed to draw the linear year grid."""

    year: int
    columns: int
    padding_start: int
    padding_end: int
    days: list[CalendarDay] = field(default_factory=list)
    segments: list[EventSegment] = field(default_factory=list)
    decorations: dict[str, DayDecoration] = field(default_factory=dict)
    birthdays: dict[str, list[CalendarEvent]] = field(default_factory=dict)

    @property
    def row_count(self) -> int:
        return (self.padding_start + len(self.days) + self.padding_end) // self.columns

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "columns": self.columns,
            "paddingStart": self.padding_start,
            "paddingEnd": self.padding_end,
            "rowCount": self.row_count,
            "days": [d.model_dump(by_alias=True, mode="json") for d in self.days],
            "segments": [s.model_dump(by_alias=True, mode="json") for s in self.segments],
            "decorations": {
                key: value.model_dump(by_alias=True, mode="json")
                for key, value in self.decorations.items()
            },
            "birthdays": {
                key: [e.model_dump(by_alias=True, mode="json") for e in events]
                for key, events in self.birthdays.items()
            },
        }


def _check_columns(columns: int) -> None:
    if columns < 1:
        raise LayoutError(f"Column count must be positive, got {columns}")


def columns_for_width(width: int, min_cell_size: Optional[int] = None) -> tuple[int, int]:
    """
    Pick the grid column count for a container width.

    Args:
        width: Container width in pixels
        min_cell_size: Smallest allowed cell (defaults to config)

    Returns:
        Tuple of (columns, cell_size); columns is the largest multiple of 7
        whose cells still fit, never fewer than 7
    """
    if min_cell_size is None:
        min_cell_size = config.min_cell_size
    if width <= 0 or min_cell_size <= 0:
        raise LayoutError(f"Invalid grid width {width} or cell size {min_cell_size}")

    max_columns = width // min_cell_size
    columns = max(7, (max_columns // 7) * 7)
    return columns, width // columns


def padding_days_start(year: int) -> int:
    """Empty cells before Jan 1 so that Mondays fall in the first column."""
    return day_of_week_monday(date(year, 1, 1))


def padding_days_end(year: int, columns: int) -> int:
    """Empty cells after Dec 31 to complete the last grid row."""
    _check_columns(columns)
    total_days = (date(year + 1, 1, 1) - date(year, 1, 1)).days
    remainder = (padding_days_start(year) + total_days) % columns
    return 0 if remainder == 0 else columns - remainder


def calculate_segments_for_event(
    event: CalendarEvent, year: int, columns: int, padding_days: Optional[int] = None
) -> list[EventSegment]:
    """
    Split one event into row-bounded segments.

    The event is clamped to the year first. Grid positions are 1-based and
    ``grid_column_end`` is exclusive.

    Returns:
        Segments with track 0, or an empty list when the event misses the year
    """
    _check_columns(columns)
    if not event.has_dates:
        return []
    if padding_days is None:
        padding_days = padding_days_start(year)

    year_start = date(year, 1, 1)
    year_end = date(year, 12, 31)
    first = max(event.start_date, year_start)
    last = min(event.end_date - timedelta(days=1), year_end)
    if first > last:
        return []

    # 0-based cell positions including the leading padding
    start_cell = padding_days + (first - year_start).days
    end_cell = padding_days + (last - year_start).days
    start_row = start_cell // columns
    end_row = end_cell // columns

    segments = []
    for row in range(start_row, end_row + 1):
        is_first_row = row == start_row
        is_last_row = row == end_row

        column_start = start_cell % columns + 1 if is_first_row else 1
        column_end = end_cell % columns + 2 if is_last_row else columns + 1

        segments.append(
            EventSegment(
                event=event,
                grid_column_start=column_start,
                grid_column_end=column_end,
                grid_row_start=row + 1,
                is_start=is_first_row,
                is_end=is_last_row,
            )
        )
    return segments


def allocate_tracks(segments: Iterable[EventSegment]) -> list[EventSegment]:
    """
    Assign a track to every segment, row by row.

    Within a row, segments are taken left to right (longer first on equal
    start) and each goes into the first track whose previous segment ends at
    or before its start column.
    """
    by_row: dict[int, list[EventSegment]] = defaultdict(list)
    for segment in segments:
        by_row[segment.grid_row_start].append(segment)

    result = []
    for row in sorted(by_row):
        row_segments = sorted(
            by_row[row],
            key=lambda s: (s.grid_column_start, -s.span_columns, s.event.id),
        )
        track_end_columns: list[int] = []

        for segment in row_segments:
            track = 0
            while track < len(track_end_columns) and track_end_columns[track] > segment.grid_column_start:
                track += 1

            if track == len(track_end_columns):
                track_end_columns.append(segment.grid_column_end)
            else:
                track_end_columns[track] = segment.grid_column_end

            result.append(segment.model_copy(update={"track": track}))

    return result


def calculate_event_segments(
    events: Iterable[CalendarEvent],
    year: int,
    columns: int,
    rules: Optional[RulesConfig] = None,
) -> list[EventSegment]:
    """
    Compute the bar segments of the linear year grid.

    Birthday events are left out; they are shown as per-day badges instead.

    Args:
        events: All events
        year: Displayed year
        columns: Grid column count
        rules: Classification rules (defaults to the global rules)

    Returns:
        Segments with tracks assigned, ordered by grid row
    """
    _check_columns(columns)
    padding = padding_days_start(year)

    raw: list[EventSegment] = []
    for event in events:
        if not event.has_dates or is_birthday(event, rules):
            continue
        raw.extend(calculate_segments_for_event(event, year, columns, padding))

    return allocate_tracks(raw)


def build_day_lookups(
    events: Iterable[CalendarEvent],
    rules: Optional[RulesConfig] = None,
) -> tuple[dict[str, DayDecoration], dict[str, list[CalendarEvent]]]:
    """
    Precompute per-day decorations and birthday lists in a single pass.

    Cost is proportional to the total number of event-days, so a full year
    grid does not have to scan every event for every day.

    Returns:
        Tuple of (decorations by date key, birthday events by date key)
    """
    decorations: dict[str, DayDecoration] = {}
    birthdays: dict[str, list[CalendarEvent]] = defaultdict(list)

    for event in events:
        if not event.has_dates:
            continue

        categories = classify(event, rules)
        decorates = bool(categories & DECORATING)
        birthday = EventCategory.BIRTHDAY in categories
        if not decorates and not birthday:
            continue

        color = event_color(event)
        total_days = event.duration_days

        for offset in range(total_days):
            key = format_date_key(event.start_date + timedelta(days=offset))

            if decorates:
                existing = decorations.get(key, EMPTY_DECORATION)
                decorations[key] = DayDecoration(
                    has_tentative=existing.has_tentative or EventCategory.TENTATIVE in categories,
                    has_trip=existing.has_trip or EventCategory.TRIP in categories,
                    has_visit=existing.has_visit or EventCategory.VISIT in categories,
                    is_first_day=existing.is_first_day or offset == 0,
                    is_last_day=existing.is_last_day or offset == total_days - 1,
                    color=decoration_color(existing.color, categories, color),
                )

            if birthday:
                birthdays[key].append(event)

    return decorations, dict(birthdays)


def layout_linear_year(
    events: Iterable[CalendarEvent],
    year: int,
    columns: int,
    today_date: Optional[date] = None,
    rules: Optional[RulesConfig] = None,
) -> LinearLayout:
    """Build the complete linear year layout for one column count."""
    _check_columns(columns)
    events = list(events)

    decorations, birthdays = build_day_lookups(events, rules)
    layout = LinearLayout(
        year=year,
        columns=columns,
        padding_start=padding_days_start(year),
        padding_end=padding_days_end(year, columns),
        days=year_days(year, today_date),
        segments=calculate_event_segments(events, year, columns, rules),
        decorations=decorations,
        birthdays=birthdays,
    )

    logger.debug(
        f"Linear layout {year} x {columns} columns: {layout.row_count} rows, "
        f"{len(layout.segments)} segments"
    )
    return layout
