"""Derived layout records handed to the rendering layer."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from ..utils.palette import event_color
from .event import CalendarEvent

_LAYOUT_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class CalendarDay(BaseModel):
    """A single cell of a month grid or of the linear year grid."""

    date: dt.date
    day_of_month: int
    is_current_month: bool
    is_today: bool = False
    date_key: str

    model_config = _LAYOUT_CONFIG

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def is_first_of_month(self) -> bool:
        return self.day_of_month == 1


class LayoutEvent(BaseModel):
    """An event placed on one week of a month grid."""

    event: CalendarEvent
    row: int
    start_column: int  # 0 = Monday, 6 = Sunday
    span_days: int
    continues_from_previous: bool
    continues_after: bool

    model_config = _LAYOUT_CONFIG

    @property
    def end_column(self) -> int:
        return self.start_column + self.span_days - 1

    @property
    def color(self) -> str:
        return event_color(self.event)


class EventSegment(BaseModel):
    """
    One row-bounded piece of an event bar in the linear year grid.

    Column and row numbers are 1-based; ``grid_column_end`` is exclusive, so a
    segment filling a whole row of ``columns`` cells ends at ``columns + 1``.
    """

    event: CalendarEvent
    grid_column_start: int
    grid_column_end: int
    grid_row_start: int
    track: int = 0
    is_start: bool
    is_end: bool

    model_config = _LAYOUT_CONFIG

    @property
    def span_columns(self) -> int:
        return self.grid_column_end - self.grid_column_start

    @property
    def color(self) -> str:
        return event_color(self.event)


class DayDecoration(BaseModel):
    """Per-day shading info aggregated from tentative, trip and visit events."""

    has_tentative: bool = False
    has_trip: bool = False
    has_visit: bool = False
    is_first_day: bool = False
    is_last_day: bool = False
    color: Optional[str] = None

    model_config = _LAYOUT_CONFIG


EMPTY_DECORATION = DayDecoration()
