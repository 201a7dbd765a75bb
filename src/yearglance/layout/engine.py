"""Year layout engine tying a reader to the layout functions."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..config import RulesConfig, config, rules_config
from ..models.event import CalendarEvent
from ..models.trip import Trip
from ..readers.base import CalendarReader
from ..trips import filter_and_enrich_trips
from ..utils.date_utils import today as current_date
from ..utils.exceptions import LayoutError
from .linear import LinearLayout, build_day_lookups, columns_for_width, layout_linear_year
from .week import MonthLayout, layout_month

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Result of loading one year of events."""

    events_read: int = 0
    events_skipped: int = 0
    events: list[CalendarEvent] = field(default_factory=list)


class YearLayoutEngine:
    """Loads a year of events once and serves every view from it."""

    def __init__(
        self,
        reader: CalendarReader,
        rules: Optional[RulesConfig] = None,
        calendar_ids: Optional[list[str]] = None,
        today_date: Optional[date] = None,
    ):
        """
        Initialize layout engine.

        Args:
            reader: Event source
            rules: Classification rules (defaults to the global rules)
            calendar_ids: Calendars to show (None for all)
            today_date: Date flagged as today (defaults to the current date)
        """
        self.reader = reader
        self.rules = rules or rules_config
        self.calendar_ids = calendar_ids
        self.today_date = today_date or current_date(config.timezone)
        self._cache: dict[int, LoadResult] = {}

    def load(self, year: int) -> LoadResult:
        """
        Read the events touching ``year``, dropping skipped titles.

        The result is cached per year.
        """
        if year in self._cache:
            return self._cache[year]

        logger.info(f"Loading events for {year}")
        events = self.reader.read_events(
            calendar_ids=self.calendar_ids,
            start_date=date(year, 1, 1),
            end_date=date(year + 1, 1, 1),
        )

        result = LoadResult(events_read=len(events))
        for event in events:
            if self.rules.should_skip(event.summary):
                logger.debug(f"Skipping '{event.summary}' (skip list)")
                result.events_skipped += 1
                continue
            result.events.append(event)

        logger.info(
            f"Loaded {len(result.events)} events for {year} "
            f"({result.events_skipped} skipped)"
        )
        self._cache[year] = result
        return result

    def events(self, year: int) -> list[CalendarEvent]:
        return self.load(year).events

    def month_layout(self, year: int, month: int) -> MonthLayout:
        """Month grid with event bars for one month (1-12)."""
        return layout_month(self.events(year), year, month, self.today_date)

    def year_month_layouts(self, year: int) -> list[MonthLayout]:
        """All twelve month grids of a year."""
        events = self.events(year)
        return [layout_month(events, year, month, self.today_date) for month in range(1, 13)]

    def linear_layout(
        self,
        year: int,
        columns: Optional[int] = None,
        width: Optional[int] = None,
    ) -> LinearLayout:
        """
        Linear year grid for an explicit column count or a container width.

        Raises:
            LayoutError: If neither columns nor width is given
        """
        if columns is None:
            if width is None:
                raise LayoutError("Either columns or width is required for the linear view")
            columns, cell_size = columns_for_width(width)
            logger.debug(f"Width {width}px -> {columns} columns of {cell_size}px")

        return layout_linear_year(self.events(year), year, columns, self.today_date, self.rules)

    def decorations(self, year: int):
        """Per-day decorations and birthdays without the full grid."""
        return build_day_lookups(self.events(year), self.rules)

    def trips(self, year: int, include_visits: bool = False) -> list[Trip]:
        return filter_and_enrich_trips(
            self.events(year),
            today=self.today_date,
            include_visits=include_visits,
            rules=self.rules,
        )
