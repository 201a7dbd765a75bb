"""Date and grid utilities.

Every value here is a calendar date (``datetime.date``), never an instant, so
``2026-02-15`` stays Feb 15 regardless of the machine's timezone.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional, Union

import pytz

from ..models.layout import CalendarDay
from .exceptions import InvalidDateError, LayoutError

if TYPE_CHECKING:
    from ..models.event import CalendarEvent

DATE_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def today(tz_name: Optional[str] = None) -> date:
    """
    Get the current calendar date.

    Args:
        tz_name: Optional IANA zone name; the machine's local date when omitted

    Returns:
        Today's date
    """
    if tz_name:
        return datetime.now(pytz.timezone(tz_name)).date()
    return date.today()


def day_of_week_monday(value: date) -> int:
    """Day of week with Monday = 0 and Sunday = 6."""
    return value.weekday()


def format_date_key(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_key(value: Union[str, date]) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a calendar date.

    Args:
        value: Date key (a ``date`` is returned unchanged)

    Returns:
        Parsed date

    Raises:
        InvalidDateError: If the key is malformed or names no real day
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    match = DATE_KEY_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidDateError(f"Invalid date key: {value!r}")

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date key: {value!r} ({e})") from e


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(value.day, calendar.monthrange(year, month)[1]))


def week_start(value: date) -> date:
    """Monday of the week containing ``value``."""
    return value - timedelta(days=day_of_week_monday(value))


def week_end(value: date) -> date:
    """Sunday of the week containing ``value``."""
    return value + timedelta(days=6 - day_of_week_monday(value))


def make_day(value: date, is_current_month: bool, today_date: Optional[date] = None) -> CalendarDay:
    return CalendarDay(
        date=value,
        day_of_month=value.day,
        is_current_month=is_current_month,
        is_today=value == today_date,
        date_key=format_date_key(value),
    )


def month_grid_days(
    year: int, month: int, today_date: Optional[date] = None
) -> list[CalendarDay]:
    """
    Get all cells of a Monday-first month grid.

    Leading days come from the previous month and trailing days from the next
    month so the result always holds whole weeks. A month starting on a Monday
    gets no leading padding; one ending on a Sunday gets no trailing padding.

    Args:
        year: Calendar year
        month: Month number (1-12)
        today_date: Date flagged ``is_today`` (defaults to the current date)

    Returns:
        Flat list of days whose length is a multiple of 7
    """
    _check_month(month)
    if today_date is None:
        today_date = today()

    first = date(year, month, 1)
    leading = day_of_week_monday(first)

    days = [make_day(add_days(first, offset), False, today_date) for offset in range(-leading, 0)]
    days.extend(
        make_day(date(year, month, day), True, today_date)
        for day in range(1, days_in_month(year, month) + 1)
    )

    trailing = (7 - len(days) % 7) % 7
    last = days[-1].date
    days.extend(make_day(add_days(last, offset), False, today_date) for offset in range(1, trailing + 1))

    return days


def group_into_weeks(days: list[CalendarDay], size: int = 7) -> list[list[CalendarDay]]:
    """Chunk a flat day list into weeks."""
    return [days[i:i + size] for i in range(0, len(days), size)]


def year_days(year: int, today_date: Optional[date] = None) -> list[CalendarDay]:
    """Every day from Jan 1 to Dec 31 inclusive, all flagged as current."""
    if today_date is None:
        today_date = today()

    first = date(year, 1, 1)
    total = (date(year + 1, 1, 1) - first).days
    return [make_day(add_days(first, offset), True, today_date) for offset in range(total)]


def event_duration_days(event: "CalendarEvent") -> int:
    return event.duration_days


def event_overlaps_range(event: "CalendarEvent", range_start: date, range_end: date) -> bool:
    """Exclusive-end intersection test between an event and ``[range_start, range_end)``."""
    return event.overlaps(range_start, range_end)


def month_name(month: int) -> str:
    """Short English month name for a month number (1-12)."""
    _check_month(month)
    return MONTH_NAMES[month - 1]


def weekday_names() -> list[str]:
    return list(WEEKDAY_NAMES)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise LayoutError(f"Month must be between 1 and 12, got {month}")
