"""
Pytest configuration and shared fixtures.
"""

import itertools
import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from yearglance.config import RulesConfig  # noqa: E402
from yearglance.models.event import CalendarEvent  # noqa: E402
from yearglance.utils.date_utils import group_into_weeks, month_grid_days  # noqa: E402


@pytest.fixture
def make_event():
    """Factory for all-day events; dates are ``YYYY-MM-DD`` strings, end exclusive."""
    counter = itertools.count(1)

    def _make(summary="Event", start="2026-06-01", end="2026-06-02", **kwargs):
        kwargs.setdefault("id", f"evt-{next(counter)}")
        return CalendarEvent(summary=summary, start_date=start, end_date=end, **kwargs)

    return _make


@pytest.fixture
def rules():
    """Default classification rules, independent of any local rules file."""
    return RulesConfig(None)


@pytest.fixture
def june_weeks():
    """Weeks of the June 2026 grid (June 1 is a Monday, July 1-5 trail)."""
    return group_into_weeks(month_grid_days(2026, 6, today_date=date(2026, 6, 15)))
