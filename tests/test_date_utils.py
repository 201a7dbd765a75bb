"""Tests for date and grid utilities."""

from datetime import date

import pytest

from yearglance.utils.date_utils import (
    add_months,
    day_of_week_monday,
    days_in_month,
    event_duration_days,
    event_overlaps_range,
    format_date_key,
    group_into_weeks,
    month_grid_days,
    month_name,
    parse_date_key,
    today,
    week_end,
    week_start,
    weekday_names,
    year_days,
)
from yearglance.utils.exceptions import InvalidDateError, LayoutError

TODAY = date(2026, 6, 15)


def test_day_of_week_monday_first():
    assert day_of_week_monday(date(2026, 6, 1)) == 0  # Monday
    assert day_of_week_monday(date(2026, 5, 31)) == 6  # Sunday


def test_format_and_parse_date_key():
    assert format_date_key(date(2026, 2, 5)) == "2026-02-05"
    assert parse_date_key("2026-02-05") == date(2026, 2, 5)
    assert parse_date_key(date(2026, 2, 5)) == date(2026, 2, 5)


@pytest.mark.parametrize("key", ["2026-02-30", "2026-2-5", "not a date", "", "2026-13-01"])
def test_parse_date_key_rejects_malformed(key):
    with pytest.raises(InvalidDateError):
        parse_date_key(key)


def test_invalid_date_error_is_value_error():
    with pytest.raises(ValueError):
        parse_date_key("2026-02-30")


def test_days_in_month_handles_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2026, 2) == 28
    assert days_in_month(2026, 12) == 31


def test_add_months_clamps_day():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 3, 15), -6) == date(2025, 9, 15)
    assert add_months(date(2026, 11, 30), 3) == date(2027, 2, 28)


def test_week_bounds():
    wednesday = date(2026, 6, 17)
    assert week_start(wednesday) == date(2026, 6, 15)
    assert week_end(wednesday) == date(2026, 6, 21)


class TestMonthGridDays:
    def test_month_starting_on_monday_has_no_leading_padding(self):
        days = month_grid_days(2026, 6, TODAY)
        assert days[0].date == date(2026, 6, 1)
        assert days[0].is_current_month
        assert len(days) == 35
        assert [d.date for d in days[-5:]] == [date(2026, 7, d) for d in range(1, 6)]

    def test_month_ending_on_sunday_has_no_trailing_padding(self):
        days = month_grid_days(2026, 5, TODAY)
        assert days[-1].date == date(2026, 5, 31)
        assert days[0].date == date(2026, 4, 27)
        assert sum(1 for d in days if not d.is_current_month) == 4

    def test_february_padding(self):
        days = month_grid_days(2026, 2, TODAY)
        assert days[0].date == date(2026, 1, 26)
        assert days[-1].date == date(2026, 3, 1)

    @pytest.mark.parametrize("year", [2023, 2024, 2026, 2028])
    def test_every_month_is_whole_weeks_with_each_day_once(self, year):
        for month in range(1, 13):
            days = month_grid_days(year, month, TODAY)
            assert len(days) % 7 == 0
            current = [d.date for d in days if d.is_current_month]
            assert current == [date(year, month, d) for d in range(1, days_in_month(year, month) + 1)]
            assert all(day_of_week_monday(w[0].date) == 0 for w in group_into_weeks(days))

    def test_today_flag(self):
        days = month_grid_days(2026, 6, TODAY)
        flagged = [d.date for d in days if d.is_today]
        assert flagged == [TODAY]

    def test_date_key_matches_date(self):
        for day in month_grid_days(2026, 6, TODAY):
            assert day.date_key == format_date_key(day.date)
            assert day.day_of_month == day.date.day

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month):
        with pytest.raises(LayoutError):
            month_grid_days(2026, month, TODAY)


def test_group_into_weeks():
    weeks = group_into_weeks(month_grid_days(2026, 6, TODAY))
    assert len(weeks) == 5
    assert all(len(w) == 7 for w in weeks)


def test_year_days_covers_whole_year():
    days = year_days(2024, TODAY)
    assert len(days) == 366
    assert days[0].date == date(2024, 1, 1)
    assert days[-1].date == date(2024, 12, 31)
    assert all(d.is_current_month for d in days)


def test_month_name():
    assert month_name(1) == "Jan"
    assert month_name(12) == "Dec"


def test_today_with_timezone():
    assert isinstance(today("Europe/Zurich"), date)


def test_weekday_names_start_on_monday():
    assert weekday_names() == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def test_event_helpers_use_exclusive_end(make_event):
    event = make_event("Trip", "2026-03-01", "2026-03-04")
    assert event_duration_days(event) == 3
    assert event.last_day == date(2026, 3, 3)
    assert event.covers(date(2026, 3, 3))
    assert not event.covers(date(2026, 3, 4))
    assert event_overlaps_range(event, date(2026, 3, 3), date(2026, 3, 10))
    assert not event_overlaps_range(event, date(2026, 3, 4), date(2026, 3, 10))
    assert not event_overlaps_range(make_event("Someday", None, None), date(2026, 1, 1), date(2027, 1, 1))


def test_event_rejects_inverted_dates(make_event):
    with pytest.raises(ValueError):
        make_event("Backwards", "2026-03-04", "2026-03-01")


def test_event_accepts_camel_case():
    from yearglance.models.event import CalendarEvent

    event = CalendarEvent.model_validate(
        {"id": "a", "startDate": "2026-01-01", "endDate": "2026-01-02", "colorId": "3"}
    )
    assert event.color_id == "3"
    assert event.model_dump(by_alias=True, mode="json")["startDate"] == "2026-01-01"


def test_single_day_event_occupies_one_day(make_event):
    event = make_event("Day", "2026-03-01", "2026-03-02")
    covered = [d.date for d in year_days(2026, TODAY) if event.covers(d.date)]
    assert covered == [date(2026, 3, 1)]


@pytest.mark.parametrize("summary", [None, ""])
def test_event_defaults_missing_summary(summary):
    from yearglance.models.event import CalendarEvent

    event = CalendarEvent.model_validate(
        {"id": "a", "summary": summary, "startDate": "2026-01-01", "endDate": "2026-01-02"}
    )
    assert event.summary == "(No title)"
