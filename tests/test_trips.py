"""Tests for trip and visit aggregation."""

from datetime import date

import pytest

from yearglance.models.trip import TripStatus
from yearglance.trips import (
    filter_and_enrich_trips,
    format_trip_date_range,
    is_past,
    minimap_weeks,
    partition_trips,
    trip_display_name,
    trip_from_event,
    trip_status,
)

TODAY = date(2026, 2, 1)


@pytest.mark.parametrize(
    "summary, description, expected",
    [
        ("Trip to Japan?", None, TripStatus.TODO),
        ("Trip to Japan?", "Flight: JL 1\nDeparture: NRT 9:00am", TripStatus.HAS_INFO),
        ("Trip to Rome", None, TripStatus.PENDING),
        ("Trip to Rome", "   \n ", TripStatus.PENDING),
        ("Trip to Rome", "Hotel booked", TripStatus.HAS_INFO),
        ("Trip?", "", TripStatus.TODO),
        ("Trip?", "Booked", TripStatus.HAS_INFO),
    ],
)
def test_trip_status(make_event, summary, description, expected):
    assert trip_status(make_event(summary, description=description)) == expected


def test_is_past_uses_last_day(make_event):
    event = make_event("Trip", "2026-02-15", "2026-02-23")
    assert not is_past(event, today=date(2026, 2, 22))
    assert is_past(event, today=date(2026, 2, 23))


def test_filter_and_enrich_trips(make_event, rules):
    events = [
        make_event("Trip to Rome", "2026-03-01", "2026-03-05", id="rome"),
        make_event("Visit: Mom", "2026-02-10", "2026-02-12", id="mom"),
        make_event("Dentist", "2026-01-05", "2026-01-06", id="dentist"),
        make_event("Japan trip?", "2026-01-10", "2026-01-20", id="japan"),
        make_event("Trip someday", None, None, id="undated"),
    ]

    trips = filter_and_enrich_trips(events, today=TODAY, rules=rules)
    assert [t.event.id for t in trips] == ["japan", "rome"]
    assert trips[0].is_past and not trips[1].is_past
    assert trips[0].trip_status == TripStatus.TODO
    assert trips[0].is_tentative

    with_visits = filter_and_enrich_trips(events, today=TODAY, include_visits=True, rules=rules)
    assert [t.event.id for t in with_visits] == ["japan", "mom", "rome"]
    assert with_visits[1].is_visit


def test_trip_that_is_also_visit_is_a_trip(make_event, rules):
    trip = trip_from_event(make_event("Visit: family trip"), today=TODAY, rules=rules)
    assert not trip.is_visit


def test_partition_trips(make_event, rules):
    events = [
        make_event("Trip A", "2026-01-10", "2026-01-12"),
        make_event("Trip B", "2026-03-10", "2026-03-12"),
    ]
    upcoming, past = partition_trips(filter_and_enrich_trips(events, today=TODAY, rules=rules))
    assert [t.event.summary for t in upcoming] == ["Trip B"]
    assert [t.event.summary for t in past] == ["Trip A"]


@pytest.mark.parametrize(
    "summary, expected",
    [
        ("Trip to Japan?", "to Japan?"),
        ("Japan Trip", "Japan"),
        ("Trip - Tokyo: Kyoto", "Tokyo Kyoto"),
        ("Trip", "Unnamed Trip"),
        ("Trip?", "Unnamed Trip?"),
    ],
)
def test_trip_display_name(make_event, rules, summary, expected):
    trip = trip_from_event(make_event(summary), today=TODAY, rules=rules)
    assert trip_display_name(trip) == expected


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("2026-02-15", "2026-02-16", "Sun Feb 15"),
        ("2026-02-15", "2026-02-23", "Sun Feb 15 - Sun 22"),
        ("2025-02-14", "2025-03-03", "Fri Feb 14 - Sun Mar 2"),
    ],
)
def test_format_trip_date_range(make_event, rules, start, end, expected):
    trip = trip_from_event(make_event("Trip", start, end), today=TODAY, rules=rules)
    assert format_trip_date_range(trip) == expected


class TestMinimap:
    def test_short_trip_gets_context_weeks(self):
        weeks = minimap_weeks(date(2026, 2, 18), date(2026, 2, 21), today=date(2026, 2, 19))

        assert len(weeks) == 3
        assert all(len(w) == 7 for w in weeks)
        assert weeks[0][0].date == date(2026, 2, 9)
        assert weeks[-1][-1].date == date(2026, 3, 1)

        in_trip = [d.date for w in weeks for d in w if d.is_in_trip]
        assert in_trip == [date(2026, 2, 18), date(2026, 2, 19), date(2026, 2, 20)]
        assert [d.date_key for w in weeks for d in w if d.is_today] == ["2026-02-19"]

    def test_trip_filling_all_weeks_has_no_context(self):
        weeks = minimap_weeks(date(2026, 2, 2), date(2026, 3, 8), today=TODAY)
        assert len(weeks) == 5
        assert weeks[0][0].date == date(2026, 2, 2)
        assert weeks[-1][-1].date == date(2026, 3, 8)

    def test_long_trip_shows_every_week(self):
        weeks = minimap_weeks(date(2026, 2, 2), date(2026, 3, 20), today=TODAY)
        assert len(weeks) == 7

    def test_single_spare_week_goes_after(self):
        weeks = minimap_weeks(date(2026, 2, 2), date(2026, 3, 1), today=TODAY)
        assert len(weeks) == 5
        assert weeks[0][0].date == date(2026, 2, 2)
        assert weeks[-1][-1].date == date(2026, 3, 8)
