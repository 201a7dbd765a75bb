"""Tests for event classification."""

import pytest

from yearglance.classify import (
    EventCategory,
    classify,
    classify_all,
    decoration_color,
    is_birthday,
    is_trip,
    is_visit,
    trip_kind,
)

FLIGHT_DESCRIPTION = (
    "Flight: AA 1149\n"
    "Departure: Austin AUS 4:29pm, Mar 22\n"
    "Arrival: Dallas-Ft. Worth DFW 5:49pm, Mar 22"
)


@pytest.mark.parametrize(
    "summary, expected",
    [
        ("Trip to Japan?", {EventCategory.TRIP, EventCategory.TENTATIVE}),
        ("Visit: Mom & Dad", {EventCategory.VISIT}),
        ("Sarah's 30th Birthday", {EventCategory.BIRTHDAY}),
        ("Road TRIP", {EventCategory.TRIP}),
        ("Leo bday", {EventCategory.BIRTHDAY}),
        ("Aniversario de boda", {EventCategory.BIRTHDAY}),
        ("Dentist", set()),
        ("Lunch?", {EventCategory.TENTATIVE}),
    ],
)
def test_classify(make_event, rules, summary, expected):
    assert classify(make_event(summary), rules) == frozenset(expected)


def test_visit_is_prefix_only(make_event, rules):
    assert is_visit(make_event("  visit: grandma"), rules)
    assert not is_visit(make_event("Planned visit: Mom"), rules)


def test_custom_rules(make_event, rules):
    rules.trip_keywords = ["voyage"]
    rules.birthday_keywords = ["cumple"]
    assert is_trip(make_event("Voyage to Lisbon"), rules)
    assert not is_trip(make_event("Trip to Rome"), rules)
    assert is_birthday(make_event("Cumple Ana"), rules)


def test_classify_all_keys_by_id(make_event, rules):
    events = [make_event("Trip", id="a"), make_event("Dentist", id="b")]
    result = classify_all(events, rules)
    assert result == {"a": frozenset({EventCategory.TRIP}), "b": frozenset()}


class TestDecorationColor:
    def test_first_event_sets_color(self):
        assert decoration_color(None, frozenset({EventCategory.TENTATIVE}), "#222222") == "#222222"

    def test_tentative_keeps_existing_color(self):
        categories = frozenset({EventCategory.TENTATIVE})
        assert decoration_color("#111111", categories, "#222222") == "#111111"

    @pytest.mark.parametrize("category", [EventCategory.TRIP, EventCategory.VISIT])
    def test_trip_or_visit_takes_over(self, category):
        categories = frozenset({category, EventCategory.TENTATIVE})
        assert decoration_color("#111111", categories, "#222222") == "#222222"


class TestTripKind:
    def test_car_in_title(self, make_event):
        assert trip_kind(make_event("Car trip to Tahoe")) == "car"

    def test_car_is_a_whole_word(self, make_event):
        assert trip_kind(make_event("Carnival trip")) is None

    def test_flight_description(self, make_event):
        assert trip_kind(make_event("Trip to Dallas", description=FLIGHT_DESCRIPTION)) == "flight"

    def test_plain_description(self, make_event):
        assert trip_kind(make_event("Trip to Rome", description="Pack sunscreen")) is None
