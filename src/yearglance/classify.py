"""Event classification from title keywords.

Categories are non-exclusive: "Trip to Japan?" is both a trip and tentative.
"""

import re
from enum import Enum
from typing import Optional

from .config import RulesConfig, rules_config
from .models.event import CalendarEvent
from .parsing.flights import parse_itinerary

CAR_RE = re.compile(r"\bcar\b", re.IGNORECASE)


class EventCategory(str, Enum):
    """Semantic tags derived from an event title."""

    TENTATIVE = "tentative"
    TRIP = "trip"
    VISIT = "visit"
    BIRTHDAY = "birthday"


def is_tentative(event: CalendarEvent) -> bool:
    return "?" in event.summary


def is_trip(event: CalendarEvent, rules: Optional[RulesConfig] = None) -> bool:
    rules = rules or rules_config
    summary = event.summary.lower()
    return any(keyword in summary for keyword in rules.trip_keywords)


def is_visit(event: CalendarEvent, rules: Optional[RulesConfig] = None) -> bool:
    """Prefix match: "Visit: Mom" is a visit, "Planned visit: Mom" is not."""
    rules = rules or rules_config
    summary = event.summary.lower().lstrip()
    return any(summary.startswith(prefix) for prefix in rules.visit_prefixes)


def is_birthday(event: CalendarEvent, rules: Optional[RulesConfig] = None) -> bool:
    rules = rules or rules_config
    summary = event.summary.lower()
    return any(keyword in summary for keyword in rules.birthday_keywords)


def classify(event: CalendarEvent, rules: Optional[RulesConfig] = None) -> frozenset[EventCategory]:
    """
    Compute every category of an event in one pass.

    Args:
        event: Event to classify
        rules: Keyword rules (defaults to the global rules config)

    Returns:
        Set of categories; empty for a plain event
    """
    categories = set()
    if is_tentative(event):
        categories.add(EventCategory.TENTATIVE)
    if is_trip(event, rules):
        categories.add(EventCategory.TRIP)
    if is_visit(event, rules):
        categories.add(EventCategory.VISIT)
    if is_birthday(event, rules):
        categories.add(EventCategory.BIRTHDAY)
    return frozenset(categories)


def classify_all(
    events: list[CalendarEvent], rules: Optional[RulesConfig] = None
) -> dict[str, frozenset[EventCategory]]:
    """Classify a batch of events, keyed by event id."""
    return {event.id: classify(event, rules) for event in events}


def decoration_color(
    existing_color: Optional[str],
    categories: frozenset[EventCategory],
    event_color: str,
) -> str:
    """
    Pick the shading color of a day when another event also decorates it.

    A trip or visit always takes over the day's color; any other event keeps
    the color already there.
    """
    if existing_color and not (categories & {EventCategory.TRIP, EventCategory.VISIT}):
        return existing_color
    return event_color


def trip_kind(event: CalendarEvent) -> Optional[str]:
    """
    Icon hint for a trip bar.

    Returns:
        "car" when the title mentions a car, "flight" when the description
        parses to at least one flight, otherwise None
    """
    if CAR_RE.search(event.summary):
        return "car"

    if event.description:
        itinerary = parse_itinerary(event.description)
        if itinerary is not None and itinerary.flights:
            return "flight"
    return None
