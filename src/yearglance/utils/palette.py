"""Google Calendar event color palette."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.event import CalendarEvent

# Background (pastel) versions of the Google Calendar color IDs
EVENT_COLORS: dict[str, str] = {
    "1": "#a4bdfc",  # Lavender
    "2": "#7ae7bf",  # Sage
    "3": "#dbadff",  # Grape
    "4": "#ff887c",  # Flamingo
    "5": "#fbd75b",  # Banana
    "6": "#ffb878",  # Tangerine
    "7": "#46d6db",  # Peacock
    "8": "#e1e1e1",  # Graphite
    "9": "#5484ed",  # Blueberry
    "10": "#51b749",  # Basil
    "11": "#dc2127",  # Tomato
    "default": "#a4bdfc",  # Lavender
}

DEFAULT_COLOR = EVENT_COLORS["default"]


def event_color(event: "CalendarEvent") -> str:
    """
    Resolve the bar color of an event.

    Priority: the event's own color ID, then the owning calendar's background
    color, then the default. An unknown color ID falls back to the default,
    not to the calendar color.
    """
    if event.color_id:
        return EVENT_COLORS.get(event.color_id, DEFAULT_COLOR)
    return event.background_color or DEFAULT_COLOR


def use_light_text(hex_color: str) -> bool:
    """True when white text reads better than black on ``hex_color``."""
    value = hex_color.lstrip("#")
    if len(value) != 6:
        return False

    try:
        r = int(value[0:2], 16)
        g = int(value[2:4], 16)
        b = int(value[4:6], 16)
    except ValueError:
        return False

    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return luminance < 0.5
