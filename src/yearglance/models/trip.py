"""Trip list models."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .event import CalendarEvent


class TripStatus(str, Enum):
    """Planning state of a trip."""

    TODO = "todo"  # "?" in the title, nothing booked yet
    PENDING = "pending"  # confirmed but no details
    HAS_INFO = "has-info"  # description carries travel info


class Trip(BaseModel):
    """A trip or visit event enriched for the trip list."""

    event: CalendarEvent
    trip_status: TripStatus
    is_past: bool
    is_visit: bool = False

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @property
    def is_tentative(self) -> bool:
        return "?" in self.event.summary


class MinimapDay(BaseModel):
    """One cell of the small week grid shown next to a trip."""

    date_key: str
    date: dt.date
    is_in_trip: bool
    is_today: bool

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
