"""Structured flight itinerary models parsed from event descriptions."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_FLIGHT_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class FlightEndpoint(BaseModel):
    """One side of a flight leg: ``Austin AUS 4:29pm, Mar 22``."""

    city: str = ""
    code: str
    time: str
    date_text: Optional[str] = None  # "Mar 22" as written
    date: Optional[dt.date] = None  # best-effort year inference

    model_config = _FLIGHT_CONFIG


class ParsedFlight(BaseModel):
    """A single flight leg. Any of its parts may be missing."""

    label: Optional[str] = None  # "Outbound", "Return"
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    departure: Optional[FlightEndpoint] = None
    arrival: Optional[FlightEndpoint] = None

    model_config = _FLIGHT_CONFIG

    @property
    def is_displayable(self) -> bool:
        return bool(self.flight_number or self.departure or self.arrival)

    @property
    def departure_code(self) -> Optional[str]:
        return self.departure.code if self.departure else None

    @property
    def departure_time(self) -> Optional[str]:
        return self.departure.time if self.departure else None

    @property
    def arrival_code(self) -> Optional[str]:
        return self.arrival.code if self.arrival else None

    @property
    def arrival_time(self) -> Optional[str]:
        return self.arrival.time if self.arrival else None


class FlightSection(BaseModel):
    """Flights grouped under an ``Outbound:`` or ``Return:`` header."""

    label: Optional[str] = None
    flights: list[ParsedFlight] = Field(default_factory=list)

    model_config = _FLIGHT_CONFIG


class FlightItinerary(BaseModel):
    """Everything recovered from a structured trip description."""

    confirmation_codes: list[str] = Field(default_factory=list)
    sections: list[FlightSection] = Field(default_factory=list)
    extras: dict[str, str] = Field(default_factory=dict)  # "Hotel", "Car Rental"

    model_config = _FLIGHT_CONFIG

    @property
    def flights(self) -> list[ParsedFlight]:
        return [flight for section in self.sections for flight in section.flights]

    @property
    def outbound(self) -> list[ParsedFlight]:
        return self._section_flights("outbound")

    @property
    def return_flights(self) -> list[ParsedFlight]:
        return self._section_flights("return")

    def _section_flights(self, label: str) -> list[ParsedFlight]:
        return [
            flight
            for section in self.sections
            if section.label and section.label.lower() == label
            for flight in section.flights
        ]


class TripDescription(BaseModel):
    """What a trip card shows for an event description."""

    text: str = ""  # sanitized, Gmail link removed
    email_link: Optional[str] = None
    itinerary: Optional[FlightItinerary] = None
    preview: list[str] = Field(default_factory=list)
    has_more: bool = False

    model_config = _FLIGHT_CONFIG

    @property
    def is_structured(self) -> bool:
        return self.itinerary is not None
