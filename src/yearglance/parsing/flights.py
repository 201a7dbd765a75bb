"""Flight itinerary parsing for trip descriptions.

Descriptions follow a loose, human-edited format::

    Confirmation: ABC123

    Outbound:
    Flight: AA 1149
    Departure: Austin AUS 4:29pm, Mar 22
    Arrival: Dallas-Ft. Worth DFW 5:49pm, Mar 22

    Hotel: Hilton Garden Inn
    123 Main St

Parsing is best effort. Text is first split into labeled lines, then each
field is parsed on its own; anything that does not fit is ignored, and when no
flight structure is found at all the caller shows the sanitized text instead.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..config import config
from ..models.flight import (
    FlightEndpoint,
    FlightItinerary,
    FlightSection,
    ParsedFlight,
    TripDescription,
)
from ..utils.date_utils import MONTH_NAMES, add_months, today as current_date
from .sanitize import extract_gmail_link, sanitize_description, strip_gmail_link

logger = logging.getLogger(__name__)

EXTRA_LABELS = ("Hotel", "Car Rental")

SECTION_HEADER_RE = re.compile(r"^(outbound|return)(?:\s+flights?)?\s*:", re.IGNORECASE)
FIELD_RE = re.compile(r"^(flight|departure|arrival)\s*:\s*(.*)$", re.IGNORECASE)
CONFIRMATION_RE = re.compile(
    r"confirmation(?:\s+(?:code|number|#))?s?\s*[:#\s]\s*(.*)$", re.IGNORECASE
)
CODE_RE = re.compile(r"\b[A-Z0-9]{5,8}\b")
# Codes directly after the label, optionally as a comma or slash separated list
CODE_LIST_RE = re.compile(r"^[\s:#]*([A-Z0-9]{5,8}\b(?:\s*[,/]\s*[A-Z0-9]{5,8}\b)*)")
PARENTHETICAL_RE = re.compile(r"\([^)]*\)")

FLIGHT_NUMBER_RE = re.compile(r"^(?:flight\s*:\s*)?([A-Z][A-Z0-9]|[0-9][A-Z])\s*(\d{1,4})\b", re.IGNORECASE)
LOCATION_PREFIX_RE = re.compile(r"^(?:departure|arrival)\s*:\s*", re.IGNORECASE)
LOCATION_RE = re.compile(
    r"^(?:(?P<city>.+?)\s+)??"
    r"(?P<code>[A-Z]{3})\s+"
    r"(?P<time>\d{1,2}:\d{2}(?:\s*(?i:[ap]\.?m\.?))?)"
    r"(?:\s*,?\s*(?P<date>[A-Za-z]{3,9}\.?\s+\d{1,2})(?:\s*,\s*(?P<year>\d{4}))?)?"
)
SHORT_DATE_RE = re.compile(r"^([A-Za-z]{3})[A-Za-z]*\.?\s+(\d{1,2})$")


@dataclass(frozen=True)
class _Token:
    """One labeled line of a description."""

    kind: str  # "header", "flight", "departure", "arrival"
    value: str


def extract_labeled_blocks(
    text: str, labels: tuple[str, ...] = EXTRA_LABELS
) -> tuple[dict[str, str], str]:
    """
    Pull ``Label: ...`` blocks out of a description.

    A block starts at a line beginning with one of ``labels`` and runs until a
    blank line or the next labeled line (section header, flight field,
    another block).

    Args:
        text: Sanitized description
        labels: Block labels to extract

    Returns:
        Tuple of (blocks keyed by label, text with the blocks removed)
    """
    label_re = re.compile(
        r"^\s*(" + "|".join(re.escape(label) for label in labels) + r")\s*:\s*(.*)$",
        re.IGNORECASE,
    )
    canonical = {label.lower(): label for label in labels}

    extras: dict[str, str] = {}
    remaining: list[str] = []
    lines = text.split("\n")
    i = 0

    while i < len(lines):
        match = label_re.match(lines[i])
        if not match:
            remaining.append(lines[i])
            i += 1
            continue

        label = canonical[match.group(1).lower()]
        body = [match.group(2).strip()] if match.group(2).strip() else []
        i += 1

        while i < len(lines):
            line = lines[i].strip()
            if not line or _is_labeled(line) or label_re.match(line):
                break
            body.append(line)
            i += 1

        block = "\n".join(body)
        extras[label] = f"{extras[label]}\n{block}" if label in extras else block

    return extras, "\n".join(remaining)


def _is_labeled(line: str) -> bool:
    return bool(SECTION_HEADER_RE.match(line) or FIELD_RE.match(line))


def extract_confirmation_codes(text: str) -> list[str]:
    """Collect booking codes from every ``Confirmation ...`` line."""
    codes: list[str] = []
    for line in text.split("\n"):
        match = CONFIRMATION_RE.search(line)
        if not match:
            continue
        rest = PARENTHETICAL_RE.sub(" ", match.group(1))
        listed = CODE_LIST_RE.match(rest)
        if not listed:
            continue
        for code in CODE_RE.findall(listed.group(1)):
            if code not in codes:
                codes.append(code)
    return codes


def parse_flight_line(line: str) -> Optional[tuple[str, str]]:
    """Parse ``Flight: UA 2312`` into ``("UA", "2312")``."""
    match = FLIGHT_NUMBER_RE.match(line.strip())
    if not match:
        return None
    return match.group(1).upper(), match.group(2)


def _month_day(text: str) -> Optional[tuple[int, int]]:
    match = SHORT_DATE_RE.match(text.strip())
    if not match:
        return None
    months = [name.lower() for name in MONTH_NAMES]
    month_key = match.group(1).lower()
    if month_key not in months:
        return None
    return months.index(month_key) + 1, int(match.group(2))


def resolve_short_date(
    text: str,
    today: Optional[date] = None,
    lookback_months: Optional[int] = None,
) -> Optional[date]:
    """
    Infer the full date of a ``Mon D`` string such as ``Mar 22``.

    The current year is assumed unless that date lies more than
    ``lookback_months`` in the past, in which case the booking is taken to be
    for next year. This is a heuristic: a booking written exactly at the
    boundary can resolve to the wrong year.

    Returns:
        The inferred date, or None for an unknown month or impossible day
    """
    parsed = _month_day(text)
    if parsed is None:
        return None
    month, day = parsed

    if today is None:
        today = current_date(config.timezone)
    if lookback_months is None:
        lookback_months = config.flight_lookback_months

    try:
        candidate: Optional[date] = date(today.year, month, day)
    except ValueError:
        # Feb 29 outside a leap year may still exist next year
        candidate = None

    if candidate is None or candidate < add_months(today, -lookback_months):
        try:
            candidate = date(today.year + 1, month, day)
        except ValueError:
            return None
    return candidate


def parse_location_line(
    line: str,
    today: Optional[date] = None,
    lookback_months: Optional[int] = None,
) -> Optional[FlightEndpoint]:
    """
    Parse a departure or arrival line.

    Accepts ``Departure: San Francisco SFO 12:05am, Dec 19 (local time)`` as
    well as a bare ``SFO 12:05am``. Airport codes must be three uppercase
    letters; times are normalized to ``12:05am``.
    """
    content = LOCATION_PREFIX_RE.sub("", line.strip())
    content = PARENTHETICAL_RE.sub(" ", content).strip()

    match = LOCATION_RE.match(content)
    if not match:
        return None

    time_text = re.sub(r"[\s.]+", "", match.group("time")).lower()

    date_text = None
    resolved = None
    if match.group("date"):
        candidate_text = " ".join(match.group("date").split())
        if match.group("year"):
            resolved = _explicit_date(candidate_text, int(match.group("year")))
        else:
            resolved = resolve_short_date(candidate_text, today, lookback_months)
        if resolved is not None:
            date_text = candidate_text

    return FlightEndpoint(
        city=(match.group("city") or "").strip(" ,"),
        code=match.group("code"),
        time=time_text,
        date_text=date_text,
        date=resolved,
    )


def _explicit_date(text: str, year: int) -> Optional[date]:
    parsed = _month_day(text)
    if parsed is None:
        return None
    try:
        return date(year, *parsed)
    except ValueError:
        return None


def _tokenize(text: str) -> list[_Token]:
    tokens = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        header = SECTION_HEADER_RE.match(line)
        if header:
            tokens.append(_Token("header", header.group(1).capitalize()))
            continue
        field = FIELD_RE.match(line)
        if field:
            tokens.append(_Token(field.group(1).lower(), line))
    return tokens


def _parse_sections(
    tokens: list[_Token], today: Optional[date], lookback_months: Optional[int]
) -> list[FlightSection]:
    sections: list[tuple[Optional[str], list[dict]]] = []
    current: Optional[tuple[Optional[str], list[dict]]] = None
    flight: Optional[dict] = None

    def open_flight() -> dict:
        nonlocal current
        if current is None:
            current = (None, [])
            sections.append(current)
        new_flight = {"label": current[0]}
        current[1].append(new_flight)
        return new_flight

    for token in tokens:
        if token.kind == "header":
            current = (token.value, [])
            sections.append(current)
            flight = None
            continue

        if token.kind == "flight":
            flight = open_flight()
            parsed = parse_flight_line(token.value)
            if parsed:
                flight["airline"], flight["flight_number"] = parsed
            continue

        # A second departure (or arrival) without a Flight: line starts a new leg
        if flight is None or token.kind in flight:
            flight = open_flight()
        endpoint = parse_location_line(token.value, today, lookback_months)
        if endpoint is not None:
            flight[token.kind] = endpoint
        else:
            flight.setdefault(token.kind, None)

    result = []
    for label, raw_flights in sections:
        flights = [ParsedFlight(**raw) for raw in raw_flights]
        flights = [f for f in flights if f.is_displayable]
        if flights:
            result.append(FlightSection(label=label, flights=flights))
    return result


def parse_itinerary(
    description: Optional[str],
    today: Optional[date] = None,
    lookback_months: Optional[int] = None,
) -> Optional[FlightItinerary]:
    """
    Parse a trip description into flights, confirmation codes and extras.

    Args:
        description: Raw or sanitized description
        today: Reference date for year inference (defaults to today)
        lookback_months: Year-inference window (defaults to config)

    Returns:
        Parsed itinerary, or None when the description holds no usable
        ``Flight:``/``Departure:``/``Arrival:`` lines
    """
    return _parse_text(sanitize_description(description), today, lookback_months)


def _parse_text(
    text: str, today: Optional[date], lookback_months: Optional[int]
) -> Optional[FlightItinerary]:
    if not text:
        return None

    extras, remaining = extract_labeled_blocks(text)
    tokens = _tokenize(remaining)
    if not any(token.kind != "header" for token in tokens):
        logger.debug("No flight structure found in description")
        return None

    sections = _parse_sections(tokens, today, lookback_months)
    if not sections:
        logger.debug("Flight lines found but none could be parsed")
        return None

    return FlightItinerary(
        confirmation_codes=extract_confirmation_codes(remaining),
        sections=sections,
        extras=extras,
    )


def describe_trip(
    description: Optional[str],
    today: Optional[date] = None,
    preview_lines: Optional[int] = None,
) -> TripDescription:
    """
    Build what a trip card shows for a description.

    Structured itineraries are returned parsed; anything else degrades to the
    first ``preview_lines`` non-blank lines of sanitized text.
    """
    if not description or not description.strip():
        return TripDescription()

    if preview_lines is None:
        preview_lines = config.preview_lines

    email_link = extract_gmail_link(description)
    text = sanitize_description(strip_gmail_link(description))
    itinerary = _parse_text(text, today, None)

    if itinerary is not None:
        return TripDescription(text=text, email_link=email_link, itinerary=itinerary)

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return TripDescription(
        text=text,
        email_link=email_link,
        preview=lines[:preview_lines],
        has_more=len(lines) > preview_lines,
    )


def format_minimal_flight_info(flight: ParsedFlight) -> str:
    """Short bar label such as ``AA 1149 · 4:29pm``."""
    parts = []
    if flight.flight_number:
        parts.append(f"{flight.airline or ''} {flight.flight_number}".strip())
    if flight.departure_time:
        parts.append(flight.departure_time)
    elif flight.departure_code:
        parts.append(flight.departure_code)
    return " · ".join(parts)
