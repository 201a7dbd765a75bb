"""CLI entry point for yearglance."""

import argparse
import json
import sys

from .config import config
from .layout.engine import YearLayoutEngine
from .parsing.flights import describe_trip
from .readers.google_export import GoogleExportReader
from .trips import format_trip_date_range, partition_trips, trip_display_name
from .utils.date_utils import parse_date_key, today as current_date
from .utils.exceptions import YearGlanceError
from .utils.logging import setup_logging


def _trip_to_dict(trip, today_date) -> dict:
    data = trip.model_dump(by_alias=True, mode="json")
    data["displayName"] = trip_display_name(trip)
    data["dateRange"] = format_trip_date_range(trip)
    data["isTentative"] = trip.is_tentative
    data["details"] = describe_trip(trip.event.description, today=today_date).model_dump(
        by_alias=True, mode="json"
    )
    return data


def _print_json(data) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="yearglance - Lay out a year of all-day events as JSON"
    )
    parser.add_argument(
        "--events",
        required=True,
        help="JSON file with events (web client cache or Google Calendar API dump)",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Year to lay out (default: current year)",
    )
    parser.add_argument(
        "--view",
        choices=["month", "linear", "decorations", "trips"],
        default="month",
        help="Which layout to print (default: month)",
    )
    parser.add_argument(
        "--month",
        type=int,
        default=None,
        help="Month 1-12 for the month view (default: all twelve)",
    )
    grid = parser.add_mutually_exclusive_group()
    grid.add_argument(
        "--columns",
        type=int,
        default=None,
        help="Column count for the linear view",
    )
    grid.add_argument(
        "--width",
        type=int,
        default=None,
        help="Container width in pixels; the linear view derives its columns from it",
    )
    parser.add_argument(
        "--calendar",
        action="append",
        default=None,
        help="Calendar ID to include (repeatable, default: all)",
    )
    parser.add_argument(
        "--include-visits",
        action="store_true",
        help="List 'Visit:' events with the trips",
    )
    parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="Override today's date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--list-calendars",
        action="store_true",
        help="List calendars found in the events file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else config.log_level
    logger = setup_logging(level=log_level, log_file=config.log_file)

    try:
        reader = GoogleExportReader(args.events)

        if args.list_calendars:
            _print_json(
                [cal.model_dump(by_alias=True, mode="json") for cal in reader.list_calendars()]
            )
            return 0

        today_date = parse_date_key(args.today) if args.today else current_date(config.timezone)
        year = args.year or today_date.year

        engine = YearLayoutEngine(reader, calendar_ids=args.calendar, today_date=today_date)

        if args.view == "month":
            if args.month is not None:
                _print_json(engine.month_layout(year, args.month).to_dict())
            else:
                _print_json([layout.to_dict() for layout in engine.year_month_layouts(year)])

        elif args.view == "linear":
            columns = args.columns
            width = args.width
            if columns is None and width is None:
                columns = 7
            _print_json(engine.linear_layout(year, columns=columns, width=width).to_dict())

        elif args.view == "decorations":
            decorations, birthdays = engine.decorations(year)
            _print_json(
                {
                    "decorations": {
                        key: value.model_dump(by_alias=True, mode="json")
                        for key, value in sorted(decorations.items())
                    },
                    "birthdays": {
                        key: [e.model_dump(by_alias=True, mode="json") for e in events]
                        for key, events in sorted(birthdays.items())
                    },
                }
            )

        else:
            upcoming, past = partition_trips(
                engine.trips(year, include_visits=args.include_visits)
            )
            _print_json(
                {
                    "upcoming": [_trip_to_dict(t, today_date) for t in upcoming],
                    "past": [_trip_to_dict(t, today_date) for t in past],
                }
            )

        return 0

    except YearGlanceError as e:
        logger.error(f"yearglance error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
