"""CLI entry point for Calendar Widget application."""

import argparse
import json
import sys
from typing import Optional

from .config import KeywordConfig, config
from .extraction.extractor import EventExtractor, group_events_by_date
from .inference.inferencer import SchemaInferencer
from .readers.notion_reader import NotionReader
from .utils.date_utils import current_month
from .utils.exceptions import CalendarWidgetError, ConfigurationError
from .utils.logging import setup_logging
from .widget.engine import WidgetEngine
from .widget.token import decode_settings


def _parse_month(value: str) -> tuple[int, int]:
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid month: {value}. Use YYYY-MM") from e
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"Invalid month: {value}. Use YYYY-MM")
    return year, month


def _create_engine(api_token: Optional[str]) -> WidgetEngine:
    """Create a widget engine backed by Notion."""
    token = api_token or config.notion.api_token
    if not token:
        raise ConfigurationError("No Notion API token (set NOTION_API_TOKEN or --api-token)")

    keywords = KeywordConfig(config.keywords_file).table()
    return WidgetEngine(
        NotionReader(token, config.notion),
        inferencer=SchemaInferencer(keywords),
        extractor=EventExtractor(keywords),
    )


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Calendar Widget - Turn a Notion database into calendar events"
    )
    parser.add_argument(
        "--api-token",
        type=str,
        help="Notion integration token (default: NOTION_API_TOKEN)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that the API token can reach Notion",
    )
    parser.add_argument(
        "--list-collections",
        action="store_true",
        help="List databases shared with the integration",
    )
    parser.add_argument(
        "--analyze",
        metavar="DB_ID",
        help="Infer the role mapping for a database",
    )
    parser.add_argument(
        "--setup",
        metavar="DB_ID",
        help="Infer the role mapping for a database and print a settings token",
    )
    parser.add_argument(
        "--events",
        metavar="TOKEN",
        help="Print events for a settings token",
    )
    parser.add_argument(
        "--month",
        type=_parse_month,
        default=None,
        help="Month to fetch (YYYY-MM format, default: current month)",
    )
    parser.add_argument(
        "--start-date",
        type=str,
        default=None,
        help="Start date for the event range (YYYY-MM-DD format)",
    )
    parser.add_argument(
        "--end-date",
        type=str,
        default=None,
        help="End date for the event range (YYYY-MM-DD format)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()

    log_level = "DEBUG" if args.verbose else config.log_level
    logger = setup_logging(level=log_level, log_file=config.log_file)

    try:
        if args.events:
            settings = decode_settings(args.events)
            engine = _create_engine(settings.credential)

            if args.start_date or args.end_date:
                if not (args.start_date and args.end_date):
                    logger.error("--start-date and --end-date must be given together")
                    return 1
                result = engine.fetch_events(settings, args.start_date, args.end_date)
            else:
                year, month = args.month or current_month(config.timezone)
                result = engine.fetch_month(settings, year, month)

            for error in result.errors:
                logger.error(error)

            for day, events in sorted(group_events_by_date(result.events).items()):
                print(day)
                for event in events:
                    marker = "!" if event.is_important else "-"
                    print(f"  {marker} {event.title or '(untitled)'}")
                    for schedule in event.schedules:
                        print(f"      {schedule}")
            print(f"\nTotal: {len(result.events)} event(s)")
            return 1 if result.errors else 0

        engine = _create_engine(args.api_token)

        if args.check:
            if engine.reader.check_credential():
                print("Connection OK")
                return 0
            print("Connection failed")
            return 1

        if args.list_collections:
            collections = engine.reader.list_collections()
            print(f"Found {len(collections)} database(s):")
            for collection in collections:
                print(f"  - {collection.display_name} (ID: {collection.id})")
            return 0

        if args.analyze:
            mapping = engine.analyze(args.analyze).unwrap()
            print(json.dumps(mapping.model_dump(mode="json"), ensure_ascii=False, indent=2))
            return 0

        if args.setup:
            token = args.api_token or config.notion.api_token
            setup = engine.setup(token, args.setup)
            for warning in setup.warnings:
                logger.warning(warning)
            print(setup.token)
            return 0

        # No action specified
        parser.print_help()
        return 0

    except CalendarWidgetError as e:
        error = e.to_dict()
        logger.error(f"Calendar widget error [{error['code']}]: {error['message']}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
