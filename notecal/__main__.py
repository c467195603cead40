"""Command-line entry for notecal.

Reads a folder of markdown notes, builds the occurrence index and prints the
requested view as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, NoReturn, Optional

from .config_loader import load_settings
from .date_utils import parse_date_strict
from .event_cache import EventCache
from .exceptions import DateParseError, NoteCalError, NoteStoreError
from .models import CalendarViewMode
from .note_store import MarkdownNoteStore
from .notecal_logging import configure_logging, get_logging_status
from .query_engine import QueryEngine
from .settings import validate_settings

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for notecal CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="notecal",
        description="notecal - calendar views over tagged markdown notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m notecal --vault ~/notes                         # Month grid for today
  python -m notecal --vault ~/notes --view day --date 2025-01-15
  python -m notecal --vault ~/notes --view week --search standup
        """,
    )

    parser.add_argument("--vault", required=True, metavar="DIR", help="Folder of markdown notes")
    parser.add_argument(
        "--view",
        choices=[mode.value for mode in CalendarViewMode],
        help="View to print (default: from settings, normally month)",
    )
    parser.add_argument("--date", metavar="YYYY-MM-DD", help="Reference date (default: today)")
    parser.add_argument("--search", metavar="TEXT", help="Only keep events whose title contains TEXT")
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="YAML settings file (default: ./notecal.yaml when present)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        metavar="LEVEL",
        help="Logging level (default: WARNING; NOTECAL_LOG_LEVEL and NOTECAL_DEBUG override)",
    )

    return parser


def _dump(items: list[Any]) -> list[dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Build the requested view for parsed CLI arguments.

    Raises:
        NoteCalError: If settings, the date argument or the note folder are invalid
    """
    settings = load_settings(Path(args.config) if args.config else None)
    for problem in validate_settings(settings):
        logger.warning("Settings: %s", problem)

    reference: date = parse_date_strict(args.date) if args.date else date.today()
    view = CalendarViewMode(args.view) if args.view else settings.default_view

    vault = Path(args.vault).expanduser()
    if not vault.is_dir():
        raise NoteStoreError("Vault is not a directory", details={"path": str(vault)})

    cache = EventCache(MarkdownNoteStore(vault), settings)
    engine = QueryEngine(settings)
    index = engine.filter_by_text(cache.get(), args.search)

    result: dict[str, Any] = {"view": view.value, "title": engine.format_date_for_title(reference)}
    if view == CalendarViewMode.MONTH:
        result["weeks"] = [
            week.model_dump(mode="json") for week in engine.weeks_for_month(reference, index)
        ]
    elif view == CalendarViewMode.WEEK:
        result["days"] = _dump(engine.week_grid(reference, index))
    else:
        result["occurrences"] = _dump(engine.day_occurrences(reference, index))
    return result


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the notecal CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger.debug("Logger levels: %s", get_logging_status())

    try:
        result = run(args)
    except DateParseError as exc:
        parser.error(str(exc))
    except NoteCalError as exc:
        print(f"notecal: {exc}", file=sys.stderr)
        sys.exit(1)

    json.dump(result, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    sys.exit(0)


if __name__ == "__main__":
    main()
