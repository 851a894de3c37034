#!/usr/bin/env python3
"""
Delete WordPress content of a given type and status created before a date.

    delete-before <post_type> <post_status> <year> <month> <day>
                  [--number=<n>] [--date=<column>] [--yes] [--dry-run]

Examples:
    delete-before post draft 2020 1 1
    delete-before attachment inherit 2019 6 30 --number=100 --date=post_modified
"""

import argparse
import logging
import sys

from config import ConfigError, load_settings
from console import Console
from content_store import DATE_COLUMNS, DEFAULT_DATE_COLUMN, UNBOUNDED, StoreError
from deletion_executor import display_metadata, execute
from deletion_planner import NoMatches, confirm_deletion, plan
from deletion_request import validate_request
from report import ReportBuilder
from wp_rest_store import WordPressRestStore

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_USAGE = 2
EXIT_NO_MATCHES = 3
EXIT_DECLINED = 4
EXIT_PARTIAL_FAILURE = 5
EXIT_STORE_ERROR = 6

USAGE_MESSAGE = (
    "Parameters: POST TYPE, POST STATUS, YEAR, MONTH and DAY are required "
    "(in this exact order). Please check your parameters. Command syntax is: "
    "delete-before <post_type> <post_status> <year> <month> <day> "
    "[--number=100] [--date=post_date]."
)


class RunResult:
    """How a run ended. ``outcome`` is set only when deletion started."""

    COMPLETED = "completed"
    INVALID = "invalid"
    NO_MATCHES = "no_matches"
    DECLINED = "declined"
    DRY_RUN = "dry_run"

    def __init__(self, status, request=None, error=None, match_set=None, outcome=None):
        self.status = status
        self.request = request
        self.error = error
        self.match_set = match_set
        self.outcome = outcome

    @property
    def exit_code(self) -> int:
        if self.status == self.INVALID:
            return EXIT_VALIDATION
        if self.status == self.NO_MATCHES:
            return EXIT_NO_MATCHES
        if self.status == self.DECLINED:
            return EXIT_DECLINED
        if self.outcome is not None and self.outcome.failed:
            return EXIT_PARTIAL_FAILURE
        return EXIT_OK


def run(
    store,
    console,
    content_type,
    status,
    year,
    month,
    day,
    number=UNBOUNDED,
    date_column=DEFAULT_DATE_COLUMN,
    assume_yes=False,
    dry_run=False,
) -> RunResult:
    """Validate, plan, confirm and delete. Every stopping point has its own result."""
    request, error = validate_request(
        store, content_type, status, year, month, day, number, date_column, console
    )
    if error is not None:
        console.error(error.message)
        return RunResult(RunResult.INVALID, error=error)

    labels = store.type_label(request.content_type)
    report = ReportBuilder(console, labels["singular"])
    report.overview(request, labels["plural"])

    planned = plan(request, store)
    if isinstance(planned, NoMatches):
        console.warning("No items matching given parameters. Check your parameters and try again.")
        return RunResult(RunResult.NO_MATCHES, request=request)

    match_set = planned.match_set
    if dry_run:
        for identifier in match_set:
            metadata = display_metadata(store, identifier, console)
            console.log(f'- {identifier}: "{metadata["title"]}"')
        console.log(f"🔍 Dry run: {match_set.total} items would be deleted.")
        return RunResult(RunResult.DRY_RUN, request=request, match_set=match_set)

    if not confirm_deletion(request, match_set, console, assume_yes=assume_yes):
        console.log("Nothing was deleted.")
        return RunResult(RunResult.DECLINED, request=request, match_set=match_set)

    report.total = match_set.total
    outcome = execute(request, match_set, store, report)
    report.summary(outcome)
    return RunResult(RunResult.COMPLETED, request=request, match_set=match_set, outcome=outcome)


def _number(value):
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'"{value}" is not a whole number')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="delete-before",
        description="Delete WordPress posts, pages or media of a given type and status "
        "created before a given date.",
    )
    parser.add_argument(
        "params",
        nargs="*",
        metavar="post_type post_status year month day",
        help="What to delete and the date (exclusive) before which it was created.",
    )
    parser.add_argument(
        "--number",
        type=_number,
        default=UNBOUNDED,
        help="Maximum number of items to delete (default: all matching items).",
    )
    parser.add_argument(
        "--date",
        default=DEFAULT_DATE_COLUMN,
        help=f"Date column compared with the cutoff: {', '.join(DATE_COLUMNS)} "
        f"(default: {DEFAULT_DATE_COLUMN}).",
    )
    parser.add_argument(
        "--yes", action="store_true", help="Answer yes to the final confirmation."
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Only list matching items, do not delete them."
    )
    parser.add_argument("--debug", action="store_true", help="Log HTTP requests.")
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.params) != 5:
        parser.error(USAGE_MESSAGE)
    post_type, post_status, *date_parts = args.params
    try:
        year, month, day = (int(part) for part in date_parts)
    except ValueError:
        parser.error(f"YEAR, MONTH and DAY must be whole numbers, got {' '.join(date_parts)}.")
    args.post_type = post_type
    args.post_status = post_status
    args.year, args.month, args.day = year, month, day
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    console = Console()

    try:
        store = WordPressRestStore.from_settings(load_settings())
        result = run(
            store,
            console,
            args.post_type,
            args.post_status,
            args.year,
            args.month,
            args.day,
            number=args.number,
            date_column=args.date,
            assume_yes=args.yes,
            dry_run=args.dry_run,
        )
    except (ConfigError, StoreError) as e:
        console.error(str(e))
        return EXIT_STORE_ERROR

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
