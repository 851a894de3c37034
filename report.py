"""
Human-readable progress and summary lines for a delete-before run.
"""

import datetime
from typing import Dict, Optional

SEPARATOR = "================================"
PUBLISHED_FORMAT = "%d.%m.%Y"
MODIFIED_FORMAT = "%B %d, %Y"


def _format_date(value: Optional[datetime.datetime], fmt: str) -> str:
    if value is None:
        return "unknown"
    return value.strftime(fmt)


class ReportBuilder:
    """
    Writes the run's progress to a Console as it happens.

    ``singular`` is the content type label used in per-record lines and
    ``total`` the number of records the run will attempt.
    """

    def __init__(self, console, singular: str = "item", total: int = 0):
        self.console = console
        self.singular = singular
        self.total = total

    def overview(self, request, plural: str) -> str:
        line = (
            f'{plural} with status "{request.status}", created before: '
            f"{request.cutoff.display()}. ready to be deleted."
        )
        self.console.log(line)
        return line

    def item_started(self, identifier, metadata: Dict) -> str:
        line = (
            f'Deleting {self.singular.lower()} "{metadata.get("title", "")}" (ID: {identifier}) '
            f'published: {_format_date(metadata.get("created_at"), PUBLISHED_FORMAT)}, '
            f'last modified: {_format_date(metadata.get("modified_at"), MODIFIED_FORMAT)}...'
        )
        self.console.log(line)
        return line

    def item_deleted(self, title: str, successful: int) -> str:
        line = f'✅  Item deleted: "{title}", {successful} of {self.total}.'
        self.console.log(line)
        return line

    def item_failed(self, title: str) -> str:
        line = f'❌  Error! Item "{title}" could not be deleted!'
        self.console.log(line)
        return line

    def separator(self) -> None:
        self.console.log(SEPARATOR)

    def summary(self, outcome) -> str:
        line = summary_line(outcome.successful, outcome.failed)
        self.console.log(line)
        return line


def summary_line(successful: int, failed: int) -> str:
    """Final count line. The failure clause only appears when something failed."""
    line = f"{successful} items deleted."
    if failed:
        line += f" Unsuccessful deletion of {failed} items."
    return line
