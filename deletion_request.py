"""
Validated description of what a delete-before run removes.

validate_request() is the only place input is checked. It returns a
``(request, error)`` pair so callers can tell why a run stopped without
parsing messages.
"""

import datetime
from typing import Optional, Tuple

from content_store import (
    ATTACHMENT_STATUS,
    ATTACHMENT_TYPE,
    DATE_COLUMNS,
    DEFAULT_DATE_COLUMN,
    UNBOUNDED,
    ContentStore,
)


class ValidationError(Exception):
    """Base class for rejected request parameters."""

    def __init__(self, value, message):
        super().__init__(message)
        self.value = value
        self.message = message


class UnknownContentType(ValidationError):
    def __init__(self, content_type):
        super().__init__(
            content_type,
            f'There is no "{content_type}" post type, please check the "post_type" parameter.',
        )


class UnknownStatus(ValidationError):
    def __init__(self, status):
        super().__init__(
            status,
            f'There is no "{status}" post status, please check the "post status" parameter.',
        )


class InvalidDate(ValidationError):
    def __init__(self, year, month, day):
        super().__init__(
            (year, month, day),
            "You entered a non valid date, which do not exist in Gregorian calendar. "
            f"Year: {year}, Month: {month}, Day: {day}. Please check the date you entered.",
        )


class InvalidDateColumn(ValidationError):
    def __init__(self, column):
        accepted = ", ".join(f'"{c}"' for c in DATE_COLUMNS[:-1])
        super().__init__(
            column,
            f'The "{column}" date argument is invalid. '
            f'Accepted values are {accepted}, or "{DATE_COLUMNS[-1]}".',
        )


class InvalidMaxCount(ValidationError):
    def __init__(self, max_count):
        super().__init__(
            max_count,
            f'The "{max_count}" number argument is invalid. Use a positive number of '
            f"items, or {UNBOUNDED} to delete all matching items.",
        )


class DateCutoff:
    """A calendar date used as an exclusive upper bound."""

    __slots__ = ("_date",)

    def __init__(self, year: int, month: int, day: int):
        try:
            self._date = datetime.date(int(year), int(month), int(day))
        except (TypeError, ValueError):
            raise InvalidDate(year, month, day) from None

    @property
    def year(self) -> int:
        return self._date.year

    @property
    def month(self) -> int:
        return self._date.month

    @property
    def day(self) -> int:
        return self._date.day

    def as_datetime(self) -> datetime.datetime:
        """Midnight at the start of the cutoff day."""
        return datetime.datetime(self.year, self.month, self.day)

    def display(self) -> str:
        return f"{self.day}.{self.month}.{self.year}"

    def __eq__(self, other):
        if not isinstance(other, DateCutoff):
            return NotImplemented
        return self._date == other._date

    def __hash__(self):
        return hash(self._date)

    def __repr__(self):
        return f"DateCutoff({self.year}, {self.month}, {self.day})"


class DeletionRequest:
    """What to delete. Build it through validate_request()."""

    __slots__ = ("_content_type", "_status", "_cutoff", "_comparison_column", "_max_count")

    def __init__(
        self,
        content_type: str,
        status: str,
        cutoff: DateCutoff,
        comparison_column: str = DEFAULT_DATE_COLUMN,
        max_count: int = UNBOUNDED,
    ):
        self._content_type = content_type
        self._status = status
        self._cutoff = cutoff
        self._comparison_column = comparison_column
        self._max_count = max_count

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def status(self) -> str:
        return self._status

    @property
    def cutoff(self) -> DateCutoff:
        return self._cutoff

    @property
    def comparison_column(self) -> str:
        return self._comparison_column

    @property
    def max_count(self) -> int:
        return self._max_count

    @property
    def is_attachment(self) -> bool:
        return self._content_type == ATTACHMENT_TYPE

    @property
    def is_unbounded(self) -> bool:
        return self._max_count < 0

    def __eq__(self, other):
        if not isinstance(other, DeletionRequest):
            return NotImplemented
        return (
            self._content_type,
            self._status,
            self._cutoff,
            self._comparison_column,
            self._max_count,
        ) == (
            other._content_type,
            other._status,
            other._cutoff,
            other._comparison_column,
            other._max_count,
        )

    def __repr__(self):
        return (
            f"DeletionRequest({self._content_type!r}, {self._status!r}, {self._cutoff!r}, "
            f"{self._comparison_column!r}, {self._max_count!r})"
        )


def validate_request(
    store: ContentStore,
    content_type: str,
    status: str,
    year,
    month,
    day,
    max_count: int = UNBOUNDED,
    comparison_column: str = DEFAULT_DATE_COLUMN,
    console=None,
) -> Tuple[Optional[DeletionRequest], Optional[ValidationError]]:
    """
    Check raw parameters and build a DeletionRequest.

    Checks run in a fixed order and stop at the first failure: content type,
    status, date, date column, number of items. An attachment request with
    any status other than "inherit" is corrected to "inherit" instead of
    being rejected, and the correction is logged on ``console``.

    Returns:
        Tuple[Optional[DeletionRequest], Optional[ValidationError]]: the
        request and None, or None and the first error found.
    """
    if not store.type_exists(content_type):
        return None, UnknownContentType(content_type)

    if content_type == ATTACHMENT_TYPE and status != ATTACHMENT_STATUS:
        if console is not None:
            console.log(
                f'Attachments can have only "{ATTACHMENT_STATUS}" post status. '
                f'Argument "{status}" changed to "{ATTACHMENT_STATUS}"'
            )
        status = ATTACHMENT_STATUS
    elif status not in store.known_statuses():
        return None, UnknownStatus(status)

    try:
        cutoff = DateCutoff(year, month, day)
    except InvalidDate as e:
        return None, e

    if comparison_column not in DATE_COLUMNS:
        return None, InvalidDateColumn(comparison_column)

    if not isinstance(max_count, int) or max_count == 0 or max_count < UNBOUNDED:
        return None, InvalidMaxCount(max_count)

    return DeletionRequest(content_type, status, cutoff, comparison_column, max_count), None
