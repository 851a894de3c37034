"""
Turn a validated DeletionRequest into the set of records to delete, and ask
the operator to confirm before anything is removed.
"""

from typing import Tuple, Union

from content_store import ContentStore
from deletion_request import DeletionRequest


class MatchSet:
    """
    Identifiers selected for deletion, in the order the store returned them.

    ``total`` is the number of records that will be acted on. ``found`` is the
    number of matches the store reported before the limit was applied.
    """

    def __init__(self, identifiers, found: int = None):
        self.identifiers: Tuple = tuple(identifiers)
        self.found = len(self.identifiers) if found is None else found

    @property
    def total(self) -> int:
        return len(self.identifiers)

    def __iter__(self):
        return iter(self.identifiers)

    def __len__(self):
        return len(self.identifiers)

    def __repr__(self):
        return f"MatchSet({list(self.identifiers)!r}, found={self.found})"


class NoMatches:
    """Nothing matched the request."""

    def __init__(self, request: DeletionRequest):
        self.request = request


class ReadyToDelete:
    def __init__(self, request: DeletionRequest, match_set: MatchSet):
        self.request = request
        self.match_set = match_set


def plan(request: DeletionRequest, store: ContentStore) -> Union[NoMatches, ReadyToDelete]:
    """Query the store for records matching ``request``. Read-only."""
    identifiers, found = store.query(
        request.content_type,
        request.status,
        request.comparison_column,
        request.cutoff.as_datetime(),
        request.max_count,
    )
    if found == 0 or not identifiers:
        return NoMatches(request)
    return ReadyToDelete(request, MatchSet(identifiers, found))


ATTACHMENT_WARNING = (
    "➡️  Deleting attachments will also permanently delete media from "
    '"wp-content/uploads" directory. Also, some newer posts might still use '
    "these attachments. Are you sure you want to proceed?"
)


def final_warning(count: int) -> str:
    return (
        f"Found {count} items. Are you really sure you want to delete them all? "
        "Please reconsider, this action cannot be reverted. This is the final warning."
    )


def confirm_deletion(
    request: DeletionRequest, match_set: MatchSet, console, assume_yes: bool = False
) -> bool:
    """
    Run the confirmation gates that guard a deletion.

    Attachments get an extra question about their files first; it is always
    asked, even with ``assume_yes``. The final question states how many
    records will be deleted and is skipped when ``assume_yes`` is set.

    Returns:
        bool: True only if every applicable gate was affirmed.
    """
    if request.is_attachment and not console.confirm(ATTACHMENT_WARNING):
        return False
    return console.confirm(final_warning(match_set.total), assume_yes=assume_yes)
