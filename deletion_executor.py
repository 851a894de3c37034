"""
Delete the records of a MatchSet one at a time and count what happened.
"""

from typing import List, Tuple

from content_store import ContentStore
from deletion_planner import MatchSet
from deletion_request import DeletionRequest


class RecordOutcome:
    def __init__(self, identifier, title: str, success: bool):
        self.identifier = identifier
        self.title = title
        self.success = success

    def __repr__(self):
        return f"RecordOutcome({self.identifier!r}, {self.title!r}, {self.success!r})"


class DeletionOutcome:
    """Results of a deletion run, built up record by record."""

    def __init__(self):
        self.records: List[RecordOutcome] = []
        self.successful = 0
        self.failed = 0

    @property
    def total_attempted(self) -> int:
        return self.successful + self.failed

    def add(self, outcome: RecordOutcome) -> None:
        self.records.append(outcome)
        if outcome.success:
            self.successful += 1
        else:
            self.failed += 1

    def counts(self) -> Tuple[int, int, int]:
        return self.successful, self.failed, self.total_attempted


def display_metadata(store: ContentStore, identifier, console) -> dict:
    # Display data is best-effort, a lookup failure never stops the delete
    try:
        metadata = store.fetch_display_metadata(identifier)
    except Exception as e:
        console.warning(f"Could not load details of item {identifier}: {e}")
        metadata = None
    metadata = metadata or {}
    return {
        "title": metadata.get("title") or "",
        "created_at": metadata.get("created_at"),
        "modified_at": metadata.get("modified_at"),
    }


def execute(
    request: DeletionRequest, match_set: MatchSet, store: ContentStore, report
) -> DeletionOutcome:
    """
    Delete every record in ``match_set`` in order.

    A failed delete, whether the store returned False or raised, is recorded
    and the loop moves on to the next record. Nothing is retried.

    Args:
        request (DeletionRequest): The validated request being executed.
        match_set (MatchSet): The records to delete.
        store (ContentStore): Where the records live.
        report (ReportBuilder): Receives progress as each record is handled.

    Returns:
        DeletionOutcome: Per-record results and the success/failure counts.
    """
    outcome = DeletionOutcome()
    for identifier in match_set:
        metadata = display_metadata(store, identifier, report.console)
        report.item_started(identifier, metadata)

        try:
            deleted = bool(store.delete(identifier, request.content_type))
        except Exception as e:
            report.console.error(f"Deleting item {identifier} failed: {e}")
            deleted = False

        outcome.add(RecordOutcome(identifier, metadata["title"], deleted))
        if deleted:
            report.item_deleted(metadata["title"], outcome.successful)
        else:
            report.item_failed(metadata["title"])
        report.separator()

    return outcome
