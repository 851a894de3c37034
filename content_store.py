"""
Content store interface used by the delete-before pipeline.

The pipeline never talks to WordPress directly. It asks a ContentStore which
types and statuses exist, which records match a request, and to delete them.
WordPressRestStore (wp_rest_store.py) is the production implementation;
InMemoryContentStore below backs the tests and local experiments.
"""

import datetime
import os
from typing import Dict, Iterable, List, Optional, Set, Tuple

# WordPress media library records
ATTACHMENT_TYPE = "attachment"
# The only status an attachment can have
ATTACHMENT_STATUS = "inherit"

DATE_COLUMNS = ("post_date_gmt", "post_modified_gmt", "post_date", "post_modified")
DEFAULT_DATE_COLUMN = "post_date_gmt"

# Sentinel for "no limit" on the number of records to delete
UNBOUNDED = -1


class StoreError(Exception):
    """Raised when the backing store cannot answer a lookup."""


class ContentStore:
    """
    Abstract access to the datastore holding content records.

    Subclasses implement every method. Identifiers are whatever the store
    uses for its records (WordPress post IDs are ints).
    """

    def type_exists(self, content_type: str) -> bool:
        raise NotImplementedError

    def known_statuses(self) -> Set[str]:
        raise NotImplementedError

    def type_label(self, content_type: str) -> Dict[str, str]:
        """Return ``{"plural": ..., "singular": ...}`` display labels."""
        raise NotImplementedError

    def query(
        self,
        content_type: str,
        status: str,
        column: str,
        before: datetime.datetime,
        limit: int = UNBOUNDED,
    ) -> Tuple[List, int]:
        """
        Find records of ``content_type`` with ``status`` whose ``column``
        timestamp is strictly earlier than ``before``.

        Returns:
            Tuple[List, int]: the identifiers in store order, capped at ``limit``
            unless it is negative, and the total number of matches ignoring
            the limit.
        """
        raise NotImplementedError

    def fetch_display_metadata(self, identifier) -> Optional[Dict]:
        """Return ``{"title", "created_at", "modified_at"}`` or None."""
        raise NotImplementedError

    def delete(self, identifier, content_type: str) -> bool:
        """Permanently delete a record. Attachments lose their file too."""
        raise NotImplementedError


class ContentRecord:
    """A single record held by InMemoryContentStore."""

    def __init__(
        self,
        identifier,
        content_type: str,
        status: str,
        post_date: datetime.datetime,
        post_date_gmt: Optional[datetime.datetime] = None,
        post_modified: Optional[datetime.datetime] = None,
        post_modified_gmt: Optional[datetime.datetime] = None,
        title: str = "",
        file_path: Optional[str] = None,
    ):
        self.identifier = identifier
        self.content_type = content_type
        self.status = status
        self.title = title
        self.file_path = file_path
        self.post_date = post_date
        self.post_date_gmt = post_date_gmt or post_date
        self.post_modified = post_modified or post_date
        self.post_modified_gmt = post_modified_gmt or self.post_modified

    def timestamp(self, column: str) -> datetime.datetime:
        return getattr(self, column)

    def __repr__(self):
        return f"ContentRecord({self.identifier!r}, {self.content_type!r}, {self.status!r})"


class InMemoryContentStore(ContentStore):
    """
    A ContentStore holding records in a dict.

    Records are returned newest first by ``post_date``, the order WordPress
    uses by default. ``failing_ids`` makes ``delete`` report failure for
    those identifiers, and deleting an attachment removes its ``file_path``
    from disk when the file exists.
    """

    DEFAULT_STATUSES = {
        "publish",
        "future",
        "draft",
        "pending",
        "private",
        "trash",
        "auto-draft",
        "inherit",
    }

    def __init__(
        self,
        records: Iterable[ContentRecord] = (),
        types: Optional[Dict[str, Dict[str, str]]] = None,
        statuses: Optional[Set[str]] = None,
        failing_ids: Iterable = (),
    ):
        self.records = {record.identifier: record for record in records}
        self.types = types or {
            "post": {"plural": "Posts", "singular": "Post"},
            "page": {"plural": "Pages", "singular": "Page"},
            ATTACHMENT_TYPE: {"plural": "Media", "singular": "Media"},
        }
        self.statuses = set(statuses) if statuses is not None else set(self.DEFAULT_STATUSES)
        self.failing_ids = set(failing_ids)
        self.deleted_ids = []
        self.deleted_files = []
        self.queries = []

    def add(self, record: ContentRecord) -> ContentRecord:
        self.records[record.identifier] = record
        return record

    def type_exists(self, content_type: str) -> bool:
        return content_type in self.types

    def known_statuses(self) -> Set[str]:
        return set(self.statuses)

    def type_label(self, content_type: str) -> Dict[str, str]:
        return self.types.get(
            content_type, {"plural": content_type, "singular": content_type}
        )

    def query(self, content_type, status, column, before, limit=UNBOUNDED):
        self.queries.append((content_type, status, column, before, limit))
        matches = [
            record
            for record in self.records.values()
            if record.content_type == content_type
            and record.status == status
            and record.timestamp(column) < before
        ]
        matches.sort(key=lambda record: record.post_date, reverse=True)
        ids = [record.identifier for record in matches]
        if limit >= 0:
            ids = ids[:limit]
        return ids, len(matches)

    def fetch_display_metadata(self, identifier):
        record = self.records.get(identifier)
        if record is None:
            return None
        return {
            "title": record.title,
            "created_at": record.post_date,
            "modified_at": record.post_modified,
        }

    def delete(self, identifier, content_type):
        if identifier in self.failing_ids:
            return False
        record = self.records.pop(identifier, None)
        if record is None:
            return False
        if content_type == ATTACHMENT_TYPE and record.file_path:
            if os.path.exists(record.file_path):
                os.remove(record.file_path)
            self.deleted_files.append(record.file_path)
        self.deleted_ids.append(identifier)
        return True
