"""
ContentStore backed by the WordPress REST API (``/wp-json/wp/v2``).

Authentication uses a WordPress application password over HTTP basic auth.
"""

import datetime
import logging
from typing import Dict, List, Optional, Set, Tuple

import requests
from bs4 import BeautifulSoup
from requests.auth import HTTPBasicAuth

from config import DEFAULT_TIMEOUT
from content_store import UNBOUNDED, ContentStore, StoreError

logger = logging.getLogger(__name__)

PER_PAGE = 100

# Statuses WordPress stores on records even when the statuses endpoint
# does not list them ("inherit" and "auto-draft" are internal)
CORE_STATUSES = {
    "publish",
    "future",
    "draft",
    "pending",
    "private",
    "trash",
    "auto-draft",
    "inherit",
}

# Date column -> field in the REST response
COLUMN_FIELDS = {
    "post_date": "date",
    "post_date_gmt": "date_gmt",
    "post_modified": "modified",
    "post_modified_gmt": "modified_gmt",
}

RECORD_FIELDS = "id,title,date,date_gmt,modified,modified_gmt"


def parse_wp_date(value: Optional[str]) -> Optional[datetime.datetime]:
    """Parse a REST API date such as ``2019-05-01T10:00:00``."""
    if not value:
        return None
    try:
        parsed = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def rendered_text(field) -> str:
    """Plain text of a ``{"rendered": "<html>"}`` field."""
    if isinstance(field, dict):
        field = field.get("rendered", "")
    if not field:
        return ""
    return BeautifulSoup(field, "html.parser").get_text().strip()


class WordPressRestStore(ContentStore):
    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = base_url.rstrip("/") + "/wp-json/wp/v2"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = HTTPBasicAuth(username, password)
        self._types: Optional[Dict[str, Dict]] = None
        self._statuses: Optional[Set[str]] = None
        self._metadata: Dict = {}

    @classmethod
    def from_settings(cls, settings) -> "WordPressRestStore":
        return cls(settings.url, settings.username, settings.password, settings.timeout)

    def _get(self, path: str, params: Optional[Dict] = None) -> requests.Response:
        url = f"{self.api_url}/{path}"
        logger.debug("GET %s %s", url, params)
        return self.session.get(url, params=params, timeout=self.timeout)

    def _load_json(self, path: str, params: Optional[Dict] = None):
        try:
            response = self._get(path, params)
        except requests.RequestException as e:
            raise StoreError(f"Could not reach {self.api_url}/{path}: {e}") from e
        if response.status_code != 200:
            raise StoreError(
                f"Fetching {path} failed: {response.status_code} - {response.text[:200]}"
            )
        return self._decode(path, response)

    @staticmethod
    def _decode(path: str, response: requests.Response):
        # An HTML page here means the REST API is disabled or we were redirected to a login
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"{path} did not return JSON: {response.text[:200]}") from e

    def _post_types(self) -> Dict[str, Dict]:
        if self._types is None:
            self._types = self._load_json("types", {"context": "edit"})
        return self._types

    def _rest_base(self, content_type: str) -> str:
        post_type = self._post_types().get(content_type) or {}
        return post_type.get("rest_base") or content_type

    def type_exists(self, content_type: str) -> bool:
        return content_type in self._post_types()

    def known_statuses(self) -> Set[str]:
        if self._statuses is None:
            statuses = self._load_json("statuses", {"context": "edit"})
            self._statuses = set(statuses) | CORE_STATUSES
        return set(self._statuses)

    def type_label(self, content_type: str) -> Dict[str, str]:
        post_type = self._post_types().get(content_type) or {}
        labels = post_type.get("labels") or {}
        plural = labels.get("name") or post_type.get("name") or content_type
        singular = labels.get("singular_name") or plural
        return {"plural": plural, "singular": singular}

    def _remember(self, item: Dict) -> None:
        self._metadata[item["id"]] = {
            "title": rendered_text(item.get("title")),
            "created_at": parse_wp_date(item.get("date")),
            "modified_at": parse_wp_date(item.get("modified")),
        }

    def query(
        self,
        content_type: str,
        status: str,
        column: str,
        before: datetime.datetime,
        limit: int = UNBOUNDED,
    ) -> Tuple[List, int]:
        """
        Page through the type's collection, newest first, and keep records
        whose ``column`` is strictly earlier than ``before``.

        The API's own ``before``/``modified_before`` filters are only used to
        narrow the pages fetched. They are pushed one day later so that
        timezone differences between local and GMT columns cannot drop a
        match; the exact comparison happens here.
        """
        field = COLUMN_FIELDS[column]
        coarse = (before + datetime.timedelta(days=1)).isoformat()
        params = {
            "per_page": PER_PAGE,
            "status": status,
            "orderby": "date",
            "order": "desc",
            "context": "edit",
            "_fields": RECORD_FIELDS,
        }
        if field.startswith("modified"):
            params["modified_before"] = coarse
        else:
            params["before"] = coarse

        path = self._rest_base(content_type)
        matches = []
        page = 1
        while True:
            params["page"] = page
            try:
                response = self._get(path, dict(params))
            except requests.RequestException as e:
                raise StoreError(f"Querying {path} failed: {e}") from e
            if response.status_code == 400 and page > 1:
                # WordPress answers 400 once page is past the last one
                break
            if response.status_code != 200:
                raise StoreError(
                    f"Querying {path} page {page} failed: "
                    f"{response.status_code} - {response.text[:200]}"
                )
            items = self._decode(path, response)
            if not items:
                break
            for item in items:
                timestamp = parse_wp_date(item.get(field))
                if timestamp is not None and timestamp < before:
                    self._remember(item)
                    matches.append(item["id"])
            page += 1

        ids = matches if limit < 0 else matches[:limit]
        return ids, len(matches)

    def fetch_display_metadata(self, identifier) -> Optional[Dict]:
        if identifier in self._metadata:
            return self._metadata[identifier]
        return None

    def delete(self, identifier, content_type: str) -> bool:
        url = f"{self.api_url}/{self._rest_base(content_type)}/{identifier}"
        logger.debug("DELETE %s", url)
        try:
            # force=true skips the trash; for media it also removes the uploaded files
            response = self.session.delete(url, params={"force": "true"}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug("DELETE %s raised %s", url, e)
            return False
        if response.status_code == 200:
            return True
        logger.debug("DELETE %s -> %s: %s", url, response.status_code, response.text[:200])
        return False
