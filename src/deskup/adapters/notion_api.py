"""Notion API adapter - open tasks from a database."""

import logging

import requests

from deskup.config import Settings
from deskup.core.models import TaskItem
from deskup.core.tasks import parse_task_results

logger = logging.getLogger(__name__)

API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
STATUS_PROPERTY = "Status"
DONE_STATUS = "Done"


class NotConfiguredError(Exception):
    """Raised when Notion credentials are missing."""

    pass


class NotionAdapter:
    """
    Notion API adapter.

    Implements TaskRepository protocol. The database is expected to have a
    status property named "Status" with a "Done" option. No business logic -
    just I/O.
    """

    def __init__(
        self,
        api_key: str,
        database_id: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        if not api_key or not database_id:
            raise NotConfiguredError(
                "Missing Notion credentials. Set NOTION_API_KEY and NOTION_DATABASE_ID in deskup.conf"
            )
        self.api_key = api_key
        self.database_id = database_id
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, session: requests.Session | None = None) -> "NotionAdapter":
        return cls(
            settings.notion_api_key,
            settings.notion_database_id,
            timeout=settings.request_timeout,
            session=session,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }

    def _api_request(self, method: str, endpoint: str, body: dict) -> dict:
        """Make authenticated API request."""
        resp = self._session.request(
            method,
            f"{API_BASE}{endpoint}",
            headers=self._headers(),
            json=body,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    def fetch_raw(self) -> list[dict]:
        """Query every page of not-done results."""
        body: dict = {
            "filter": {
                "property": STATUS_PROPERTY,
                "status": {"does_not_equal": DONE_STATUS},
            }
        }
        results = []
        while True:
            data = self._api_request("POST", f"/databases/{self.database_id}/query", body)
            results.extend(data["results"])
            if not data.get("has_more") or not data.get("next_cursor"):
                break
            body["start_cursor"] = data["next_cursor"]
        logger.debug(f"Fetched {len(results)} Notion pages")
        return results

    def fetch_open(self) -> list[TaskItem]:
        """Fetch all tasks that are not done."""
        return parse_task_results(self.fetch_raw())

    def mark_done(self, task_id: str) -> None:
        """Set a task's status to Done."""
        self._api_request(
            "PATCH",
            f"/pages/{task_id}",
            {"properties": {STATUS_PROPERTY: {"status": {"name": DONE_STATUS}}}},
        )
        logger.info(f"Marked task {task_id} done")
