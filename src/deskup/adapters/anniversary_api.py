"""whatistoday.cyou adapter - Japanese anniversaries of the day."""

from datetime import date

import requests

from deskup.core.models import Anniversary

API_BASE = "https://api.whatistoday.cyou/v3/anniv"


class AnniversaryAdapter:
    """Fetches the anniversaries registered for a month/day."""

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None):
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_anniversaries(self, target_date: date) -> list[Anniversary]:
        resp = self._session.get(
            f"{API_BASE}/month/{target_date.month}/day/{target_date.day}",
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return Anniversary.list_from_api(resp.json())
