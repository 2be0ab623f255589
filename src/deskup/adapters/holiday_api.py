"""Nager.Date adapter - public holidays by year and country."""

import requests

from deskup.core.models import Holiday

API_BASE = "https://date.nager.at/api/v3/publicholidays"


class HolidayAdapter:
    """Fetches public holidays. Country codes are ISO 3166-1 alpha-2."""

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None):
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_holidays(self, year: int, country_code: str) -> list[Holiday]:
        resp = self._session.get(
            f"{API_BASE}/{year}/{country_code.upper()}",
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return Holiday.list_from_api(resp.json())
