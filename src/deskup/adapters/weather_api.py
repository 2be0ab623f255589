"""OpenWeatherMap adapter - current conditions by city name."""

import requests

from deskup.core.models import Weather

API_URL = "https://api.openweathermap.org/data/2.5/weather"


class OpenWeatherAdapter:
    """
    OpenWeatherMap API adapter.

    Implements WeatherSource protocol. Temperatures come back in Kelvin;
    conversion is a presentation concern.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        lang: str = "ja",
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.lang = lang
        self._session = session or requests.Session()

    def fetch_weather(self, location: str) -> Weather:
        """Fetch current conditions for a location."""
        resp = self._session.get(
            API_URL,
            params={"q": location, "appid": self.api_key, "lang": self.lang},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return Weather.from_api(resp.json())
