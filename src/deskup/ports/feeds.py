"""Read-only data feed interfaces."""

from datetime import date
from typing import Protocol

from deskup.core.models import Anniversary, Holiday, Joke, Weather


class WeatherSource(Protocol):
    def fetch_weather(self, location: str) -> Weather:
        """Fetch current conditions for a location."""
        ...


class JokeSource(Protocol):
    def fetch_joke(self) -> Joke:
        """Fetch a random joke."""
        ...


class AnniversarySource(Protocol):
    def fetch_anniversaries(self, target_date: date) -> list[Anniversary]:
        """Fetch the anniversaries for a calendar day."""
        ...


class HolidaySource(Protocol):
    def fetch_holidays(self, year: int, country_code: str) -> list[Holiday]:
        """Fetch public holidays for a year and country."""
        ...
