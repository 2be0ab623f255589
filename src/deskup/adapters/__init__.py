"""Adapters - I/O implementations of ports."""

from .anniversary_api import AnniversaryAdapter
from .holiday_api import HolidayAdapter
from .joke_api import JokeAdapter
from .launcher import LaunchError, get_launcher
from .notion_api import NotConfiguredError, NotionAdapter
from .weather_api import OpenWeatherAdapter

__all__ = [
    "OpenWeatherAdapter",
    "JokeAdapter",
    "AnniversaryAdapter",
    "HolidayAdapter",
    "NotionAdapter",
    "NotConfiguredError",
    "LaunchError",
    "get_launcher",
]
