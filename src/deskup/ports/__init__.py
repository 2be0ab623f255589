"""Ports - interfaces/protocols for external dependencies."""

from .feeds import AnniversarySource, HolidaySource, JokeSource, WeatherSource
from .launcher import Launcher
from .task_repo import TaskRepository

__all__ = [
    "WeatherSource",
    "JokeSource",
    "AnniversarySource",
    "HolidaySource",
    "TaskRepository",
    "Launcher",
]
