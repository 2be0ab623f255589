"""Functional core - pure logic with no I/O."""

from .models import Weather, Joke, Anniversary, Holiday, TaskItem
from .slots import Slot, SlotSnapshot, SlotState, Status
from .tasks import parse_task_results
from .dashboard import DashboardState, Panel, build_panel, greeting, kelvin_to_celsius

__all__ = [
    # Models
    "Weather",
    "Joke",
    "Anniversary",
    "Holiday",
    "TaskItem",
    # Slots
    "Slot",
    "SlotSnapshot",
    "SlotState",
    "Status",
    # Tasks
    "parse_task_results",
    # Dashboard
    "DashboardState",
    "Panel",
    "build_panel",
    "greeting",
    "kelvin_to_celsius",
]
