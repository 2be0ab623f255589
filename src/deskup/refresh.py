"""Refresh orchestration - fetch-if-absent tasks on a shared background scheduler.

Each data domain owns one Slot. Once per frame the UI calls refresh(); any
slot still UNSET is claimed (PENDING) synchronously and its fetch is handed
to the scheduler's thread pool. The fetch writes exactly one terminal value
back into its slot. Nothing here blocks the caller.
"""

import logging
import threading
from datetime import date
from typing import Any, Callable

import requests
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .adapters import (
    AnniversaryAdapter,
    HolidayAdapter,
    JokeAdapter,
    NotConfiguredError,
    NotionAdapter,
    OpenWeatherAdapter,
)
from .config import Settings
from .core.dashboard import DashboardState
from .core.slots import NOT_CONFIGURED, Slot
from .ports import AnniversarySource, HolidaySource, JokeSource, TaskRepository, WeatherSource

logger = logging.getLogger(__name__)

# A fetch may make several requests (Notion pagination), each bounded by
# request_timeout only between bytes; past this many timeouts it is abandoned.
FETCH_DEADLINE_FACTOR = 3


def describe_error(error: Exception) -> str:
    """Short, user-facing reason for a failed fetch."""
    if isinstance(error, requests.Timeout):
        return "request timed out"
    if isinstance(error, requests.ConnectionError):
        return "connection failed"
    if isinstance(error, requests.HTTPError) and error.response is not None:
        return f"HTTP {error.response.status_code}"
    if isinstance(error, (ValueError, KeyError, TypeError, IndexError)):
        return f"unexpected response ({type(error).__name__}: {error})"
    return f"{type(error).__name__}: {error}"


class Dashboard:
    """
    Owns the five data slots and dispatches their fetches.

    Sources default to the real HTTP adapters built from settings; tests pass
    fakes. The scheduler is any object with APScheduler's add_job signature.
    """

    def __init__(
        self,
        settings: Settings,
        scheduler: Any = None,
        weather: WeatherSource | None = None,
        jokes: JokeSource | None = None,
        anniversaries: AnniversarySource | None = None,
        holidays: HolidaySource | None = None,
        tasks: TaskRepository | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings
        self._scheduler = scheduler or BackgroundScheduler()
        self._today = today

        timeout = settings.request_timeout
        self.weather_source = weather or OpenWeatherAdapter(settings.weather_api_key, timeout=timeout)
        self.joke_source = jokes or JokeAdapter(timeout=timeout)
        self.anniversary_source = anniversaries or AnniversaryAdapter(timeout=timeout)
        self.holiday_source = holidays or HolidayAdapter(timeout=timeout)
        self.task_repo = tasks
        if self.task_repo is None and settings.notion_configured:
            self.task_repo = NotionAdapter.from_settings(settings)

        self.weather = Slot("weather")
        self.joke = Slot("joke")
        self.anniversaries = Slot("anniversaries")
        self.holidays = Slot("holidays")
        self.tasks = Slot("tasks")

        self._completion_lock = threading.Lock()
        self._failed_completions: set[str] = set()

    @property
    def slots(self) -> tuple[Slot, ...]:
        return (self.weather, self.joke, self.anniversaries, self.holidays, self.tasks)

    @property
    def tasks_configured(self) -> bool:
        return self.task_repo is not None

    # ============== Lifecycle ==============

    def start(self) -> None:
        """Start the background scheduler, plus periodic refresh if enabled."""
        if self.settings.refresh_minutes > 0:
            self._scheduler.add_job(
                self.expire,
                IntervalTrigger(minutes=self.settings.refresh_minutes),
                id="periodic_refresh",
                replace_existing=True,
            )
            logger.info(f"Refreshing data every {self.settings.refresh_minutes} minutes")
        self._scheduler.start()

    def shutdown(self) -> None:
        """Stop the scheduler without waiting for in-flight requests."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    # ============== Dispatch ==============

    def maybe_refresh(self, slot: Slot, fetch_fn: Callable[[], Any]) -> bool:
        """Dispatch fetch_fn if slot is UNSET. Returns True if a fetch was dispatched."""
        if not slot.claim():
            return False
        logger.debug(f"Dispatching {slot.name} fetch")
        self._scheduler.add_job(
            self._run,
            args=[slot, slot.ticket, fetch_fn],
            name=f"fetch_{slot.name}",
            misfire_grace_time=None,
        )
        return True

    def _run(self, slot: Slot, ticket: int, fetch_fn: Callable[[], Any]) -> None:
        # Any exception must still leave the slot terminal
        try:
            value = fetch_fn()
        except Exception as e:
            reason = describe_error(e)
            logger.warning(f"Failed to fetch {slot.name}: {reason}")
            slot.fail(reason, ticket)
            return
        if slot.resolve(value, ticket):
            logger.debug(f"Fetched {slot.name}")
        else:
            logger.debug(f"Discarded stale {slot.name} result")

    @property
    def fetch_deadline(self) -> float:
        """Seconds a fetch may stay pending before it counts as timed out."""
        return self.settings.request_timeout * FETCH_DEADLINE_FACTOR

    def abandon_overdue(self) -> int:
        """Fail every fetch that has outlived the deadline."""
        count = 0
        for slot in self.slots:
            if slot.abandon_if_overdue(self.fetch_deadline, "request timed out"):
                logger.warning(f"Gave up on {slot.name} fetch after {self.fetch_deadline:g}s")
                count += 1
        return count

    def refresh(self) -> int:
        """Dispatch every configured fetch whose slot is still empty."""
        settings = self.settings
        today = self._today()
        dispatched = 0
        self.abandon_overdue()

        if settings.weather_configured:
            dispatched += self.maybe_refresh(
                self.weather, lambda: self.weather_source.fetch_weather(settings.location)
            )
        dispatched += self.maybe_refresh(self.joke, self.joke_source.fetch_joke)
        dispatched += self.maybe_refresh(
            self.anniversaries, lambda: self.anniversary_source.fetch_anniversaries(today)
        )
        if settings.holidays_configured:
            dispatched += self.maybe_refresh(
                self.holidays,
                lambda: self.holiday_source.fetch_holidays(today.year, settings.country_code),
            )
        if self.task_repo is not None:
            dispatched += self.maybe_refresh(self.tasks, self.task_repo.fetch_open)

        return dispatched

    def retry_failed(self) -> int:
        """Reset failed slots so the next refresh() fetches them again."""
        count = sum(1 for slot in self.slots if slot.failed and slot.reset())
        if count:
            logger.info(f"Retrying {count} failed fetch(es)")
        return count

    def expire(self) -> int:
        """Reset every finished slot; used by periodic refresh."""
        return sum(1 for slot in self.slots if slot.reset())

    # ============== Commands ==============

    def mark_done(self, task_id: str) -> None:
        """
        Mark a task done in the background.

        On success the task list is invalidated so it is fetched again
        without the completed item, even if a fetch was already in flight.
        On failure the id is reported by snapshot() until the next attempt.
        """
        if self.task_repo is None:
            raise NotConfiguredError("Notion is not configured")
        with self._completion_lock:
            self._failed_completions.discard(task_id)
        self._scheduler.add_job(
            self._complete,
            args=[task_id],
            name=f"complete_{task_id}",
            misfire_grace_time=None,
        )

    def _complete(self, task_id: str) -> None:
        try:
            self.task_repo.mark_done(task_id)
        except Exception as e:
            logger.error(f"Failed to mark task {task_id} done: {describe_error(e)}")
            with self._completion_lock:
                self._failed_completions.add(task_id)
            return
        self.tasks.invalidate()

    # ============== Read side ==============

    def failed_completions(self) -> frozenset[str]:
        with self._completion_lock:
            return frozenset(self._failed_completions)

    def snapshot(self) -> DashboardState:
        """Current value of every slot; never blocks on a fetch."""
        settings = self.settings
        return DashboardState(
            weather=self.weather.snapshot() if settings.weather_configured else NOT_CONFIGURED,
            joke=self.joke.snapshot(),
            anniversaries=self.anniversaries.snapshot(),
            holidays=self.holidays.snapshot() if settings.holidays_configured else NOT_CONFIGURED,
            tasks=self.tasks.snapshot() if self.tasks_configured else NOT_CONFIGURED,
            failed_completions=self.failed_completions(),
        )
