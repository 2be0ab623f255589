"""Dashboard view model - a pure function of the current slot snapshots."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from deskup.config import BookmarkCategory, Settings

from .slots import SlotSnapshot, Status

KELVIN_OFFSET = Decimal("273.15")

LOADING_WEATHER = "Loading weather data..."
LOADING_QUOTE = "Loading quote data..."
LOADING_ANNIVERSARY = "Loading anniversary data..."
LOADING_TASKS = "Loading task data..."


@dataclass(frozen=True)
class DashboardState:
    """One snapshot per data domain."""

    weather: SlotSnapshot
    joke: SlotSnapshot
    anniversaries: SlotSnapshot
    holidays: SlotSnapshot
    tasks: SlotSnapshot
    # Task ids whose last mark-done attempt failed
    failed_completions: frozenset[str] = frozenset()

    def all_terminal(self) -> bool:
        return all(s.terminal for s in self.slots())

    def any_failed(self) -> bool:
        return any(s.status is Status.FAILED for s in self.slots())

    def slots(self) -> tuple[SlotSnapshot, ...]:
        return (self.weather, self.joke, self.anniversaries, self.holidays, self.tasks)


@dataclass(frozen=True)
class Line:
    """
    One row of text.

    A line with launch_target opens a bookmark when clicked; one with
    task_id is a checkbox that marks the task done.
    """

    text: str
    status: Status = Status.READY
    launch_target: str | None = None
    task_id: str | None = None


@dataclass(frozen=True)
class Group:
    """A collapsible sub-list within a section."""

    title: str
    lines: tuple[Line, ...]
    column: int = 0


@dataclass(frozen=True)
class Section:
    key: str
    heading: str
    lines: tuple[Line, ...] = ()
    groups: tuple[Group, ...] = ()
    columns: tuple[str, ...] = ()


@dataclass(frozen=True)
class Panel:
    title: str
    sections: tuple[Section, ...] = field(default_factory=tuple)
    can_retry: bool = False

    def section(self, key: str) -> Section:
        return next(s for s in self.sections if s.key == key)

    def to_text(self) -> str:
        """Plain-text rendition, groups expanded."""
        out = [f"# {self.title}"]
        for section in self.sections:
            out.append("")
            out.append(f"## {section.heading}")
            for line in section.lines:
                out.append(_line_text(line))
            for group in section.groups:
                prefix = f"{section.columns[group.column]} / " if section.columns else ""
                out.append(f"### {prefix}{group.title}")
                for line in group.lines:
                    out.append(f"  {_line_text(line)}")
        return "\n".join(out)


def _line_text(line: Line) -> str:
    if line.task_id:
        return f"[ ] {line.text}"
    if line.launch_target:
        return f"- {line.text} ({line.launch_target})"
    return line.text


def greeting(hour: int) -> str:
    """Time-of-day greeting."""
    if hour < 12:
        return "Good morning!"
    elif hour < 18:
        return "Hello!"
    else:
        return "Good evening!"


def kelvin_to_celsius(kelvin: float) -> str:
    """Celsius to one decimal place, rounding half up (300 K -> "26.9")."""
    celsius = Decimal(str(kelvin)) - KELVIN_OFFSET
    return str(celsius.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _status_line(snapshot: SlotSnapshot, loading: str, what: str, not_configured: str) -> Line:
    """Placeholder line for a slot without a value."""
    if snapshot.status is Status.FAILED:
        return Line(f"Could not load {what}: {snapshot.error}", Status.FAILED)
    if snapshot.status is Status.NOT_CONFIGURED:
        return Line(not_configured, Status.NOT_CONFIGURED)
    return Line(loading, Status.LOADING)


def weather_lines(snapshot: SlotSnapshot, location: str) -> tuple[Line, ...]:
    if not snapshot.ready:
        return (
            _status_line(
                snapshot,
                LOADING_WEATHER,
                "weather data",
                "Weather is not configured. Set WEATHER_API_KEY and LOCATION in settings.",
            ),
        )
    weather = snapshot.value
    return (
        Line(
            f"Weather in {location}: {weather.description}, "
            f"Temperature: {kelvin_to_celsius(weather.temp_kelvin)}°C, "
            f"Humidity: {weather.humidity}%"
        ),
    )


def anniversary_groups(anniversaries: SlotSnapshot, holidays: SlotSnapshot) -> tuple[Group, ...]:
    if anniversaries.ready:
        japan = tuple(Line(f"・{a.name}: {a.description}") for a in anniversaries.value)
    else:
        japan = (
            _status_line(anniversaries, LOADING_ANNIVERSARY, "anniversary data", ""),
        )

    if holidays.ready:
        world = tuple(Line(f"・{h.date}: {h.name} ({h.local_name})") for h in holidays.value)
    else:
        world = (
            _status_line(
                holidays,
                LOADING_ANNIVERSARY,
                "holiday data",
                "Holidays are not configured. Set COUNTRY_CODE in settings.",
            ),
        )

    return (
        Group("Anniversary in Japan", japan),
        Group("Anniversary in the world", world),
    )


def joke_lines(snapshot: SlotSnapshot) -> tuple[Line, ...]:
    if snapshot.ready:
        return (Line(snapshot.value.text),)
    return (_status_line(snapshot, LOADING_QUOTE, "quote data", ""),)


def _bookmark_groups(categories: list[BookmarkCategory], column: int) -> tuple[Group, ...]:
    return tuple(
        Group(
            category.name,
            tuple(Line(b.name, launch_target=b.url) for b in category.items),
            column=column,
        )
        for category in categories
    )


def task_lines(
    snapshot: SlotSnapshot, failed_completions: frozenset[str] = frozenset()
) -> tuple[Line, ...]:
    if not snapshot.ready:
        return (
            _status_line(
                snapshot,
                LOADING_TASKS,
                "task data",
                "Notion is not configured. Set NOTION_API_KEY and NOTION_DATABASE_ID in settings.",
            ),
        )
    if not snapshot.value:
        return (Line("No open tasks."),)
    return tuple(
        Line(f"{t.title} (could not mark done)", Status.FAILED, task_id=t.id)
        if t.id in failed_completions
        else Line(t.title, task_id=t.id)
        for t in snapshot.value
    )


def build_panel(state: DashboardState, settings: Settings, now: datetime | None = None) -> Panel:
    """
    Assemble the whole dashboard.

    Sections always come in the same order; a slot without a value renders
    a placeholder line instead of being omitted. Pure function - no I/O.
    """
    now = now or datetime.now()
    bookmarks = settings.bookmarks

    sections = (
        Section(
            "greeting",
            f"{greeting(now.hour)}, {settings.user_name}. Is the coffee ready?",
        ),
        Section("weather", "Weather", lines=weather_lines(state.weather, settings.location)),
        Section(
            "today",
            "What day is it today?",
            groups=anniversary_groups(state.anniversaries, state.holidays),
        ),
        Section("joke", "Joke of the day", lines=joke_lines(state.joke)),
        Section(
            "bookmarks",
            "Bookmarks",
            groups=_bookmark_groups(bookmarks.desktop, 0) + _bookmark_groups(bookmarks.web, 1),
            columns=("Desktop Applications", "WEB Applications"),
        ),
        Section("tasks", "Tasks", lines=task_lines(state.tasks, state.failed_completions)),
        Section("settings", "Settings"),
    )
    return Panel(title="DeskUp", sections=sections, can_retry=state.any_failed())
