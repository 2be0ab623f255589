"""Configuration management for DeskUp."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DESKUP_HOME = Path(os.environ.get("DESKUP_HOME", Path.home() / "deskup"))
CONFIG_FILE = DESKUP_HOME / "config" / "deskup.conf"

PLACEHOLDER_API_KEY = "your_api_key_here"

_STRING_DECODER = json.JSONDecoder()


class ConfigError(Exception):
    """Raised when the settings file cannot be read or parsed."""

    pass


@dataclass
class Bookmark:
    """A single launch target."""

    name: str
    url: str


@dataclass
class BookmarkCategory:
    """A named group of bookmarks."""

    name: str
    items: list[Bookmark] = field(default_factory=list)


@dataclass
class Bookmarks:
    """Local launchers and web links, each grouped by category."""

    desktop: list[BookmarkCategory] = field(default_factory=list)
    web: list[BookmarkCategory] = field(default_factory=list)

    def find(self, name: str) -> Bookmark | None:
        """Find a bookmark by display name (case-insensitive)."""
        for category in [*self.desktop, *self.web]:
            for item in category.items:
                if item.name.lower() == name.lower():
                    return item
        return None


def default_user_name() -> str:
    return os.environ.get("USER") or os.environ.get("USERNAME") or "User"


def default_bookmarks() -> Bookmarks:
    return Bookmarks(
        desktop=[BookmarkCategory("作業", [Bookmark("notepad", "notepad")])],
        web=[BookmarkCategory("検索", [Bookmark("Google", "https://google.com")])],
    )


@dataclass
class Settings:
    """DeskUp settings."""

    user_name: str = field(default_factory=default_user_name)
    weather_api_key: str = PLACEHOLDER_API_KEY
    location: str = "Tokyo"
    country_code: str = "JP"
    bookmarks: Bookmarks = field(default_factory=default_bookmarks)
    # Optional Notion task list
    notion_api_key: str = ""
    notion_database_id: str = ""
    # 0 = fetch once per run
    refresh_minutes: int = 0
    request_timeout: float = 10.0

    @property
    def weather_configured(self) -> bool:
        key = self.weather_api_key.strip()
        return bool(key and key != PLACEHOLDER_API_KEY and self.location.strip())

    @property
    def holidays_configured(self) -> bool:
        return bool(self.country_code.strip())

    @property
    def notion_configured(self) -> bool:
        return bool(self.notion_api_key.strip() and self.notion_database_id.strip())


def _categories_to_json(categories: list[BookmarkCategory]) -> str:
    return json.dumps(
        [
            {
                "name": c.name,
                "items": [{"name": b.name, "url": b.url} for b in c.items],
            }
            for c in categories
        ],
        ensure_ascii=False,
    )


def _categories_from_json(key: str, value: str) -> list[BookmarkCategory]:
    # JSON format: [{"name": "...", "items": [{"name": "...", "url": "..."}]}]
    try:
        data = json.loads(value)
        return [
            BookmarkCategory(
                name=item["name"],
                items=[Bookmark(b["name"], b["url"]) for b in item.get("items", [])],
            )
            for item in data
        ]
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ConfigError(f"Failed to parse {key.upper()} JSON: {e}") from e


def _parse_number(key: str, value: str, kind: type) -> int | float:
    try:
        return kind(value)
    except ValueError as e:
        raise ConfigError(f"{key.upper()} must be a number, got {value!r}") from e


def _quote(value: str) -> str:
    """Double-quote a string value, escaping quotes, backslashes and newlines."""
    return json.dumps(value, ensure_ascii=False)


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value.startswith('"'):
        # Values written by save_settings are JSON string literals
        try:
            decoded, _ = _STRING_DECODER.raw_decode(value)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(decoded, str):
                return decoded
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # JSON values may legitimately contain '#' (URL fragments)
    if value.startswith("["):
        return value
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from deskup.conf."""
    path = path or CONFIG_FILE
    settings = Settings()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "user_name":
                settings.user_name = value
            case "weather_api_key":
                settings.weather_api_key = value
            case "location":
                settings.location = value
            case "country_code":
                settings.country_code = value.upper()
            case "bookmarks_desktop":
                settings.bookmarks.desktop = _categories_from_json(key, value)
            case "bookmarks_web":
                settings.bookmarks.web = _categories_from_json(key, value)
            case "notion_api_key":
                settings.notion_api_key = value
            case "notion_database_id":
                settings.notion_database_id = value
            case "refresh_minutes":
                settings.refresh_minutes = _parse_number(key, value, int)
            case "request_timeout":
                settings.request_timeout = _parse_number(key, value, float)
            case _:
                logger.warning(f"Unknown setting {key.upper()} in {path}")

    return settings


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to deskup.conf, creating parent directories."""
    path = path or CONFIG_FILE
    lines = [
        "# DeskUp settings",
        f"USER_NAME = {_quote(settings.user_name)}",
        f"LOCATION = {_quote(settings.location)}",
        f"COUNTRY_CODE = {_quote(settings.country_code)}",
        "",
        "# OpenWeatherMap API key",
        f"WEATHER_API_KEY = {_quote(settings.weather_api_key)}",
        "",
        "# Optional Notion task list",
        f"NOTION_API_KEY = {_quote(settings.notion_api_key)}",
        f"NOTION_DATABASE_ID = {_quote(settings.notion_database_id)}",
        "",
        "# Minutes between background refreshes (0 = once per run)",
        f"REFRESH_MINUTES = {settings.refresh_minutes}",
        f"REQUEST_TIMEOUT = {settings.request_timeout}",
        "",
        "# Bookmarks: [{\"name\": category, \"items\": [{\"name\": ..., \"url\": ...}]}]",
        f"BOOKMARKS_DESKTOP = {_categories_to_json(settings.bookmarks.desktop)}",
        f"BOOKMARKS_WEB = {_categories_to_json(settings.bookmarks.web)}",
    ]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot write settings file {path}: {e}") from e
    return path


def ensure_settings(path: Path | None = None) -> Settings:
    """Load settings, writing a default file first if none exists."""
    path = path or CONFIG_FILE
    if not path.exists():
        settings = Settings()
        save_settings(settings, path)
        logger.info(f"Created default settings at {path}")
        return settings
    return load_settings(path)
