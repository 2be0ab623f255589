"""Response models - one passive record per external API reply shape."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Weather:
    """Current conditions for a location."""

    description: str
    temp_kelvin: float
    humidity: int

    @classmethod
    def from_api(cls, data: dict) -> "Weather":
        """Create Weather from an OpenWeatherMap response."""
        conditions = data["weather"]
        if not conditions:
            raise ValueError("weather response has no conditions")
        return cls(
            description=conditions[0]["description"],
            temp_kelvin=float(data["main"]["temp"]),
            humidity=int(data["main"]["humidity"]),
        )


@dataclass(frozen=True)
class Joke:
    setup: str
    punchline: str

    @property
    def text(self) -> str:
        return f"{self.setup} - {self.punchline}"

    @classmethod
    def from_api(cls, data: dict) -> "Joke":
        return cls(setup=data["setup"], punchline=data["punchline"])


@dataclass(frozen=True)
class Anniversary:
    """A Japanese "what day is it today" entry."""

    name: str
    description: str

    @classmethod
    def list_from_api(cls, data: dict) -> list["Anniversary"]:
        return [
            cls(name=item["name"], description=item["description"])
            for item in data["anniversaries"]
        ]


@dataclass(frozen=True)
class Holiday:
    """A public holiday from Nager.Date."""

    date: str
    name: str
    local_name: str

    @classmethod
    def list_from_api(cls, data: list) -> list["Holiday"]:
        if not isinstance(data, list):
            raise ValueError("holiday response is not a list")
        return [
            cls(date=item["date"], name=item["name"], local_name=item["localName"])
            for item in data
        ]


@dataclass(frozen=True)
class TaskItem:
    """One open item in the external task tracker."""

    id: str
    title: str
