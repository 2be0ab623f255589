"""Launcher interface."""

from typing import Protocol


class Launcher(Protocol):
    """Opens a local command or URL with the host's default handler."""

    def launch(self, target: str) -> None:
        """Launch target. Raises LaunchError if the process cannot be spawned."""
        ...
