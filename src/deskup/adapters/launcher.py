"""Process launchers - open a command or URL with the host's default handler."""

import logging
import subprocess
import sys
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class LaunchError(Exception):
    """Raised when a launch target cannot be started."""

    pass


class _SpawnLauncher(ABC):
    """Spawns a handler process and returns without waiting for it."""

    @abstractmethod
    def command(self, target: str) -> list[str]:
        """Argument vector that opens target."""

    def launch(self, target: str) -> None:
        if not target.strip():
            raise LaunchError("Empty launch target")
        cmd = self.command(target)
        logger.debug(f"Launching {cmd}")
        try:
            subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError as e:
            raise LaunchError(f"Failed to launch {target!r}: {e}") from e


class WindowsLauncher(_SpawnLauncher):
    def command(self, target: str) -> list[str]:
        # Empty title argument so quoted targets are not taken as the window title
        return ["cmd", "/C", "start", "", target]


class MacLauncher(_SpawnLauncher):
    def command(self, target: str) -> list[str]:
        return ["open", target]


class XdgLauncher(_SpawnLauncher):
    def command(self, target: str) -> list[str]:
        return ["xdg-open", target]


def get_launcher(platform: str | None = None) -> _SpawnLauncher:
    """Pick the launcher for a sys.platform value (defaults to the current one)."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WindowsLauncher()
    if platform == "darwin":
        return MacLauncher()
    return XdgLauncher()
