"""DeskUp - personal desktop dashboard."""

__version__ = "0.1.0"
