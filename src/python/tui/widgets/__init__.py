"""TUI widgets for the timebar Textual app."""

from .timebar import TimebarWidget

__all__ = ["TimebarWidget"]
