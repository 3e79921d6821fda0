"""UI components package for the timebar."""

from ui.timebar_widget import TimebarWidget
from ui.zoom_controls import ZoomControls

__all__ = [
    "TimebarWidget",
    "ZoomControls",
]
