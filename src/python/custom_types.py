"""
Type definitions for the timebar.

This module defines common types, aliases, and TypedDict structures
used throughout the timebar codebase.
"""

from typing import TypedDict

import numpy as np
import numpy.typing as npt

# Absolute instants are integer epoch milliseconds
EpochMs = int

# (left, right) instants of the visible window
VisibleBounds = tuple[EpochMs, EpochMs]

# NumPy array type aliases
SecondsArray = npt.NDArray[np.int64]   # Tick instants in epoch seconds
OffsetArray = npt.NDArray[np.float64]  # Pixel offsets along the timeline
TickMaskArray = npt.NDArray[np.bool_]   # True where a tick is major


# Configuration TypedDict definitions
class TimebarDimensionConfig(TypedDict, total=False):
    """Drawing constants of the timebar in dp (ui.timebar section)."""
    viewHeight: int
    recordbarHeight: int
    keyTickTextSize: int
    bigTickHeight: int
    smallTickHeight: int
    bigTickHalfWidth: int
    smallTickHalfWidth: int
    tickTextMargin: int
    recordbarTextMargin: int
    cursorWidth: int


class TimebarDefaultsConfig(TypedDict, total=False):
    """Default timeline settings (timebar section)."""
    recordDays: int
    cursorLeadHours: int
    defaultCriterion: int
    wheelZoomFactor: float
    panStepColumns: int


class TimeRangeRecord(TypedDict):
    """One entry of a range file; values are epoch ms or ISO-8601 strings."""
    start: int | str
    end: int | str
