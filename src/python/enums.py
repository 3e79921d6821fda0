"""
Enumerations for the timebar using Python 3.11+ StrEnum and IntEnum.

This module defines the small closed sets used throughout the timebar:
the five zoom levels of the tick ladder, the label patterns drawn under
major ticks, and the notification kinds delivered to observers.
"""

from enum import IntEnum, StrEnum


class CriterionLevel(IntEnum):
    """Position of a tick criterion in the zoom ladder.

    Lower levels show less time per screen (zoomed in).

    Attributes:
        TEN_MINUTES: 10 minutes visible, major tick every minute
        ONE_HOUR: 1 hour visible, major tick every 10 minutes
        SIX_HOURS: 6 hours visible, major tick every hour
        THIRTY_SIX_HOURS: 36 hours visible, major tick every 6 hours
        SIX_DAYS: 6 days visible, major tick every day
    """
    TEN_MINUTES = 0
    ONE_HOUR = 1
    SIX_HOURS = 2
    THIRTY_SIX_HOURS = 3
    SIX_DAYS = 4


class LabelFormat(StrEnum):
    """strftime patterns used for major tick labels.

    Attributes:
        TIME_OF_DAY: Hours and minutes, e.g. "14:30"
        MONTH_DAY: Month and day, e.g. "11.26"
    """
    TIME_OF_DAY = "%H:%M"
    MONTH_DAY = "%m.%d"


class TimebarEvent(StrEnum):
    """Notification kinds emitted by the timebar manager.

    Attributes:
        MOVE: Emitted on every pan delta
        MOVE_FINISHED: Emitted once when a pan gesture ends
        SCALED: Emitted whenever the timeline pixel width is applied
        SCALE_FINISHED: Emitted once after a snap zoom or a finished pinch
    """
    MOVE = "move"
    MOVE_FINISHED = "move_finished"
    SCALED = "scaled"
    SCALE_FINISHED = "scale_finished"
