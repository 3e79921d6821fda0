"""
Tick criterion ladder for the timebar.

The timebar zooms between five fixed granularity presets. Each preset says
how much time fits in one viewport width and how far apart major (labelled)
and minor ticks are:

    level  visible span  major interval  minor interval  label
    0      10 minutes    1 minute        6 seconds       HH:MM
    1      1 hour        10 minutes      1 minute        HH:MM
    2      6 hours       1 hour          5 minutes       HH:MM
    3      36 hours      6 hours         30 minutes      HH:MM
    4      6 days        1 day           2 hours         MM.DD

Given the length of the whole timeline, each preset also has a standard
pixel width: the width the whole timeline must have so that exactly one
visible span fits in the viewport.
"""

import logging
from dataclasses import dataclass

from enums import CriterionLevel, LabelFormat

logger = logging.getLogger(__name__)

LADDER_SIZE = len(CriterionLevel)

# (visible span, major interval, minor interval, label format), seconds
TICK_PRESETS: tuple[tuple[int, int, int, LabelFormat], ...] = (
    (10 * 60, 60, 6, LabelFormat.TIME_OF_DAY),
    (60 * 60, 10 * 60, 60, LabelFormat.TIME_OF_DAY),
    (6 * 60 * 60, 60 * 60, 5 * 60, LabelFormat.TIME_OF_DAY),
    (36 * 60 * 60, 6 * 60 * 60, 30 * 60, LabelFormat.TIME_OF_DAY),
    (6 * 24 * 60 * 60, 24 * 60 * 60, 2 * 60 * 60, LabelFormat.MONTH_DAY),
)


@dataclass(frozen=True)
class TickCriterion:
    """One granularity preset with its standard width for the current timeline.

    Attributes:
        level: Position in the ladder
        visible_span_seconds: Time shown across one viewport width
        major_interval_seconds: Time between two labelled ticks
        minor_interval_seconds: Time between two consecutive ticks
        label_format: strftime pattern for major tick labels
        standard_pixel_width: Timeline width at which this criterion fits exactly
    """
    level: CriterionLevel
    visible_span_seconds: int
    major_interval_seconds: int
    minor_interval_seconds: int
    label_format: LabelFormat
    standard_pixel_width: int

    def is_major(self, local_seconds: int) -> bool:
        """Whether a tick at this local wall-clock second is a major tick."""
        return local_seconds % self.major_interval_seconds == 0


def standard_pixel_width(
    viewport_width_px: int,
    total_timeline_seconds: int,
    visible_span_seconds: int
) -> int:
    """Timeline width that shows ``visible_span_seconds`` per viewport, truncated."""
    return int(viewport_width_px * total_timeline_seconds // visible_span_seconds)


def build_ladder(
    total_timeline_seconds: int,
    viewport_width_px: int
) -> tuple[TickCriterion, ...]:
    """Build the five-entry ladder for a timeline length and viewport width.

    Args:
        total_timeline_seconds: Length of the whole timeline in seconds
        viewport_width_px: Width of the viewport in pixels

    Returns:
        Tuple of five criteria ordered by increasing visible span

    Raises:
        ValueError: If either argument is not positive
    """
    if total_timeline_seconds <= 0:
        raise ValueError(f"Timeline duration must be positive, got {total_timeline_seconds}s")
    if viewport_width_px <= 0:
        raise ValueError(f"Viewport width must be positive, got {viewport_width_px}px")

    ladder = tuple(
        TickCriterion(
            level=CriterionLevel(i),
            visible_span_seconds=span,
            major_interval_seconds=major,
            minor_interval_seconds=minor,
            label_format=label_format,
            standard_pixel_width=standard_pixel_width(viewport_width_px, total_timeline_seconds, span),
        )
        for i, (span, major, minor, label_format) in enumerate(TICK_PRESETS)
    )
    logger.debug(
        "Built tick ladder for %ss over %spx: widths %s",
        total_timeline_seconds, viewport_width_px,
        [c.standard_pixel_width for c in ladder]
    )
    return ladder


def midpoint_width(ladder: tuple[TickCriterion, ...], lower: int, upper: int) -> int:
    """Integer average of the standard widths of two ladder entries."""
    return (ladder[lower].standard_pixel_width + ladder[upper].standard_pixel_width) // 2
