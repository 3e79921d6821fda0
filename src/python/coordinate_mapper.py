"""
Coordinate mapping between instants and timeline pixels.

The whole timeline is ``pixel_width`` pixels wide plus half a viewport of
padding on each side, so the cursor can reach either end without exposing
space outside the timeline. The viewport is centred on the cursor:

    offset(t)  = (t - left_bound) * pixels_per_second
    view_x(t)  = offset(t) - offset(cursor) + viewport_width / 2
    left_edge  = -offset(cursor)      (timeline start in viewport coordinates)

Instants are epoch milliseconds, pixels_per_second is pixels per second.
"""

from dataclasses import dataclass
from datetime import tzinfo

import numpy as np

from custom_types import EpochMs, OffsetArray, SecondsArray, TickMaskArray, VisibleBounds
from tick_criterion import TickCriterion
from time_utils import format_instant, zone_offset_seconds
from view_state import TimelineState


@dataclass(frozen=True)
class Tick:
    """A ruler mark inside the visible window.

    Attributes:
        time: Instant of the mark
        x: Horizontal position in viewport coordinates
        major: Whether this is a labelled major tick
        label: Formatted time for major ticks, None for minor ticks or
            when the instant could not be formatted
    """
    time: EpochMs
    x: float
    major: bool
    label: str | None = None


def pixels_per_second(pixel_width: int, total_seconds: int) -> float:
    """Scale of a timeline ``pixel_width`` pixels wide spanning ``total_seconds``."""
    if total_seconds <= 0 or pixel_width <= 0:
        return 0.0
    return pixel_width / total_seconds


def time_to_offset(t: EpochMs, pps: float, origin: EpochMs) -> float:
    """Pixel offset of instant ``t`` from the timeline origin."""
    return (t - origin) / 1000 * pps


def offset_to_time(offset: float, pps: float, origin: EpochMs) -> EpochMs:
    """Instant at pixel ``offset`` from the origin; the origin itself when pps is 0."""
    if pps <= 0:
        return origin
    return origin + round(offset / pps * 1000)


def visible_bounds(cursor: EpochMs, viewport_width: int, pps: float) -> VisibleBounds:
    """Left and right instants of a viewport centred on ``cursor``.

    A zero scale means nothing is visible, and both bounds collapse onto the cursor.
    """
    if pps <= 0:
        return cursor, cursor
    half_span_ms = int(viewport_width * 1000 / 2 / pps)
    return cursor - half_span_ms, cursor + half_span_ms


def state_visible_bounds(state: TimelineState) -> VisibleBounds:
    """Visible window of ``state``."""
    return visible_bounds(state.cursor, state.viewport_width, state.pixels_per_second)


def left_edge(state: TimelineState) -> float:
    """Position of the timeline start (left padding included) in viewport coordinates."""
    return -time_to_offset(state.cursor, state.pixels_per_second, state.left_bound)


def view_x(t: EpochMs, state: TimelineState) -> float:
    """Position of instant ``t`` in viewport coordinates."""
    return time_to_offset(t, state.pixels_per_second, state.cursor) + state.viewport_width / 2


def tick_seconds(
    window_start_s: int,
    window_end_s: int,
    minor_interval_s: int,
    major_interval_s: int,
    zone_offset_s: int = 0
) -> tuple[SecondsArray, TickMaskArray]:
    """Tick instants (epoch seconds) covering a window, with a major-tick mask.

    Ticks are aligned to multiples of the minor interval in local wall-clock
    time. One extra minor interval is covered before and after the window so
    marks entering from either edge are already placed.
    """
    local_start = window_start_s - minor_interval_s + zone_offset_s
    first_local = -(-local_start // minor_interval_s) * minor_interval_s
    first = first_local - zone_offset_s
    last = window_end_s + minor_interval_s
    times = np.arange(first, last + 1, minor_interval_s, dtype=np.int64)
    majors = (times + zone_offset_s) % major_interval_s == 0
    return times, majors


def compute_ticks(
    state: TimelineState,
    criterion: TickCriterion,
    tz: tzinfo | None = None
) -> list[Tick]:
    """Ruler marks for the visible window of ``state`` under ``criterion``."""
    pps = state.pixels_per_second
    if pps <= 0:
        return []

    left, right = state_visible_bounds(state)
    zone_offset = zone_offset_seconds(left, tz)
    times, majors = tick_seconds(
        left // 1000,
        right // 1000,
        criterion.minor_interval_seconds,
        criterion.major_interval_seconds,
        zone_offset,
    )
    xs: OffsetArray = (times * 1000 - state.cursor) / 1000 * pps + state.viewport_width / 2

    ticks: list[Tick] = []
    for t, x, major in zip(times.tolist(), xs.tolist(), majors.tolist()):
        label = format_instant(t * 1000, criterion.label_format, tz) if major else None
        ticks.append(Tick(time=t * 1000, x=x, major=major, label=label))
    return ticks
