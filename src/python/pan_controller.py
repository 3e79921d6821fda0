"""Drag transitions: moving the timeline under a fixed viewport."""

import logging

from coordinate_mapper import left_edge
from view_state import TimelineState

logger = logging.getLogger(__name__)


def clamp_left_edge(edge: float, state: TimelineState) -> float:
    """Keep the padded timeline covering the whole viewport.

    The left edge may not move right of the viewport's left side, and the
    right edge (``edge + pixel_width + viewport_width``) may not move left of
    the viewport's right side.
    """
    if edge >= 0:
        return 0.0
    full_width = state.pixel_width + state.viewport_width
    if edge + full_width < state.viewport_width:
        return float(state.viewport_width - full_width)
    return edge


def apply_drag(state: TimelineState, dx: float) -> TimelineState:
    """Shift the timeline by ``dx`` viewport pixels and recompute the cursor.

    Dragging right (positive dx) moves toward earlier time. A timeline with
    no width cannot be dragged.
    """
    if state.pixel_width <= 0 or state.total_seconds <= 0:
        return state

    edge = clamp_left_edge(left_edge(state) + dx, state)
    cursor = state.left_bound + round(-edge * state.total_seconds * 1000 / state.pixel_width)
    logger.debug("Drag by %.1fpx: left edge %.1f, cursor %d -> %d", dx, edge, state.cursor, cursor)
    return state.with_cursor(cursor)
