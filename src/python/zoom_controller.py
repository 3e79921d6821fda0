"""
Zoom transitions over the tick criterion ladder.

Two kinds of zoom exist:

- Continuous (pinch/wheel): the timeline width is multiplied by a factor and
  the criterion whose standard width is nearest is selected. The width only
  snaps when it would leave the ladder's range.
- Discrete (zoom buttons): the width always lands on a standard width, so
  one press recovers a clean criterion even after a gesture left the width
  between two standards.

Both are pure functions returning a new TimelineState.
"""

import logging
import math

from tick_criterion import LADDER_SIZE, TickCriterion, midpoint_width
from view_state import TimelineState

logger = logging.getLogger(__name__)


def classify_width(width: int, ladder: tuple[TickCriterion, ...]) -> tuple[int, int]:
    """Select the ladder entry for a timeline width.

    Standard widths decrease with the index. A width above entry 0 or below
    the last entry is clamped to that entry's standard width. Otherwise the
    entry whose band contains the width is chosen, where the band of entry i
    runs from the midpoint with entry i+1 (inclusive) up to the midpoint with
    entry i-1 (exclusive). A width exactly on a midpoint selects the lower index.

    Returns:
        Tuple of (criterion index, resulting width)
    """
    last = len(ladder) - 1
    if width >= ladder[0].standard_pixel_width:
        return 0, ladder[0].standard_pixel_width
    if width < ladder[last].standard_pixel_width:
        return last, ladder[last].standard_pixel_width

    for index in range(last):
        if width >= midpoint_width(ladder, index, index + 1):
            return index, width
    return last, width


def apply_scale_factor(
    state: TimelineState,
    ladder: tuple[TickCriterion, ...],
    factor: float
) -> TimelineState:
    """Scale the timeline width by ``factor`` and reclassify it.

    Raises:
        ValueError: If the factor is not a positive finite number
    """
    if not math.isfinite(factor) or factor <= 0:
        raise ValueError(f"Scale factor must be positive and finite, got {factor}")

    candidate = int(state.pixel_width * factor)
    index, width = classify_width(candidate, ladder)
    logger.debug(
        "Scale by %.3f: width %d -> %d (candidate %d), criterion %d -> %d",
        factor, state.pixel_width, width, candidate, state.criterion_index, index
    )
    return state.with_zoom(index, width)


def apply_discrete_step(
    state: TimelineState,
    ladder: tuple[TickCriterion, ...],
    zoom_in: bool
) -> TimelineState | None:
    """Step the zoom by one button press, always landing on a standard width.

    At a standard width the press moves to the neighbouring criterion
    (zoom in decrements the index, zoom out increments it). Between standard
    widths the press either snaps back to the current criterion's width
    (zooming in while wider, or out while narrower) or moves to the neighbour
    (zooming in while narrower, or out while wider).

    Returns:
        The new state, or None if the press is refused at either end of the ladder
    """
    current = state.criterion_index
    current_standard = ladder[current].standard_pixel_width
    neighbour = current - 1 if zoom_in else current + 1

    if state.pixel_width == current_standard:
        target = neighbour
    elif state.pixel_width > current_standard:
        target = current if zoom_in else neighbour
    else:
        target = neighbour if zoom_in else current

    if not 0 <= target < LADDER_SIZE:
        logger.debug("Zoom %s refused at criterion %d", "in" if zoom_in else "out", current)
        return None

    width = ladder[target].standard_pixel_width
    logger.debug(
        "Zoom %s: criterion %d -> %d, width %d -> %d",
        "in" if zoom_in else "out", current, target, state.pixel_width, width
    )
    return state.with_zoom(target, width)
