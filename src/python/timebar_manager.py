"""
TimebarManager: the stateful face of the timebar.

Holds the current TimelineState, the tick ladder and the record index, runs
the pure zoom and pan transitions, and notifies observers. Drawing hosts
call apply_layout() once per frame; it fires the pending scale
notifications and returns a TimebarFrame describing what to draw.

All calls are expected on a single (UI) thread. Every notification is sent
after the state change it reports.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterable

from coordinate_mapper import Tick, compute_ticks, left_edge, state_visible_bounds, view_x
from custom_types import EpochMs, VisibleBounds
from enums import CriterionLevel, TimebarEvent
from pan_controller import apply_drag
from tick_criterion import TickCriterion, build_ladder
from time_segments import TimeRange, TimeSegmentIndex
from time_utils import MS_PER_DAY, MS_PER_HOUR, now_ms
from view_state import TimelineState
from zoom_controller import apply_discrete_step, apply_scale_factor

logger = logging.getLogger(__name__)


class TimebarObserver(ABC):
    """Receives move and scale notifications with the post-change visible window."""

    @abstractmethod
    def on_move(self, visible_left: EpochMs, visible_right: EpochMs, cursor: EpochMs) -> None:
        """Called on every pan delta."""
        pass

    @abstractmethod
    def on_move_finished(self, visible_left: EpochMs, visible_right: EpochMs, cursor: EpochMs) -> None:
        """Called once when a pan gesture ends."""
        pass

    @abstractmethod
    def on_scaled(self, visible_left: EpochMs, visible_right: EpochMs, cursor: EpochMs) -> None:
        """Called when a layout pass applies a new timeline width."""
        pass

    @abstractmethod
    def on_scale_finished(self, visible_left: EpochMs, visible_right: EpochMs, cursor: EpochMs) -> None:
        """Called once after a button zoom or a finished pinch."""
        pass


_OBSERVER_METHODS = {
    TimebarEvent.MOVE: "on_move",
    TimebarEvent.MOVE_FINISHED: "on_move_finished",
    TimebarEvent.SCALED: "on_scaled",
    TimebarEvent.SCALE_FINISHED: "on_scale_finished",
}


@dataclass(frozen=True)
class RecordSpan:
    """A visible record range in viewport coordinates."""
    position: int
    x1: float
    x2: float


@dataclass(frozen=True)
class TimebarFrame:
    """Everything a host needs to draw one frame of the timebar."""
    state: TimelineState
    criterion: TickCriterion
    visible_bounds: VisibleBounds
    left_edge: float
    cursor_x: float
    ticks: tuple[Tick, ...]
    record_spans: tuple[RecordSpan, ...]


class TimebarManager:
    """Timeline state, zoom ladder and record index behind one timebar view."""

    _state: TimelineState
    _ladder: tuple[TickCriterion, ...]
    _index: TimeSegmentIndex
    _tz: tzinfo | None
    _observers: list[TimebarObserver]
    _applied_geometry: tuple[int, int] | None
    _scale_finish_pending: bool

    def __init__(
        self,
        viewport_width: int,
        tz: tzinfo | None = None,
        now: EpochMs | None = None,
        record_days: int = 7,
        cursor_lead_hours: int = 3,
        default_criterion: int = CriterionLevel.SIX_HOURS
    ) -> None:
        """Create a timebar showing the last ``record_days`` days up to now.

        The cursor starts ``cursor_lead_hours`` before now, on the 36-hour
        criterion, until initialize() is called.

        Args:
            viewport_width: Width of the visible window in pixels
            tz: Zone for day boundaries, tick alignment and labels (None = local)
            now: Current instant, defaults to the wall clock
            record_days: Length of the default timeline in days
            cursor_lead_hours: How far before now the default cursor sits
            default_criterion: Criterion selected by initialize()
        """
        self._tz = tz
        self._observers = []
        self._applied_geometry = None
        self._scale_finish_pending = False
        self._default_criterion = int(default_criterion)
        self._index = TimeSegmentIndex(tz=tz)

        right = now if now is not None else now_ms()
        left = right - record_days * MS_PER_DAY
        cursor = right - cursor_lead_hours * MS_PER_HOUR
        self._build(left, right, cursor, viewport_width, CriterionLevel.THIRTY_SIX_HOURS)

    def _build(
        self,
        left: EpochMs,
        right: EpochMs,
        cursor: EpochMs,
        viewport_width: int,
        criterion_index: int
    ) -> None:
        state = TimelineState.create(left, right, cursor, viewport_width)
        self._ladder = build_ladder(state.total_seconds, viewport_width)
        self._state = state.with_zoom(criterion_index, self._ladder[criterion_index].standard_pixel_width)
        self._applied_geometry = None
        logger.info(
            "Timebar initialized: %d..%d (%ds), cursor %d, criterion %d",
            left, right, state.total_seconds, self._state.cursor, criterion_index
        )

    # Setup

    def initialize(
        self,
        left_bound: EpochMs,
        right_bound: EpochMs,
        cursor: EpochMs,
        viewport_width: int | None = None
    ) -> None:
        """Replace the whole timeline and reset to the default criterion's standard width.

        Raises:
            ValueError: If the bounds are reversed, shorter than one second,
                or the viewport has no width
        """
        width = viewport_width if viewport_width is not None else self._state.viewport_width
        self._build(left_bound, right_bound, cursor, width, self._default_criterion)

    def set_time_ranges(self, ranges: Iterable[TimeRange]) -> None:
        """Replace the record ranges drawn on the recordbar."""
        self._index = TimeSegmentIndex.build(ranges, self._tz)
        logger.info("Time ranges replaced: %d ranges", len(self._index))

    def set_viewport_width(self, viewport_width: int) -> None:
        """Resize the viewport; the ladder keeps the widths of the last initialize()."""
        self._state = self._state.with_viewport(viewport_width)

    def reset_to_standard_width(self, criterion_index: int | None = None) -> None:
        """Jump to a criterion's standard width (the default criterion if omitted)."""
        index = self._default_criterion if criterion_index is None else criterion_index
        if not 0 <= index < len(self._ladder):
            raise ValueError(f"Criterion index {index} outside [0, {len(self._ladder)})")
        self._state = self._state.with_zoom(index, self._ladder[index].standard_pixel_width)

    # Observers

    def add_observer(self, observer: TimebarObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: TimebarObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_observers(self, event: TimebarEvent) -> None:
        visible_left, visible_right = self.get_visible_bounds()
        cursor = self._state.cursor
        method_name = _OBSERVER_METHODS[event]
        for observer in list(self._observers):
            try:
                getattr(observer, method_name)(visible_left, visible_right, cursor)
            except Exception as e:
                logger.error("Error notifying observer %s of %s: %s", observer, event, e)

    # Queries

    @property
    def state(self) -> TimelineState:
        return self._state

    @property
    def ladder(self) -> tuple[TickCriterion, ...]:
        return self._ladder

    @property
    def criterion(self) -> TickCriterion:
        """The active tick criterion."""
        return self._ladder[self._state.criterion_index]

    @property
    def criterion_index(self) -> int:
        return self._state.criterion_index

    @property
    def segment_index(self) -> TimeSegmentIndex:
        return self._index

    @property
    def time_ranges(self) -> tuple[TimeRange, ...]:
        return self._index.ranges

    def get_most_left_time(self) -> EpochMs:
        """Earliest instant of the whole timeline, visible or not."""
        return self._state.left_bound

    def get_most_right_time(self) -> EpochMs:
        """Latest instant of the whole timeline, visible or not."""
        return self._state.right_bound

    def get_visible_bounds(self) -> VisibleBounds:
        """Left and right instants currently inside the viewport."""
        return state_visible_bounds(self._state)

    def get_cursor_time(self) -> EpochMs:
        return self._state.cursor

    def set_cursor_time(self, cursor: EpochMs) -> None:
        """Move the cursor without a notification, e.g. to follow playback."""
        self._state = self._state.with_cursor(cursor)

    # Zoom

    def zoom_by_factor(self, factor: float) -> None:
        """Continuous zoom from a pinch or wheel gesture.

        Raises:
            ValueError: If the factor is not positive and finite
        """
        self._state = apply_scale_factor(self._state, self._ladder, factor)

    def zoom_gesture_finished(self) -> None:
        """Mark a finished pinch so the next layout pass reports scale finished."""
        self._scale_finish_pending = True

    def zoom_step(self, zoom_in: bool) -> bool:
        """Button zoom to a standard width.

        Returns:
            False if the ladder end refused the step
        """
        new_state = apply_discrete_step(self._state, self._ladder, zoom_in)
        if new_state is None:
            return False
        self._state = new_state
        self._scale_finish_pending = True
        return True

    # Pan

    def pan(self, dx: float) -> None:
        """Drag the timeline by ``dx`` viewport pixels and report the move."""
        if dx == 0:
            return
        self._state = apply_drag(self._state, dx)
        self._notify_observers(TimebarEvent.MOVE)

    def pan_finished(self) -> None:
        """End of a drag gesture."""
        self._notify_observers(TimebarEvent.MOVE_FINISHED)

    # Layout

    def apply_layout(self) -> TimebarFrame:
        """Per-frame step: flush scale notifications and describe the frame.

        Reports scaled when the timeline or viewport width differs from the
        last pass, then scale finished if a button zoom or pinch end is
        pending. Repeated calls without a state change notify nothing.
        """
        geometry = (self._state.pixel_width, self._state.viewport_width)
        if geometry != self._applied_geometry:
            self._applied_geometry = geometry
            self._notify_observers(TimebarEvent.SCALED)
        if self._scale_finish_pending:
            self._scale_finish_pending = False
            self._notify_observers(TimebarEvent.SCALE_FINISHED)
        return self.frame()

    def frame(self) -> TimebarFrame:
        """Snapshot of ticks, record spans and cursor position for the current state."""
        state = self._state
        criterion = self.criterion
        bounds = state_visible_bounds(state)

        spans: tuple[RecordSpan, ...] = ()
        if state.pixels_per_second > 0:
            padding = criterion.minor_interval_seconds * 1000
            spans = tuple(
                RecordSpan(position, view_x(r.start, state), view_x(r.end, state))
                for position, r in self._index.iter_overlapping(bounds[0] - padding, bounds[1] + padding)
            )

        return TimebarFrame(
            state=state,
            criterion=criterion,
            visible_bounds=bounds,
            left_edge=left_edge(state),
            cursor_x=state.viewport_width / 2,
            ticks=tuple(compute_ticks(state, criterion, self._tz)),
            record_spans=spans,
        )
