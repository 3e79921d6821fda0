"""
TimelineState: the mutable-by-replacement state of one timebar.

The zoom and pan controllers are pure functions from one TimelineState to the
next; the timebar manager holds the current one.
"""

from dataclasses import dataclass, replace

from custom_types import EpochMs
from tick_criterion import LADDER_SIZE


@dataclass(frozen=True)
class TimelineState:
    """Bounds, cursor and zoom of the timeline.

    Attributes:
        left_bound: Earliest instant of the whole timeline
        right_bound: Latest instant of the whole timeline
        cursor: Instant centred in the viewport
        criterion_index: Active ladder entry (0..4)
        pixel_width: Current width of the whole timeline in pixels,
            excluding the half-viewport padding on each side
        viewport_width: Width of the visible window in pixels
    """
    left_bound: EpochMs
    right_bound: EpochMs
    cursor: EpochMs
    criterion_index: int
    pixel_width: int
    viewport_width: int

    def __post_init__(self) -> None:
        if not 0 <= self.criterion_index < LADDER_SIZE:
            raise ValueError(f"Criterion index {self.criterion_index} outside [0, {LADDER_SIZE})")
        if self.pixel_width < 0:
            raise ValueError(f"Pixel width must not be negative, got {self.pixel_width}")
        if not self.left_bound <= self.cursor <= self.right_bound:
            raise ValueError(
                f"Cursor {self.cursor} outside timeline [{self.left_bound}, {self.right_bound}]"
            )

    @classmethod
    def create(
        cls,
        left_bound: EpochMs,
        right_bound: EpochMs,
        cursor: EpochMs,
        viewport_width: int,
        criterion_index: int = 0,
        pixel_width: int = 0
    ) -> 'TimelineState':
        """Validate caller input and build a state; the cursor is clamped into bounds.

        Raises:
            ValueError: If the bounds are reversed, the timeline is shorter
                than one second, or the viewport has no width
        """
        if right_bound < left_bound:
            raise ValueError(f"Right bound {right_bound} is before left bound {left_bound}")
        if (right_bound - left_bound) // 1000 <= 0:
            raise ValueError("Timeline duration must be at least one second")
        if viewport_width <= 0:
            raise ValueError(f"Viewport width must be positive, got {viewport_width}")
        return cls(
            left_bound=left_bound,
            right_bound=right_bound,
            cursor=min(max(cursor, left_bound), right_bound),
            criterion_index=criterion_index,
            pixel_width=pixel_width,
            viewport_width=viewport_width,
        )

    @property
    def total_seconds(self) -> int:
        """Length of the whole timeline in whole seconds."""
        return (self.right_bound - self.left_bound) // 1000

    @property
    def pixels_per_second(self) -> float:
        """Current scale; 0.0 when the timeline has no width."""
        if self.total_seconds <= 0 or self.pixel_width <= 0:
            return 0.0
        return self.pixel_width / self.total_seconds

    def with_cursor(self, cursor: EpochMs) -> 'TimelineState':
        """Copy with the cursor moved, clamped into the timeline bounds."""
        return replace(self, cursor=min(max(cursor, self.left_bound), self.right_bound))

    def with_zoom(self, criterion_index: int, pixel_width: int) -> 'TimelineState':
        """Copy with a new active criterion and timeline width."""
        return replace(self, criterion_index=criterion_index, pixel_width=pixel_width)

    def with_viewport(self, viewport_width: int) -> 'TimelineState':
        """Copy with a resized viewport.

        Raises:
            ValueError: If the width is not positive
        """
        if viewport_width <= 0:
            raise ValueError(f"Viewport width must be positive, got {viewport_width}")
        return replace(self, viewport_width=viewport_width)
