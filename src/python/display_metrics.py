"""Density-independent drawing dimensions for the timebar.

Design constants are expressed in dp and converted with the host's pixel
density (1.0 at the reference density).
"""

from dataclasses import dataclass

from custom_types import TimebarDimensionConfig


def dp_to_px(dp: float, density: float) -> int:
    """Convert dp to device pixels, rounding half up."""
    return int(dp * density + 0.5)


def px_to_dp(px: float, density: float) -> int:
    """Convert device pixels to dp, rounding half up."""
    if density <= 0:
        raise ValueError(f"Density must be positive, got {density}")
    return int(px / density + 0.5)


@dataclass(frozen=True)
class TimebarDimensions:
    """Pixel sizes used to lay out ticks, labels, the recordbar and the cursor."""
    view_height: int
    recordbar_height: int
    key_tick_text_size: int
    big_tick_height: int
    small_tick_height: int
    big_tick_half_width: int
    small_tick_half_width: int
    tick_text_margin: int
    recordbar_text_margin: int
    cursor_width: int

    @classmethod
    def from_config(cls, dims: TimebarDimensionConfig, density: float = 1.0) -> 'TimebarDimensions':
        """Build from the ``ui.timebar`` config section (values in dp)."""
        return cls(
            view_height=dp_to_px(dims.get("viewHeight", 56), density),
            recordbar_height=dp_to_px(dims.get("recordbarHeight", 21), density),
            key_tick_text_size=dp_to_px(dims.get("keyTickTextSize", 10), density),
            big_tick_height=dp_to_px(dims.get("bigTickHeight", 9), density),
            small_tick_height=dp_to_px(dims.get("smallTickHeight", 6), density),
            big_tick_half_width=dp_to_px(dims.get("bigTickHalfWidth", 2), density),
            small_tick_half_width=dp_to_px(dims.get("smallTickHalfWidth", 1), density),
            tick_text_margin=dp_to_px(dims.get("tickTextMargin", 2), density),
            recordbar_text_margin=dp_to_px(dims.get("recordbarTextMargin", 5), density),
            cursor_width=dp_to_px(dims.get("cursorWidth", 13), density),
        )

    @property
    def label_baseline(self) -> int:
        """Distance from the bottom edge to the major label baseline."""
        return self.big_tick_height + self.tick_text_margin

    @property
    def recordbar_bottom(self) -> int:
        """Distance from the bottom edge to the bottom of the recordbar."""
        return self.label_baseline + self.key_tick_text_size + self.recordbar_text_margin

    @property
    def recordbar_top(self) -> int:
        """Distance from the bottom edge to the top of the recordbar."""
        return self.recordbar_bottom + self.recordbar_height
