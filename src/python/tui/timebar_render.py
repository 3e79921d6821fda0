"""ASCII timebar renderer for TUI display.

One character column stands for one timebar pixel, so the manager's
viewport width is the number of columns.
"""

import math

from timebar_manager import TimebarFrame

RECORD_CHAR = "█"
EMPTY_RECORD_CHAR = "░"
CURSOR_CHAR = "▼"
MAJOR_TICK_CHAR = "┃"
MINOR_TICK_CHAR = "╵"
RULER_CHAR = "─"


def _column(x: float) -> int:
    return int(math.floor(x))


def render_timebar(frame: TimebarFrame, width: int, cursor_visible: bool = True) -> list[str]:
    """Render a frame as text rows.

    Args:
        frame: Frame from TimebarManager.apply_layout()
        width: Number of character columns
        cursor_visible: Whether to draw the cursor marker

    Returns:
        Rows from top to bottom: cursor marker, recordbar, tick ruler, labels
    """
    if width <= 0:
        return []
    return [
        _build_cursor_row(frame, width, cursor_visible),
        _build_recordbar_row(frame, width),
        _build_ruler_row(frame, width),
        _build_label_row(frame, width),
    ]


def _build_cursor_row(frame: TimebarFrame, width: int, cursor_visible: bool) -> str:
    row = [" "] * width
    col = _column(frame.cursor_x)
    if cursor_visible and 0 <= col < width:
        row[col] = CURSOR_CHAR
    return "".join(row)


def _build_recordbar_row(frame: TimebarFrame, width: int) -> str:
    row = [EMPTY_RECORD_CHAR] * width
    for span in frame.record_spans:
        if span.x2 < 0 or span.x1 >= width:
            continue
        first = max(_column(span.x1), 0)
        last = min(_column(span.x2), width - 1)
        for col in range(first, last + 1):
            row[col] = RECORD_CHAR
    return "".join(row)


def _build_ruler_row(frame: TimebarFrame, width: int) -> str:
    row = [RULER_CHAR] * width
    # Minor ticks first so a major tick in the same column wins
    for tick in sorted(frame.ticks, key=lambda t: t.major):
        col = _column(tick.x)
        if 0 <= col < width:
            row[col] = MAJOR_TICK_CHAR if tick.major else MINOR_TICK_CHAR
    return "".join(row)


def _build_label_row(frame: TimebarFrame, width: int) -> str:
    """Centre each major label under its tick, dropping labels that would overlap."""
    row = [" "] * width
    next_free = 0
    for tick in frame.ticks:
        if not tick.label:
            continue
        start = _column(tick.x) - len(tick.label) // 2
        end = start + len(tick.label)
        if start < next_free or start < 0 or end > width:
            continue
        row[start:end] = tick.label
        next_free = end + 1
    return "".join(row)


def format_status(cursor_text: str | None, frame: TimebarFrame) -> str:
    """One-line status: cursor time and the active criterion's visible span."""
    span_hours = frame.criterion.visible_span_seconds / 3600
    span = f"{span_hours:g}h" if span_hours < 48 else f"{span_hours / 24:g}d"
    return f"{cursor_text or '--'}  |  criterion {int(frame.criterion.level)} ({span} per screen)"
