"""Tests for the terminal rendering of timebar frames."""
import pytest

from coordinate_mapper import Tick
from timebar_manager import RecordSpan, TimebarFrame
from tui.timebar_render import (
    CURSOR_CHAR,
    EMPTY_RECORD_CHAR,
    MAJOR_TICK_CHAR,
    MINOR_TICK_CHAR,
    RECORD_CHAR,
    format_status,
    render_timebar,
)


def make_frame(manager, ticks=(), spans=(), cursor_x=10.0):
    base = manager.frame()
    return TimebarFrame(
        state=base.state,
        criterion=base.criterion,
        visible_bounds=base.visible_bounds,
        left_edge=base.left_edge,
        cursor_x=cursor_x,
        ticks=tuple(ticks),
        record_spans=tuple(spans),
    )


class TestRenderTimebar:
    def test_four_rows_of_requested_width(self, manager):
        rows = render_timebar(make_frame(manager), 20)
        assert len(rows) == 4
        assert all(len(row) == 20 for row in rows)

    def test_zero_width(self, manager):
        assert render_timebar(make_frame(manager), 0) == []

    def test_cursor_marker(self, manager):
        cursor_row = render_timebar(make_frame(manager, cursor_x=10.0), 20)[0]
        assert cursor_row.index(CURSOR_CHAR) == 10
        hidden = render_timebar(make_frame(manager), 20, cursor_visible=False)[0]
        assert CURSOR_CHAR not in hidden

    def test_record_spans_clipped(self, manager):
        spans = [RecordSpan(0, -5.0, 3.2), RecordSpan(1, 15.5, 40.0)]
        row = render_timebar(make_frame(manager, spans=spans), 20)[1]
        assert row == RECORD_CHAR * 4 + EMPTY_RECORD_CHAR * 11 + RECORD_CHAR * 5

    def test_ruler_marks(self, manager):
        ticks = [Tick(0, 2.0, False), Tick(1, 5.7, True, "09:00"), Tick(2, 30.0, True, "10:00")]
        ruler = render_timebar(make_frame(manager, ticks=ticks), 20)[2]
        assert ruler[2] == MINOR_TICK_CHAR
        assert ruler[5] == MAJOR_TICK_CHAR
        assert ruler.count(MAJOR_TICK_CHAR) == 1

    def test_labels_centered_and_not_overlapping(self, manager):
        ticks = [Tick(0, 5.0, True, "09:00"), Tick(1, 7.0, True, "10:00"), Tick(2, 14.0, True, "11:00")]
        labels = render_timebar(make_frame(manager, ticks=ticks), 20)[3]
        assert labels[3:8] == "09:00"
        assert "10:00" not in labels
        assert labels[12:17] == "11:00"

    def test_renders_real_frame(self, manager):
        frame = manager.apply_layout()
        rows = render_timebar(frame, frame.state.viewport_width)
        assert rows[0].index(CURSOR_CHAR) == 500
        assert MAJOR_TICK_CHAR in rows[2]
        assert "12:00" in rows[3]


@pytest.mark.parametrize("index,expected", [(2, "6h per screen"), (4, "6d per screen")])
def test_format_status(manager, index, expected):
    manager.reset_to_standard_width(index)
    status = format_status("2024-03-06 12:00:00", manager.frame())
    assert status.startswith("2024-03-06 12:00:00")
    assert f"criterion {index}" in status
    assert expected in status
