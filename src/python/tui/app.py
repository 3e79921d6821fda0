"""TUI Application - Textual-based terminal timebar.

Shows the same timebar as the Qt demo, one character column per pixel:
- Left/Right arrows pan the timeline
- +/- step the zoom between criteria
- [ and ] zoom continuously by the wheel factor
- c toggles the cursor marker
"""

import logging
import shutil
import sys
from datetime import tzinfo

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from logging_config import setup_logging
from config_manager import config
from time_utils import format_instant
from timebar_manager import TimebarManager, TimebarObserver
from timebar_setup import build_arg_parser, create_timebar_manager
from tui.timebar_render import format_status
from tui.widgets import TimebarWidget

logger = logging.getLogger(__name__)


class _AppObserver(TimebarObserver):
    """Logs manager notifications for the terminal host."""

    def on_move(self, visible_left: int, visible_right: int, cursor: int) -> None:
        logger.debug("Move: visible %d..%d, cursor %d", visible_left, visible_right, cursor)

    def on_move_finished(self, visible_left: int, visible_right: int, cursor: int) -> None:
        logger.debug("Move finished: cursor %d", cursor)

    def on_scaled(self, visible_left: int, visible_right: int, cursor: int) -> None:
        logger.debug("Scaled: visible %d..%d", visible_left, visible_right)

    def on_scale_finished(self, visible_left: int, visible_right: int, cursor: int) -> None:
        logger.debug("Scale finished: visible %d..%d", visible_left, visible_right)


class TimebarApp(App):
    """Main Textual TUI application for the timebar."""

    CSS = """
    #status {
        height: 1;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("left", "pan_left", "Earlier"),
        Binding("right", "pan_right", "Later"),
        Binding("plus", "zoom_in", "Zoom In"),
        Binding("minus", "zoom_out", "Zoom Out"),
        Binding("left_square_bracket", "shrink", "Narrower", show=False),
        Binding("right_square_bracket", "stretch", "Wider", show=False),
        Binding("c", "toggle_cursor", "Cursor"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, manager: TimebarManager, tz: tzinfo | None = None):
        super().__init__()
        self.manager = manager
        self.tz = tz
        self.title = config.get_nested_string("ui.tuiTitle", "Timebar")
        defaults = config.get_timebar_defaults()
        self._pan_step = defaults.get("panStepColumns", 4)
        self._zoom_factor = float(defaults.get("wheelZoomFactor", 1.15))
        self._time_format = config.get_nested_string("ui.cursorTimeFormat", "%Y-%m-%d %H:%M:%S")
        self._observer = _AppObserver()
        self.manager.add_observer(self._observer)

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        yield Static(id="status")
        yield TimebarWidget(id="timebar")

    def on_mount(self) -> None:
        if self.size.width > 0:
            self.manager.set_viewport_width(self.size.width)
        self._refresh_timebar()

    def on_resize(self, event: events.Resize) -> None:
        if event.size.width > 0:
            self.manager.set_viewport_width(event.size.width)
            self._refresh_timebar()

    def _refresh_timebar(self) -> None:
        """Run the layout pass and redraw the status line and timebar."""
        frame = self.manager.apply_layout()
        cursor_text = format_instant(frame.state.cursor, self._time_format, self.tz)
        self.query_one("#status", Static).update(format_status(cursor_text, frame))
        self.query_one("#timebar", TimebarWidget).set_frame(frame)

    def _pan(self, dx: float) -> None:
        self.manager.pan(dx)
        self.manager.pan_finished()
        self._refresh_timebar()

    def _scale(self, factor: float) -> None:
        self.manager.zoom_by_factor(factor)
        self.manager.zoom_gesture_finished()
        self._refresh_timebar()

    # Actions

    def action_pan_left(self) -> None:
        """Show earlier time (the timeline moves right)."""
        self._pan(self._pan_step)

    def action_pan_right(self) -> None:
        """Show later time (the timeline moves left)."""
        self._pan(-self._pan_step)

    def action_zoom_in(self) -> None:
        if self.manager.zoom_step(True):
            self._refresh_timebar()
        else:
            self.bell()

    def action_zoom_out(self) -> None:
        if self.manager.zoom_step(False):
            self._refresh_timebar()
        else:
            self.bell()

    def action_stretch(self) -> None:
        self._scale(self._zoom_factor)

    def action_shrink(self) -> None:
        self._scale(1.0 / self._zoom_factor)

    def action_toggle_cursor(self) -> None:
        widget = self.query_one("#timebar", TimebarWidget)
        widget.cursor_visible = not widget.cursor_visible


def main():
    """Entry point for TUI application."""
    parser = build_arg_parser('Scalable timebar - terminal interface')
    args = parser.parse_args()

    # Initialize centralized logging (suppresses console noise, logs to file)
    setup_logging(level="DEBUG" if args.debug else None)

    width = shutil.get_terminal_size().columns
    try:
        manager = create_timebar_manager(width, days=args.days, ranges_path=args.ranges)
    except (OSError, ValueError) as e:
        print(f"Could not set up the timebar: {e}", file=sys.stderr)
        sys.exit(1)

    app = TimebarApp(manager)
    app.run()


if __name__ == "__main__":
    main()
