"""Demo window for the timebar: cursor time label, timebar, zoom controls."""

import logging
import sys
from datetime import tzinfo

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication, QLabel, QMainWindow, QVBoxLayout, QWidget

from config_manager import config
from controllers import TimebarController
from logging_config import setup_logging
from time_utils import format_instant
from timebar_manager import TimebarManager
from timebar_setup import build_arg_parser, create_timebar_manager
from ui.timebar_widget import TimebarWidget
from ui.zoom_controls import ZoomControls

logger = logging.getLogger(__name__)


class TimebarWindow(QMainWindow):
    """Main window showing the cursor time above the timebar."""

    def __init__(self, manager: TimebarManager, tz: tzinfo | None = None) -> None:
        super().__init__()
        self.tz = tz
        self._time_format = config.get_nested_string("ui.cursorTimeFormat", "%Y-%m-%d %H:%M:%S")
        self.setWindowTitle(config.get_nested_string("ui.windowTitle", "Timebar"))
        self.resize(
            config.get_ui_setting("window", "width", 720),
            config.get_ui_setting("window", "height", 180)
        )

        central = QWidget()
        layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        self.time_label = QLabel()
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.time_label)

        self.timebar = TimebarWidget()
        layout.addWidget(self.timebar)

        self.zoom_controls = ZoomControls()
        layout.addWidget(self.zoom_controls)

        self.controller = TimebarController(manager, self.timebar, self.zoom_controls)
        self.controller.moved.connect(self._on_cursor_changed)
        self.controller.scaled.connect(self._on_cursor_changed)
        self.controller.move_finished.connect(self._log_event("move finished"))
        self.controller.scale_finished.connect(self._log_event("scale finished"))

        self.show_cursor_time(manager.get_cursor_time())
        self.controller.refresh()

    def show_cursor_time(self, cursor: int) -> None:
        text = format_instant(cursor, self._time_format, self.tz)
        self.time_label.setText(text or "")

    def _on_cursor_changed(self, visible_left: int, visible_right: int, cursor: int) -> None:
        self.show_cursor_time(cursor)

    @staticmethod
    def _log_event(name: str):
        def handler(visible_left: int, visible_right: int, cursor: int) -> None:
            logger.debug("Timebar %s: visible %d..%d, cursor %d", name, visible_left, visible_right, cursor)
        return handler


def main():
    """Entry point for the Qt timebar demo."""
    parser = build_arg_parser('Scalable timebar demo (Qt)')
    args = parser.parse_args()

    setup_logging(level="DEBUG" if args.debug else None)

    app = QApplication(sys.argv)
    width = config.get_ui_setting("window", "width", 720)
    try:
        manager = create_timebar_manager(width, days=args.days, ranges_path=args.ranges)
    except (OSError, ValueError) as e:
        logger.error("Could not set up the timebar: %s", e)
        print(f"Could not set up the timebar: {e}", file=sys.stderr)
        sys.exit(1)

    window = TimebarWindow(manager)
    window.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
