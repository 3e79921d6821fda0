"""Timebar display widget for Textual TUI."""

from textual.widget import Widget
from textual.reactive import reactive
from rich.text import Text

from config_manager import config
from timebar_manager import TimebarFrame
from tui.timebar_render import render_timebar, RECORD_CHAR, CURSOR_CHAR


class TimebarWidget(Widget):
    """Text-mode timebar: cursor marker, recordbar, tick ruler and labels.

    The widget only draws; the app owns the TimebarManager and pushes a new
    frame after every change.
    """

    DEFAULT_CSS = """
    TimebarWidget {
        height: 4;
    }
    """

    cursor_visible: reactive[bool] = reactive(True)

    def __init__(
        self,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._frame: TimebarFrame | None = None

    def set_frame(self, frame: TimebarFrame) -> None:
        """Show a new frame."""
        self._frame = frame
        self.refresh()

    def render(self) -> Text:
        width = self.size.width
        if self._frame is None or width <= 0:
            return Text("")

        rows = render_timebar(self._frame, width, self.cursor_visible)
        text = Text()
        for i, row in enumerate(rows):
            line = Text(row)
            line.highlight_words([RECORD_CHAR], style=config.get_color("recordbar"))
            line.highlight_words([CURSOR_CHAR], style=config.get_color("cursor"))
            text.append_text(line)
            if i < len(rows) - 1:
                text.append("\n")
        return text
