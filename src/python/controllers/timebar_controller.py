"""Timebar controller for the Qt host."""

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from timebar_manager import TimebarFrame, TimebarManager, TimebarObserver
from zoom_controller import apply_discrete_step

logger = logging.getLogger(__name__)


class _SignalBridge(TimebarObserver):
    """Forwards manager notifications to the controller's Qt signals."""

    def __init__(self, controller: 'TimebarController') -> None:
        self._controller = controller

    def on_move(self, visible_left: int, visible_right: int, cursor: int) -> None:
        self._controller.moved.emit(visible_left, visible_right, cursor)

    def on_move_finished(self, visible_left: int, visible_right: int, cursor: int) -> None:
        self._controller.move_finished.emit(visible_left, visible_right, cursor)

    def on_scaled(self, visible_left: int, visible_right: int, cursor: int) -> None:
        self._controller.scaled.emit(visible_left, visible_right, cursor)

    def on_scale_finished(self, visible_left: int, visible_right: int, cursor: int) -> None:
        self._controller.scale_finished.emit(visible_left, visible_right, cursor)


class TimebarController(QObject):
    """Routes view gestures and zoom buttons to a TimebarManager.

    After every change the controller runs the manager's layout pass, which
    emits the pending scale signals, and pushes the new frame to the view.

    Signal arguments are (visible left, visible right, cursor) in epoch
    milliseconds. They are declared as ``object`` because epoch milliseconds
    do not fit a 32-bit int.
    """

    moved = pyqtSignal(object, object, object)
    move_finished = pyqtSignal(object, object, object)
    scaled = pyqtSignal(object, object, object)
    scale_finished = pyqtSignal(object, object, object)

    def __init__(self, manager: TimebarManager, view, zoom_controls=None) -> None:
        """Initialize TimebarController.

        Args:
            manager: Timeline state and notifications
            view: TimebarWidget that paints frames and emits gestures
            zoom_controls: Optional ZoomControls panel
        """
        super().__init__()
        self.manager = manager
        self.view = view
        self.zoom_controls = zoom_controls
        self._bridge = _SignalBridge(self)
        self.manager.add_observer(self._bridge)

        view.dragged.connect(self.on_dragged)
        view.drag_finished.connect(self.on_drag_finished)
        view.pinched.connect(self.on_pinched)
        view.pinch_finished.connect(self.on_pinch_finished)
        view.resized.connect(self.on_resized)

        if zoom_controls is not None:
            zoom_controls.zoom_in_requested.connect(self.zoom_in)
            zoom_controls.zoom_out_requested.connect(self.zoom_out)
            zoom_controls.cursor_visibility_changed.connect(view.set_cursor_visible)

    def detach(self) -> None:
        """Stop receiving manager notifications."""
        self.manager.remove_observer(self._bridge)

    def refresh(self) -> TimebarFrame:
        """Run the layout pass and hand the frame to the view."""
        frame = self.manager.apply_layout()
        self.view.set_frame(frame)
        self._update_zoom_buttons()
        return frame

    def _update_zoom_buttons(self) -> None:
        if self.zoom_controls is None:
            return
        state, ladder = self.manager.state, self.manager.ladder
        self.zoom_controls.set_zoom_in_enabled(apply_discrete_step(state, ladder, True) is not None)
        self.zoom_controls.set_zoom_out_enabled(apply_discrete_step(state, ladder, False) is not None)

    # View gestures

    def on_dragged(self, dx: float) -> None:
        self.manager.pan(dx)
        self.refresh()

    def on_drag_finished(self) -> None:
        self.manager.pan_finished()

    def on_pinched(self, factor: float) -> None:
        try:
            self.manager.zoom_by_factor(factor)
        except ValueError as e:
            logger.warning("Ignoring scale gesture: %s", e)
            return
        self.refresh()

    def on_pinch_finished(self) -> None:
        self.manager.zoom_gesture_finished()
        self.refresh()

    def on_resized(self, width: int) -> None:
        if width <= 0:
            return
        self.manager.set_viewport_width(width)
        self.refresh()

    # Buttons

    def zoom_in(self) -> None:
        """Zoom in one criterion step."""
        if self.manager.zoom_step(True):
            self.refresh()

    def zoom_out(self) -> None:
        """Zoom out one criterion step."""
        if self.manager.zoom_step(False):
            self.refresh()
