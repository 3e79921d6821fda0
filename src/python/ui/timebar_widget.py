"""
Qt view for the timebar.

The widget is passive: it paints the last TimebarFrame it was given and
turns mouse, wheel and pinch input into gesture signals. The controller
feeds gestures to the TimebarManager and pushes the resulting frame back.

Layout, from the bottom edge up: tick marks, major tick labels, then the
recordbar. The cursor marker sits at the horizontal centre.
"""

import logging

from PyQt6.QtCore import QEvent, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QPainter, QPolygonF
from PyQt6.QtWidgets import QPinchGesture, QSizePolicy, QWidget

from config_manager import config
from display_metrics import TimebarDimensions
from timebar_manager import TimebarFrame

logger = logging.getLogger(__name__)


class TimebarWidget(QWidget):
    """Paints ticks, labels, record spans and the cursor for one frame.

    Signals:
        dragged: Horizontal drag delta in pixels since the last move event
        drag_finished: Left button released after a drag
        pinched: Scale factor from a pinch or wheel notch
        pinch_finished: End of a pinch gesture or a wheel notch
        resized: New widget width in pixels
    """

    dragged = pyqtSignal(float)
    drag_finished = pyqtSignal()
    pinched = pyqtSignal(float)
    pinch_finished = pyqtSignal()
    resized = pyqtSignal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._frame: TimebarFrame | None = None
        self._cursor_visible = True
        self._last_drag_x: float | None = None
        self._wheel_factor = float(config.get_timebar_defaults().get("wheelZoomFactor", 1.15))
        self.dims = TimebarDimensions.from_config(config.get_timebar_dimensions())

        self.setMinimumHeight(self.dims.view_height)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setMouseTracking(False)
        self.grabGesture(Qt.GestureType.PinchGesture)

        self._colors = {
            key: QColor(config.get_qt_color(key))
            for key in ("background", "tick", "tickText", "recordbar", "recordbarBackground", "cursor")
        }
        self._label_font = QFont(config.get_font("primary"))
        self._label_font.setPixelSize(self.dims.key_tick_text_size)

    # Public API

    def set_frame(self, frame: TimebarFrame) -> None:
        """Show a new frame and schedule a repaint."""
        self._frame = frame
        self.update()

    def frame(self) -> TimebarFrame | None:
        return self._frame

    def set_cursor_visible(self, visible: bool) -> None:
        """Show or hide the centre cursor marker."""
        self._cursor_visible = visible
        self.update()

    def is_cursor_visible(self) -> bool:
        return self._cursor_visible

    # Painting

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), self._colors["background"])
            if self._frame is None:
                return
            self._paint_recordbar(painter)
            self._paint_ticks(painter)
            if self._cursor_visible:
                self._paint_cursor(painter)
        finally:
            painter.end()

    def _paint_recordbar(self, painter: QPainter) -> None:
        bottom = self.height() - self.dims.recordbar_bottom
        top = self.height() - self.dims.recordbar_top
        height = bottom - top
        width = self.width()

        painter.fillRect(QRectF(0, top, width, height), self._colors["recordbarBackground"])
        for span in self._frame.record_spans:
            x1 = max(span.x1, 0.0)
            x2 = min(span.x2, float(width))
            if x2 >= x1:
                painter.fillRect(QRectF(x1, top, max(x2 - x1, 1.0), height), self._colors["recordbar"])

    def _paint_ticks(self, painter: QPainter) -> None:
        height = self.height()
        painter.setFont(self._label_font)
        metrics = painter.fontMetrics()
        label_y = height - self.dims.label_baseline

        for tick in self._frame.ticks:
            if tick.major:
                half, tick_height = self.dims.big_tick_half_width, self.dims.big_tick_height
            else:
                half, tick_height = self.dims.small_tick_half_width, self.dims.small_tick_height
            painter.fillRect(
                QRectF(tick.x - half, height - tick_height, 2 * half, tick_height),
                self._colors["tick"]
            )
            if tick.label:
                painter.setPen(self._colors["tickText"])
                text_width = metrics.horizontalAdvance(tick.label)
                painter.drawText(QPointF(tick.x - text_width / 2, label_y), tick.label)

    def _paint_cursor(self, painter: QPainter) -> None:
        x = self._frame.cursor_x
        half = self.dims.cursor_width / 2
        color = self._colors["cursor"]

        painter.fillRect(QRectF(x - 1, 0, 2, self.height()), color)
        head = QPolygonF([QPointF(x - half, 0), QPointF(x + half, 0), QPointF(x, half)])
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(color)
        painter.drawPolygon(head)

    # Input

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._last_drag_x = event.position().x()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self._last_drag_x is None:
            super().mouseMoveEvent(event)
            return
        x = event.position().x()
        dx = x - self._last_drag_x
        self._last_drag_x = x
        if dx:
            self.dragged.emit(dx)
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self._last_drag_x is not None:
            self._last_drag_x = None
            self.drag_finished.emit()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event) -> None:
        delta = event.angleDelta().y()
        if delta == 0:
            super().wheelEvent(event)
            return
        factor = self._wheel_factor if delta > 0 else 1.0 / self._wheel_factor
        self.pinched.emit(factor)
        self.pinch_finished.emit()
        event.accept()

    def event(self, event) -> bool:
        if event.type() == QEvent.Type.Gesture:
            pinch = event.gesture(Qt.GestureType.PinchGesture)
            if isinstance(pinch, QPinchGesture):
                self._handle_pinch(pinch)
                return True
        return super().event(event)

    def _handle_pinch(self, pinch: QPinchGesture) -> None:
        if pinch.changeFlags() & QPinchGesture.ChangeFlag.ScaleFactorChanged:
            factor = pinch.scaleFactor()
            if factor > 0:
                self.pinched.emit(factor)
        if pinch.state() == Qt.GestureState.GestureFinished:
            logger.debug("Pinch gesture finished")
            self.pinch_finished.emit()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        if event.size().width() != event.oldSize().width():
            self.resized.emit(event.size().width())
