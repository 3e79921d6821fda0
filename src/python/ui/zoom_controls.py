"""Zoom controls for the timebar.

A horizontal panel with Zoom In and Zoom Out buttons and a checkbox that
toggles the cursor marker. The panel only emits signals; the controller
decides what a press does.
"""

from PyQt6.QtWidgets import QCheckBox, QHBoxLayout, QPushButton, QWidget
from PyQt6.QtCore import pyqtSignal
import logging
from config_manager import config

logger = logging.getLogger(__name__)


class ZoomControls(QWidget):
    """Zoom buttons for the timebar.

    Signals:
        zoom_in_requested: Emitted when Zoom In is clicked
        zoom_out_requested: Emitted when Zoom Out is clicked
        cursor_visibility_changed: Emitted with the checkbox state
    """

    zoom_in_requested = pyqtSignal()
    zoom_out_requested = pyqtSignal()
    cursor_visibility_changed = pyqtSignal(bool)

    def __init__(self, parent: QWidget | None = None) -> None:
        """Initialize the zoom controls.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self._init_ui()

    def _init_ui(self) -> None:
        """Initialize the user interface."""
        layout = QHBoxLayout()
        self.setLayout(layout)

        self.zoom_in_button = QPushButton(config.get_string("buttons", "zoomIn"))
        self.zoom_in_button.clicked.connect(self._on_zoom_in_clicked)
        layout.addWidget(self.zoom_in_button)

        self.zoom_out_button = QPushButton(config.get_string("buttons", "zoomOut"))
        self.zoom_out_button.clicked.connect(self._on_zoom_out_clicked)
        layout.addWidget(self.zoom_out_button)

        layout.addStretch()

        self.cursor_checkbox = QCheckBox(config.get_string("buttons", "showCursor"))
        self.cursor_checkbox.setChecked(True)
        self.cursor_checkbox.toggled.connect(self.cursor_visibility_changed.emit)
        layout.addWidget(self.cursor_checkbox)

    # Signal handlers

    def _on_zoom_in_clicked(self) -> None:
        logger.debug("Zoom in clicked")
        self.zoom_in_requested.emit()

    def _on_zoom_out_clicked(self) -> None:
        logger.debug("Zoom out clicked")
        self.zoom_out_requested.emit()

    # Public API methods

    def set_zoom_in_enabled(self, enabled: bool) -> None:
        """Enable or disable the Zoom In button.

        Args:
            enabled: Whether the button should be enabled
        """
        self.zoom_in_button.setEnabled(enabled)

    def set_zoom_out_enabled(self, enabled: bool) -> None:
        """Enable or disable the Zoom Out button.

        Args:
            enabled: Whether the button should be enabled
        """
        self.zoom_out_button.setEnabled(enabled)
