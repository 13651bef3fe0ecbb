"""
MainWindow - Main application window

Pattern: QMainWindow with the mask canvas stacked over a background image
"""

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QPixmap
from PyQt6.QtWidgets import (
    QGridLayout, QLabel, QMainWindow, QStatusBar, QVBoxLayout, QWidget
)

from ..config import Config, EditorOptions
from ..services.mask_export import mask_coverage
from .editor_toolbar import EditorToolbar
from .mask_editor_canvas import MaskEditorCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window

    Features:
    - Background image with the mask canvas layered on top
    - Editor toolbar bound to the canvas options
    - Status bar with mask coverage
    - Brush options persisted between sessions

    Layout:
        +------------------------------------------+
        |  EditorToolbar                           |
        +------------------------------------------+
        |  Background image                        |
        |    + MaskEditorCanvas (same cell)        |
        +------------------------------------------+
        |  StatusBar                               |
        +------------------------------------------+
    """

    def __init__(self, image_path: Optional[Path] = None,
                 options: Optional[EditorOptions] = None, parent=None):
        super().__init__(parent)

        self._options = options or Config.load_editor_options()
        self._image_path = image_path

        self._setup_window()
        self._create_widgets()
        self._create_layout()
        self._connect_signals()

        if image_path is not None:
            self.load_background(image_path)

    def _setup_window(self):
        """Configure window properties"""
        self.setWindowTitle(f"{Config.APP_NAME} {Config.APP_VERSION}")
        self.setGeometry(100, 100, Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

    def _create_widgets(self):
        """Create UI widgets"""
        self._toolbar = EditorToolbar(self._options)

        self._background = QLabel()
        self._background.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._background.setScaledContents(True)
        self._background.setStyleSheet("background: #1e1e1e;")

        self._canvas = MaskEditorCanvas(self._options)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready")

    def _create_layout(self):
        """Create window layout"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.addWidget(self._toolbar)

        # Canvas shares the background's grid cell so it overlays it exactly
        stage = QWidget()
        stage_layout = QGridLayout(stage)
        stage_layout.setContentsMargins(0, 0, 0, 0)
        stage_layout.addWidget(self._background, 0, 0)
        stage_layout.addWidget(self._canvas, 0, 0)
        main_layout.addWidget(stage, 1)

    def _connect_signals(self):
        """Connect widget signals"""
        self._toolbar.brush_radius_changed.connect(self._on_brush_radius_changed)
        self._toolbar.lazy_radius_changed.connect(self._on_lazy_radius_changed)
        self._toolbar.friction_changed.connect(self._on_friction_changed)
        self._toolbar.smoothing_toggled.connect(self._on_smoothing_toggled)
        self._toolbar.clear_clicked.connect(self._canvas.clear)

        self._canvas.stroke_committed.connect(self._update_coverage)
        self._canvas.mask_cleared.connect(self._update_coverage)
        self._canvas.surfaces_resized.connect(self._on_surfaces_resized)
        self._canvas.surface_status_changed.connect(self._on_surface_status_changed)

    # ==================== Properties ====================

    @property
    def canvas(self) -> MaskEditorCanvas:
        return self._canvas

    @property
    def toolbar(self) -> EditorToolbar:
        return self._toolbar

    # ==================== Background ====================

    def load_background(self, image_path: Path) -> bool:
        """
        Show an image behind the canvas.

        Returns:
            True if the image loaded
        """
        pixmap = QPixmap(str(image_path))
        if pixmap.isNull():
            logger.warning(f"Could not load background image: {image_path}")
            self._status_bar.showMessage(f"Could not load {Path(image_path).name}")
            return False

        self._background.setPixmap(pixmap)
        self._image_path = Path(image_path)
        self._status_bar.showMessage(f"Loaded {self._image_path.name} ({pixmap.width()}x{pixmap.height()})")
        logger.info(f"Background image loaded: {image_path}")
        return True

    # ==================== Toolbar Handlers ====================

    def _on_brush_radius_changed(self, value: int):
        self._canvas.brush_radius = value

    def _on_lazy_radius_changed(self, value: int):
        self._canvas.lazy_radius = value

    def _on_friction_changed(self, value: int):
        self._canvas.friction = value

    def _on_smoothing_toggled(self, enabled: bool):
        self._canvas.enabled = enabled

    # ==================== Canvas Handlers ====================

    def _update_coverage(self):
        coverage = mask_coverage(self._canvas.mask_image(), logical=True)
        self._status_bar.showMessage(f"Mask coverage: {coverage * 100:.1f}%")

    def _on_surfaces_resized(self, width: int, height: int):
        logger.debug(f"Canvas surfaces now {width}x{height}")

    def _on_surface_status_changed(self, role: str, available: bool):
        if not available:
            self._status_bar.showMessage(f"Drawing surface '{role}' unavailable")

    # ==================== Events ====================

    def keyPressEvent(self, event):
        """Handle keyboard shortcuts"""
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self._canvas.clear()
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent):
        """Handle window close"""
        self._canvas.stop()
        Config.save_editor_options(self._canvas.options)
        event.accept()


__all__ = ['MainWindow']
