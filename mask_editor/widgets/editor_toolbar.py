"""
Editor Toolbar Widget

Single-row toolbar for the mask editor with:
- Brush radius, lazy radius and friction sliders
- Smoothing toggle
- Clear button
"""

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox, QFrame, QHBoxLayout, QLabel, QPushButton, QSlider, QWidget
)

from ..config import EditorOptions


class EditorToolbar(QWidget):
    """Single-row toolbar for the lazy brush options."""

    # Signals
    brush_radius_changed = pyqtSignal(int)
    lazy_radius_changed = pyqtSignal(int)
    friction_changed = pyqtSignal(int)  # 0-100
    smoothing_toggled = pyqtSignal(bool)
    clear_clicked = pyqtSignal()

    BRUSH_RADIUS_RANGE = (1, 100)
    LAZY_RADIUS_RANGE = (1, 100)
    FRICTION_RANGE = (0, 100)

    def __init__(self, options: Optional[EditorOptions] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._setup_ui()
        self._connect_signals()
        self.set_options(options or EditorOptions())

    def _setup_ui(self):
        """Build the single-row toolbar UI."""
        self.setFixedHeight(40)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self._btn_style = """
            QPushButton { background: #2d2d2d; border: 1px solid #444; border-radius: 3px;
                          color: #e0e0e0; padding: 4px 10px; }
            QPushButton:hover { background: #3a3a3a; border-color: #555; }
            QPushButton:pressed { background: #f44336; border-color: #f44336; }
        """

        self._brush_slider, self._brush_label = self._add_slider_section(
            layout, "Brush", self.BRUSH_RADIUS_RANGE, "Brush radius in pixels"
        )
        layout.addWidget(self._create_separator())

        self._lazy_slider, self._lazy_label = self._add_slider_section(
            layout, "Lazy", self.LAZY_RADIUS_RANGE, "Lazy radius: how far the pointer leads the brush"
        )
        layout.addWidget(self._create_separator())

        self._friction_slider, self._friction_label = self._add_slider_section(
            layout, "Friction", self.FRICTION_RANGE, "Friction (0-100): brush lag while drawing"
        )
        layout.addWidget(self._create_separator())

        self._smoothing_check = QCheckBox("Smoothing")
        self._smoothing_check.setStyleSheet("color: #e0e0e0;")
        self._smoothing_check.setToolTip("Lazy brush smoothing (off = brush follows pointer)")
        layout.addWidget(self._smoothing_check)

        layout.addWidget(self._create_separator())

        self._clear_btn = QPushButton("Clear")
        self._clear_btn.setToolTip("Clear the mask")
        self._clear_btn.setStyleSheet(self._btn_style)
        layout.addWidget(self._clear_btn)

        layout.addStretch()

    def _add_slider_section(self, layout: QHBoxLayout, title: str, value_range, tooltip: str):
        """Add a titled slider with a value label."""
        title_label = QLabel(title)
        title_label.setStyleSheet("color: #aaa; font-size: 11px;")
        layout.addWidget(title_label)

        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(*value_range)
        slider.setFixedWidth(80)
        slider.setFixedHeight(20)
        slider.setToolTip(tooltip)
        layout.addWidget(slider)

        value_label = QLabel()
        value_label.setFixedWidth(28)
        value_label.setStyleSheet("color: #e0e0e0; font-size: 11px;")
        layout.addWidget(value_label)

        return slider, value_label

    def _create_separator(self) -> QFrame:
        """Create a vertical separator."""
        sep = QFrame()
        sep.setFrameShape(QFrame.Shape.VLine)
        sep.setStyleSheet("background: #444; max-width: 1px;")
        return sep

    def _connect_signals(self):
        """Connect internal signals."""
        self._brush_slider.valueChanged.connect(self._on_brush_radius_changed)
        self._lazy_slider.valueChanged.connect(self._on_lazy_radius_changed)
        self._friction_slider.valueChanged.connect(self._on_friction_changed)
        self._smoothing_check.toggled.connect(self._on_smoothing_toggled)
        self._clear_btn.clicked.connect(self.clear_clicked.emit)

    def _on_brush_radius_changed(self, value: int):
        self._brush_label.setText(str(value))
        self.brush_radius_changed.emit(value)

    def _on_lazy_radius_changed(self, value: int):
        self._lazy_label.setText(str(value))
        self.lazy_radius_changed.emit(value)

    def _on_friction_changed(self, value: int):
        self._friction_label.setText(str(value))
        self.friction_changed.emit(value)

    def _on_smoothing_toggled(self, checked: bool):
        # Lazy radius and friction mean nothing without smoothing
        self._lazy_slider.setEnabled(checked)
        self._friction_slider.setEnabled(checked)
        self.smoothing_toggled.emit(checked)

    # ==================== PUBLIC API ====================

    def set_options(self, options: EditorOptions):
        """Show the given options without emitting change signals."""
        widgets = (self._brush_slider, self._lazy_slider, self._friction_slider, self._smoothing_check)
        for widget in widgets:
            widget.blockSignals(True)
        try:
            self._brush_slider.setValue(int(round(options.brush_radius)))
            self._lazy_slider.setValue(int(round(options.lazy_radius)))
            self._friction_slider.setValue(int(round(options.friction)))
            self._smoothing_check.setChecked(options.enabled)
        finally:
            for widget in widgets:
                widget.blockSignals(False)

        self._brush_label.setText(str(self._brush_slider.value()))
        self._lazy_label.setText(str(self._lazy_slider.value()))
        self._friction_label.setText(str(self._friction_slider.value()))
        self._lazy_slider.setEnabled(options.enabled)
        self._friction_slider.setEnabled(options.enabled)

    @property
    def brush_radius(self) -> int:
        return self._brush_slider.value()

    @property
    def lazy_radius(self) -> int:
        return self._lazy_slider.value()

    @property
    def friction(self) -> int:
        return self._friction_slider.value()

    @property
    def smoothing_enabled(self) -> bool:
        return self._smoothing_check.isChecked()


__all__ = ['EditorToolbar']
