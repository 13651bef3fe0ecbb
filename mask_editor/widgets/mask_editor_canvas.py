"""
MaskEditorCanvas - Freehand mask painting canvas with a lazy brush

The canvas stacks three transparent layers over whatever the host places
behind it:
- Persistent mask (finished strokes, exposed through mask_image())
- Transient stroke (the stroke being drawn)
- Interface (brush disc, pointer and catenary guide)

Pointer events only update the input tracker; a frame timer drives the
lazy brush, stroke building and layer redraws.
"""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, Optional

from PyQt6.QtCore import QEvent, QPoint, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPainter
from PyQt6.QtWidgets import QWidget

from ..config import Config, EditorOptions
from ..core.geometry import Point
from ..core.lazy_brush import LazyBrush
from ..utils.coordinate_utils import CoordinateConverter
from .mask_editor.guide_renderer import GuideCurveRenderer
from .mask_editor.pointer_input import PointerInputTracker, QtPointerAdapter
from .mask_editor.render_loop import FrameScheduler, RenderLoop
from .mask_editor.stroke_rasterizer import StrokeRasterizer
from .mask_editor.surface_manager import SurfaceManager, SurfaceRole

logger = logging.getLogger(__name__)


class MaskEditorCanvas(QWidget):
    """
    Transparent mask painting canvas.

    Features:
    - Lazy brush smoothing with a catenary guide
    - Mouse, touch and tablet input
    - Device-pixel-ratio aware surfaces with capped resolution
    - Debounced resize that keeps the mask
    - Clear on request or on clear_signal change

    Usage:
        canvas = MaskEditorCanvas(EditorOptions(brush_radius=20))
        with canvas.running():
            ...
        mask = canvas.mask_image()
    """

    # Signals
    stroke_committed = pyqtSignal()
    mask_cleared = pyqtSignal()
    surfaces_resized = pyqtSignal(int, int)  # logical width, height
    surface_status_changed = pyqtSignal(str, bool)  # role, available

    LAYER_ORDER = (SurfaceRole.PERSISTENT, SurfaceRole.TRANSIENT, SurfaceRole.INTERFACE)

    def __init__(self, options: Optional[EditorOptions] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._options = options or EditorOptions()

        width, height = Config.DEFAULT_CANVAS_WIDTH, Config.DEFAULT_CANVAS_HEIGHT
        center = Point(width / 2, height / 2)

        # Input
        self._coord = CoordinateConverter(self._global_origin)
        self._tracker = PointerInputTracker(self._coord, initial_position=center)
        self._input = QtPointerAdapter(self._tracker)

        # Brush and layers
        self._brush = LazyBrush(
            radius=self._options.lazy_radius,
            enabled=self._options.enabled,
            initial_point=center
        )
        self._surfaces = SurfaceManager(
            width, height,
            device_pixel_ratio=self.devicePixelRatioF(),
            clear_on_resize=self._options.clear_on_resize,
            parent=self
        )
        self._rasterizer = StrokeRasterizer()
        self._guide = GuideCurveRenderer()

        # Frame loop
        self._loop = RenderLoop(
            self._brush,
            self._tracker,
            self._surfaces,
            self._options,
            rasterizer=self._rasterizer,
            guide=self._guide,
            on_frame=self.update,
            on_stroke_committed=self.stroke_committed.emit,
            on_surface_status=self._on_surface_status
        )
        self._scheduler = FrameScheduler(self._loop.tick, parent=self)

        self._surfaces.resized.connect(self._on_surfaces_resized)

        self._setup_widget()

    def _setup_widget(self):
        """Configure the widget for transparent overlay drawing."""
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TabletTracking, True)
        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.BlankCursor)
        self.setStyleSheet("background: transparent; border: none;")

    def _global_origin(self) -> QPointF:
        return QPointF(self.mapToGlobal(QPoint(0, 0)))

    # ==================== Components ====================

    @property
    def tracker(self) -> PointerInputTracker:
        return self._tracker

    @property
    def brush(self) -> LazyBrush:
        return self._brush

    @property
    def surfaces(self) -> SurfaceManager:
        return self._surfaces

    @property
    def render_loop(self) -> RenderLoop:
        return self._loop

    # ==================== Options ====================

    @property
    def options(self) -> EditorOptions:
        return self._options

    @property
    def brush_radius(self) -> float:
        return self._options.brush_radius

    @brush_radius.setter
    def brush_radius(self, value: float):
        self.apply_options(replace(self._options, brush_radius=value))

    @property
    def lazy_radius(self) -> float:
        return self._options.lazy_radius

    @lazy_radius.setter
    def lazy_radius(self, value: float):
        self.apply_options(replace(self._options, lazy_radius=value))

    @property
    def friction(self) -> float:
        return self._options.friction

    @friction.setter
    def friction(self, value: float):
        self.apply_options(replace(self._options, friction=value))

    @property
    def enabled(self) -> bool:
        return self._options.enabled

    @enabled.setter
    def enabled(self, value: bool):
        self.apply_options(replace(self._options, enabled=bool(value)))

    @property
    def clear_signal(self):
        return self._options.clear_signal

    @clear_signal.setter
    def clear_signal(self, value):
        self.apply_options(replace(self._options, clear_signal=value))

    def apply_options(self, options: EditorOptions):
        """
        Apply a new set of options.

        Radius and smoothing changes take effect on the next frame; a changed
        clear_signal clears the mask immediately.
        """
        previous = self._options
        self._brush.set_radius(options.lazy_radius)
        if options.enabled:
            self._brush.enable()
        else:
            self._brush.disable()
        self._surfaces.clear_on_resize = options.clear_on_resize

        self._options = options
        self._loop.options = options

        if options.clear_signal != previous.clear_signal:
            self.clear()
        self.update()

    # ==================== Mask ====================

    def clear(self):
        """Erase the mask and the transient stroke layer."""
        self._surfaces.clear_all()
        logger.debug("Mask cleared")
        self.mask_cleared.emit()
        self.update()

    def mask_image(self) -> QImage:
        """Persistent mask surface (premultiplied ARGB, devicePixelRatio set)."""
        return self._surfaces.get_surface(SurfaceRole.PERSISTENT).image

    # ==================== Lifecycle ====================

    def start(self):
        """Start the frame loop."""
        if not self._scheduler.is_running():
            logger.debug("Mask editor frame loop started")
        self._scheduler.start()

    def stop(self):
        """Stop the frame loop and drop any pending resize. Safe to call repeatedly."""
        if self._scheduler.is_running():
            logger.debug("Mask editor frame loop stopped")
        self._scheduler.stop()
        self._surfaces.cancel_pending_resize()

    def is_running(self) -> bool:
        return self._scheduler.is_running()

    @contextmanager
    def running(self) -> Iterator['MaskEditorCanvas']:
        """Run the frame loop for the duration of a with-block."""
        self.start()
        try:
            yield self
        finally:
            self.stop()

    def showEvent(self, event):
        super().showEvent(event)
        # First layout is applied immediately, later ones are debounced
        self._surfaces.resize(self.width(), self.height(), self.devicePixelRatioF())
        self.start()

    def hideEvent(self, event):
        self.stop()
        super().hideEvent(event)

    def closeEvent(self, event):
        self.stop()
        super().closeEvent(event)

    # ==================== Event Interception ====================

    def event(self, event):
        """Route pointer events into the input tracker and scale changes into a resize."""
        if event.type() == QEvent.Type.DevicePixelRatioChange:
            # Moved to a screen with another scale; same logical size
            self._surfaces.request_resize(self.width(), self.height(), self.devicePixelRatioF())
        if self._input.handles(event.type()) and self._input.handle_event(event):
            event.accept()
            return True
        return super().event(event)

    def leaveEvent(self, event):
        self.update()
        super().leaveEvent(event)

    # ==================== Resize ====================

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._surfaces.request_resize(self.width(), self.height(), self.devicePixelRatioF())

    def _on_surfaces_resized(self, width: int, height: int):
        center = Point(width / 2, height / 2)
        # Stroke points from the old layout would not line up with the new surfaces
        self._loop.cancel_stroke()
        self._tracker.on_release()
        self._tracker.snap_to(center)
        self._brush.update(center, continuous=True)
        self.surfaces_resized.emit(width, height)
        self.update()

    def _on_surface_status(self, role: SurfaceRole, available: bool):
        if not available:
            logger.warning(f"Mask editor {role.value} surface unavailable; skipping its drawing")
        self.surface_status_changed.emit(role.value, available)

    # ==================== Painting ====================

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            for role in self.LAYER_ORDER:
                surface = self._surfaces.get_surface(role)
                if surface.is_available():
                    painter.drawImage(surface.logical_rect, surface.image)
        finally:
            painter.end()


__all__ = ['MaskEditorCanvas']
