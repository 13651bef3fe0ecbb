"""
Render loop for the mask editor.

One repeating frame callback drives every drawing-state change: brush update,
stroke accumulation, transient re-rasterization, mask merge and the guide
redraw. Pointer callbacks only touch the PointerInputTracker, so a frame
always sees a consistent snapshot of the input and no event can observe a
half-updated stroke.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional

from PyQt6.QtCore import QObject, Qt, QTimer

from ...config import Config, EditorOptions
from ...core.lazy_brush import LazyBrush
from .guide_renderer import GuideCurveRenderer
from .pointer_input import PointerInputTracker, SyncMode
from .stroke_rasterizer import StrokeRasterizer
from .surface_manager import SurfaceManager, SurfaceRole

logger = logging.getLogger(__name__)


class DrawState(Enum):
    """Stroke state machine."""
    IDLE = 0      # Nothing pressed
    PRESSED = 1   # Pressed, waiting for the brush to move
    DRAWING = 2   # Stroke buffer accumulating


class FrameScheduler(QObject):
    """Cancelable repeating callback on the display refresh clock."""

    def __init__(self, callback: Callable[[], None],
                 interval_ms: int = Config.FRAME_INTERVAL_MS,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)

    def start(self):
        if not self._timer.isActive():
            self._timer.start()

    def stop(self):
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()


class RenderLoop:
    """
    Per-frame driver for the editor.

    Usage:
        loop = RenderLoop(brush, tracker, surfaces, options)
        scheduler = FrameScheduler(loop.tick)
        scheduler.start()
    """

    def __init__(
        self,
        brush: LazyBrush,
        tracker: PointerInputTracker,
        surfaces: SurfaceManager,
        options: EditorOptions,
        rasterizer: Optional[StrokeRasterizer] = None,
        guide: Optional[GuideCurveRenderer] = None,
        on_frame: Optional[Callable[[], None]] = None,
        on_stroke_committed: Optional[Callable[[], None]] = None,
        on_surface_status: Optional[Callable[[SurfaceRole, bool], None]] = None
    ):
        self.brush = brush
        self.tracker = tracker
        self.surfaces = surfaces
        self.options = options
        self.rasterizer = rasterizer or StrokeRasterizer()
        self.guide = guide or GuideCurveRenderer()

        self._on_frame = on_frame
        self._on_stroke_committed = on_stroke_committed
        self._on_surface_status = on_surface_status

        self._state = DrawState.IDLE
        self._frame_count = 0
        self._surface_status: Dict[SurfaceRole, bool] = {}

    # ==================== State ====================

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def is_drawing(self) -> bool:
        return self._state == DrawState.DRAWING

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def surface_status(self) -> Dict[SurfaceRole, bool]:
        """Availability of each surface as seen by the most recent frame."""
        return dict(self._surface_status)

    def current_friction(self) -> float:
        """Drawing friction while a stroke is in progress, snap otherwise."""
        if self._state == DrawState.IDLE:
            return 1.0
        return self.options.drawing_friction

    # ==================== Frame ====================

    def tick(self):
        """Run one frame."""
        self._frame_count += 1
        self._apply_sync_request()
        self.brush.update(self.tracker.position, friction=self.current_friction())
        self._advance_stroke()
        self._draw_interface()

        if self._on_frame is not None:
            self._on_frame()

    def _apply_sync_request(self):
        request = self.tracker.consume_sync_request()
        if request == SyncMode.TO_POINTER:
            self.brush.update(self.tracker.position, continuous=True)
        elif request == SyncMode.TO_BRUSH:
            position = self.brush.get_position()
            self.tracker.snap_to(position)
            self.brush.update(position, continuous=True)

    def _advance_stroke(self):
        pressed = self.tracker.is_pressed

        if self._state == DrawState.IDLE:
            if not pressed:
                return
            self.rasterizer.begin_stroke()
            self.rasterizer.append_point(self.brush.get_position())
            self._state = DrawState.PRESSED
            if not self.brush.is_enabled():
                # No smoothing delay to wait for
                self._state = DrawState.DRAWING
                self._rasterize_transient()
            return

        if not pressed:
            self._finish_stroke()
            return

        if self._state == DrawState.PRESSED:
            if not (self.brush.has_moved() or not self.brush.is_enabled()):
                return
            self._state = DrawState.DRAWING

        if self.brush.has_moved():
            self.rasterizer.append_point(self.brush.get_position())
        self._rasterize_transient()

    def _rasterize_transient(self) -> bool:
        transient = self.surfaces.get_surface(SurfaceRole.TRANSIENT)
        self._report_surface(SurfaceRole.TRANSIENT, transient.is_available())
        if not transient.clear():
            return False
        with transient.painter() as painter:
            return self.rasterizer.rasterize(painter, None, self.options.brush_radius * 2)

    def _finish_stroke(self):
        if self._state == DrawState.DRAWING:
            self._rasterize_transient()
            merged = self.surfaces.merge_transient_into_persistent()
            self._report_surface(
                SurfaceRole.PERSISTENT,
                self.surfaces.get_surface(SurfaceRole.PERSISTENT).is_available()
            )
            buffer = self.rasterizer.end_stroke()
            logger.debug(f"Stroke finished: {len(buffer) if buffer else 0} points, merged={merged}")
            if merged and self._on_stroke_committed is not None:
                self._on_stroke_committed()
        else:
            self.rasterizer.end_stroke()
        self._state = DrawState.IDLE

    def _draw_interface(self):
        interface = self.surfaces.get_surface(SurfaceRole.INTERFACE)
        self._report_surface(SurfaceRole.INTERFACE, interface.is_available())
        if not interface.clear():
            return
        with interface.painter() as painter:
            self.guide.render(
                painter,
                self.brush.get_position(),
                self.tracker.position,
                self.brush.radius,
                distance_to_target=self.brush.distance_to_target(),
                brush_radius=self.options.brush_radius,
                show_curve=self.brush.is_enabled()
            )

    def _report_surface(self, role: SurfaceRole, available: bool):
        if self._surface_status.get(role) == available:
            return
        self._surface_status[role] = available
        if self._on_surface_status is not None:
            self._on_surface_status(role, available)

    # ==================== External ====================

    def cancel_stroke(self):
        """Drop the stroke in progress without merging it."""
        self.rasterizer.end_stroke()
        self.surfaces.get_surface(SurfaceRole.TRANSIENT).clear()
        self._state = DrawState.IDLE


__all__ = ['DrawState', 'FrameScheduler', 'RenderLoop']
