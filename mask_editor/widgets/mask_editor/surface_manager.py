"""
Surface manager for the mask editor.

Owns the three layered raster surfaces:
- interface: brush indicator and guide curve, redrawn every frame
- transient: the stroke currently being drawn
- persistent: the accumulated mask exposed to the host

Each surface is a QImage whose devicePixelRatio is the capped device scale,
so painters opened on it work in logical coordinates.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from PyQt6.QtCore import QObject, QRectF, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QImage, QPainter

from ...config import Config
from ...utils.coordinate_utils import capped_scale, physical_size

logger = logging.getLogger(__name__)


class SurfaceRole(Enum):
    """Layer roles, listed bottom to top."""
    PERSISTENT = 'persistent'
    TRANSIENT = 'transient'
    INTERFACE = 'interface'


class Surface:
    """
    One drawing surface with a logical size and a device scale.

    A surface whose backing store could not be allocated (zero size, or the
    platform refused the allocation) is unavailable: painter() yields None.
    """

    def __init__(self, role: SurfaceRole, logical_width: int, logical_height: int,
                 device_scale: float):
        self.role = role
        self.logical_width = logical_width
        self.logical_height = logical_height
        self.device_scale = device_scale

        width, height = physical_size(logical_width, logical_height, device_scale)
        if width > 0 and height > 0:
            self._image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        else:
            self._image = QImage()

        if not self._image.isNull():
            self._image.setDevicePixelRatio(device_scale)
            self._image.fill(Qt.GlobalColor.transparent)

    @property
    def image(self) -> QImage:
        return self._image

    @property
    def logical_rect(self) -> QRectF:
        return QRectF(0, 0, self.logical_width, self.logical_height)

    def is_available(self) -> bool:
        return not self._image.isNull()

    @contextmanager
    def painter(self) -> Iterator[Optional[QPainter]]:
        """
        Open an antialiased painter in logical coordinates.

        Yields None when the surface has no usable drawing context.
        """
        painter = QPainter()
        if not self.is_available() or not painter.begin(self._image):
            yield None
            return
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            yield painter
        finally:
            painter.end()

    def clear(self) -> bool:
        """Fill the surface with full transparency."""
        if not self.is_available():
            return False
        self._image.fill(Qt.GlobalColor.transparent)
        return True


class SurfaceManager(QObject):
    """
    Creates, resizes and composites the editor surfaces.

    Usage:
        surfaces = SurfaceManager(1280, 768, device_pixel_ratio=2.0)
        with surfaces.get_surface(SurfaceRole.TRANSIENT).painter() as painter:
            ...
        surfaces.merge_transient_into_persistent()
    """

    resized = pyqtSignal(int, int)  # logical width, height

    SCALE_CAPS: Dict[SurfaceRole, float] = {
        SurfaceRole.PERSISTENT: Config.DRAW_MAX_DPI,
        SurfaceRole.TRANSIENT: Config.DRAW_MAX_DPI,
        SurfaceRole.INTERFACE: Config.INTERFACE_MAX_DPI,
    }

    def __init__(
        self,
        logical_width: int = Config.DEFAULT_CANVAS_WIDTH,
        logical_height: int = Config.DEFAULT_CANVAS_HEIGHT,
        device_pixel_ratio: float = 1.0,
        clear_on_resize: bool = False,
        debounce_ms: int = Config.RESIZE_DEBOUNCE_MS,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._logical_size = (int(logical_width), int(logical_height))
        self._device_pixel_ratio = float(device_pixel_ratio)
        self.clear_on_resize = clear_on_resize

        self._pending_resize: Optional[Tuple[int, int, Optional[float]]] = None
        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(debounce_ms)
        self._resize_timer.timeout.connect(self._apply_pending_resize)

        self._surfaces: Dict[SurfaceRole, Surface] = self._create_surfaces(
            *self._logical_size, self._device_pixel_ratio
        )

    # ==================== Properties ====================

    @property
    def logical_size(self) -> Tuple[int, int]:
        return self._logical_size

    @property
    def device_pixel_ratio(self) -> float:
        return self._device_pixel_ratio

    def get_surface(self, role: SurfaceRole) -> Surface:
        return self._surfaces[role]

    def surfaces(self) -> Dict[SurfaceRole, Surface]:
        return dict(self._surfaces)

    # ==================== Sizing ====================

    def _create_surfaces(self, width: int, height: int, dpr: float) -> Dict[SurfaceRole, Surface]:
        return {
            role: Surface(role, width, height, capped_scale(dpr, cap))
            for role, cap in self.SCALE_CAPS.items()
        }

    def resize(self, logical_width: int, logical_height: int,
               device_pixel_ratio: Optional[float] = None) -> bool:
        """
        Recreate all three surfaces at a new logical size.

        The persistent mask is carried over at 1:1 logical coordinates
        (cropped to the new size) unless clear_on_resize is set.

        Args:
            logical_width: New width in logical units
            logical_height: New height in logical units
            device_pixel_ratio: Platform ratio; None keeps the current one

        Returns:
            True if the surfaces were recreated
        """
        dpr = self._device_pixel_ratio if device_pixel_ratio is None else float(device_pixel_ratio)
        size = (max(0, int(logical_width)), max(0, int(logical_height)))
        if size == self._logical_size and dpr == self._device_pixel_ratio:
            return False

        old_mask = self._surfaces[SurfaceRole.PERSISTENT]
        self._surfaces = self._create_surfaces(*size, dpr)
        self._logical_size = size
        self._device_pixel_ratio = dpr

        if not self.clear_on_resize and old_mask.is_available():
            with self._surfaces[SurfaceRole.PERSISTENT].painter() as painter:
                if painter is not None:
                    painter.drawImage(old_mask.logical_rect, old_mask.image)

        logger.debug(f"Surfaces resized to {size[0]}x{size[1]} @ {dpr:.2f}")
        self.resized.emit(*size)
        return True

    def request_resize(self, logical_width: int, logical_height: int,
                       device_pixel_ratio: Optional[float] = None):
        """Debounced resize: applied once no new request arrives for the settle delay."""
        self._pending_resize = (int(logical_width), int(logical_height), device_pixel_ratio)
        self._resize_timer.start()

    def has_pending_resize(self) -> bool:
        return self._pending_resize is not None

    def cancel_pending_resize(self):
        self._resize_timer.stop()
        self._pending_resize = None

    def _apply_pending_resize(self):
        if self._pending_resize is None:
            return
        width, height, dpr = self._pending_resize
        self._pending_resize = None
        self.resize(width, height, dpr)

    # ==================== Compositing ====================

    def merge_transient_into_persistent(self) -> bool:
        """
        Copy the transient stroke onto the mask and clear the transient surface.

        Returns:
            True if the merge happened
        """
        transient = self._surfaces[SurfaceRole.TRANSIENT]
        persistent = self._surfaces[SurfaceRole.PERSISTENT]
        if not transient.is_available():
            return False

        with persistent.painter() as painter:
            if painter is None:
                return False
            painter.drawImage(transient.logical_rect, transient.image)

        transient.clear()
        return True

    def clear_all(self) -> bool:
        """Clear the transient stroke and the persistent mask."""
        cleared_transient = self._surfaces[SurfaceRole.TRANSIENT].clear()
        cleared_mask = self._surfaces[SurfaceRole.PERSISTENT].clear()
        return cleared_transient and cleared_mask


__all__ = ['SurfaceRole', 'Surface', 'SurfaceManager']
