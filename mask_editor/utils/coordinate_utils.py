"""
Coordinate conversion utilities for the mask editor.

Provides viewport/canvas-local conversion for pointer input and
logical/physical conversion for device-pixel-ratio aware surfaces.
"""

import math
from typing import Callable, Optional, Tuple

from PyQt6.QtCore import QPointF, QRectF

from ..core.geometry import Point


class CoordinateConverter:
    """
    Handles conversion between viewport coordinates and canvas-local coordinates.

    The container origin is read through a provider callable on every
    conversion, so a container that moves between events is always measured
    at its current position.
    """

    def __init__(self, origin_provider: Optional[Callable[[], QPointF]] = None):
        self._origin_provider = origin_provider

    def set_origin_provider(self, provider: Callable[[], QPointF]):
        """
        Set the callable returning the container's bounding-box origin.

        Args:
            provider: Returns the container top-left in viewport coordinates
        """
        self._origin_provider = provider

    def get_origin(self) -> QPointF:
        """Get the current container origin (0, 0 without a provider)."""
        if self._origin_provider is None:
            return QPointF(0, 0)
        return self._origin_provider()

    def viewport_to_local(self, client_x: float, client_y: float) -> Point:
        """
        Convert viewport coordinates to canvas-local coordinates.

        Negative results are clamped to 0; positions past the right or
        bottom edge are kept as-is.

        Args:
            client_x: Viewport x
            client_y: Viewport y

        Returns:
            Canvas-local Point
        """
        origin = self.get_origin()
        x = max(0.0, client_x - origin.x())
        y = max(0.0, client_y - origin.y())
        return Point(x, y)

    @staticmethod
    def local_rect(width: float, height: float) -> QRectF:
        """Logical rectangle covering the whole canvas."""
        return QRectF(0, 0, width, height)


def capped_scale(device_pixel_ratio: float, max_scale: float) -> float:
    """Device scale for a surface: the platform ratio capped at max_scale."""
    if device_pixel_ratio <= 0:
        return 1.0
    return min(float(device_pixel_ratio), float(max_scale))


def physical_size(logical_width: int, logical_height: int, scale: float) -> Tuple[int, int]:
    """
    Backing-store size for a logical size at a device scale.

    Args:
        logical_width: Width in logical units
        logical_height: Height in logical units
        scale: Device scale

    Returns:
        (width, height) in physical pixels
    """
    return (
        max(0, int(math.ceil(logical_width * scale - 1e-9))),
        max(0, int(math.ceil(logical_height * scale - 1e-9))),
    )


__all__ = ['CoordinateConverter', 'capped_scale', 'physical_size']
