"""
Point primitives shared by the brush model, the guide curve and the rasterizer.

All coordinates are canvas-local logical units (device scale is applied by the
surfaces, never by callers).
"""

import math
from typing import NamedTuple


class Point(NamedTuple):
    """Immutable 2D point in logical canvas coordinates."""
    x: float
    y: float


def midpoint(a: Point, b: Point) -> Point:
    """Point halfway between a and b."""
    return Point(a.x + (b.x - a.x) / 2, a.y + (b.y - a.y) / 2)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


__all__ = ['Point', 'midpoint', 'distance']
