"""
Catenary curve between two points for the lazy brush guide.

A chain of fixed length hangs between brush and pointer. When the points are
closer than the chain length it sags (y grows downward in canvas space); when
they are at or beyond the chain length it is pulled straight.

The sampled curve is returned as a start point plus a chain of quadratic
segments (control point, end point), ready for QPainterPath.quadTo().
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .geometry import Point, distance

EPSILON = 1e-6
DEFAULT_SEGMENTS = 25
DEFAULT_ITERATION_LIMIT = 6


@dataclass
class CatenaryResult:
    """
    Drawable catenary.

    Attributes:
        start: First point of the curve
        curves: (control, end) pairs for quadratic segments
        line_to: Trailing straight segment end points (taut chain, final joint)
        is_straight: True when the chain is taut
    """
    start: Point
    curves: List[Tuple[Point, Point]] = field(default_factory=list)
    line_to: List[Point] = field(default_factory=list)
    is_straight: bool = False


def catenary_parameter(h: float, v: float, length: float,
                       limit: int = DEFAULT_ITERATION_LIMIT) -> float:
    """
    Solve for the catenary parameter `a` of a chain spanning (h, v).

    Newton iteration on sinh(x) = m * x with m = sqrt(L^2 - v^2) / h.
    """
    m = math.sqrt(length * length - v * v) / h
    x = math.acosh(max(m, 1.0)) + 1
    prev_x = -1.0
    count = 0
    while abs(x - prev_x) > EPSILON and count < limit:
        prev_x = x
        x = x - (math.sinh(x) - m * x) / (math.cosh(x) - m)
        count += 1
    return h / (2 * x)


def _sample_curve(a: float, p1: Point, p2: Point, offset_x: float, offset_y: float,
                  segments: int) -> np.ndarray:
    # Interior samples sit at segment centres so the quadratic chain stays smooth
    inner = segments - 1
    xs = p1.x + (p2.x - p1.x) * (np.arange(inner) + 0.5) / inner
    xs = np.concatenate(([p1.x], xs, [p2.x]))
    ys = a * np.cosh((xs - offset_x) / a) + offset_y
    return np.column_stack((xs, ys))


def _curve_result(samples: np.ndarray) -> CatenaryResult:
    start = Point(float(samples[0, 0]), float(samples[0, 1]))
    result = CatenaryResult(start=start)
    control = samples[1]
    for current in samples[2:]:
        mid = (control + current) * 0.5
        result.curves.append((
            Point(float(control[0]), float(control[1])),
            Point(float(mid[0]), float(mid[1])),
        ))
        control = current
    result.line_to.append(Point(float(control[0]), float(control[1])))
    return result


def catenary_curve(point1: Point, point2: Point, chain_length: float,
                   segments: int = DEFAULT_SEGMENTS,
                   iteration_limit: int = DEFAULT_ITERATION_LIMIT) -> CatenaryResult:
    """
    Compute the catenary hanging between two points.

    Args:
        point1: First end of the chain (brush)
        point2: Second end of the chain (pointer)
        chain_length: Length of the chain (lazy radius)
        segments: Number of samples along a sagging curve
        iteration_limit: Newton iterations for the catenary parameter

    Returns:
        CatenaryResult ordered left to right
    """
    p1, p2 = (point2, point1) if point1.x > point2.x else (point1, point2)
    span = distance(p1, p2)

    if span < chain_length:
        h = p2.x - p1.x
        if h > 0.01:
            v = p2.y - p1.y
            a = -catenary_parameter(h, v, chain_length, iteration_limit)
            x = (a * math.log((chain_length + v) / (chain_length - v)) - h) * 0.5
            y = a * math.cosh(x / a)
            samples = _sample_curve(a, p1, p2, p1.x - x, p1.y - y, segments)
            return _curve_result(samples)

        # Near-vertical slack chain: single sag point below the pair
        sag = Point((p1.x + p2.x) * 0.5, (p1.y + p2.y + chain_length) * 0.5)
        return CatenaryResult(start=p1, curves=[(sag, p2)])

    return CatenaryResult(start=p1, line_to=[p2], is_straight=True)


__all__ = ['CatenaryResult', 'catenary_parameter', 'catenary_curve']
