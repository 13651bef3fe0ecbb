"""
Stroke rasterizer for the mask editor.

Turns the brush positions collected during one stroke into a smooth painted
path. Each raw point becomes the control point of a quadratic segment that
ends halfway to the next point, which irons out jitter in noisy, unevenly
spaced samples without fitting a spline.
"""

from typing import Iterable, Iterator, List, Optional, Sequence

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen

from ...config import Config
from ...core.geometry import Point, midpoint


class StrokePointBuffer:
    """Ordered brush positions of the stroke in progress."""

    def __init__(self):
        self._points: List[Point] = []

    def append(self, point: Point):
        self._points.append(Point(float(point.x), float(point.y)))

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def last(self) -> Optional[Point]:
        return self._points[-1] if self._points else None

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)


def build_stroke_path(points: Sequence[Point]) -> Optional[QPainterPath]:
    """
    Build the smoothed centerline for a stroke.

    Args:
        points: Brush positions in drawing order

    Returns:
        QPainterPath, or None with fewer than two points
    """
    if len(points) < 2:
        return None

    path = QPainterPath()
    path.moveTo(QPointF(points[0].x, points[0].y))

    for control, following in zip(points, points[1:]):
        end = midpoint(control, following)
        path.quadTo(QPointF(control.x, control.y), QPointF(end.x, end.y))

    # Straight tail to the newest point until the next sample gives it a control point
    last = points[-1]
    path.lineTo(QPointF(last.x, last.y))
    return path


def create_stroke_pen(line_width: float, color: Optional[QColor] = None) -> QPen:
    """Round-capped, round-joined pen for mask strokes."""
    pen = QPen(color or QColor(Config.COLOR_PRIMARY), line_width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


class StrokeRasterizer:
    """
    Collects stroke points and paints them.

    The point buffer lives only between begin_stroke() and end_stroke();
    outside a stroke there is no buffer at all.
    """

    def __init__(self, color: Optional[QColor] = None):
        self._color = QColor(color) if color is not None else QColor(Config.COLOR_PRIMARY)
        self._buffer: Optional[StrokePointBuffer] = None

    @property
    def is_active(self) -> bool:
        return self._buffer is not None

    @property
    def points(self) -> List[Point]:
        return self._buffer.points if self._buffer is not None else []

    def begin_stroke(self) -> StrokePointBuffer:
        self._buffer = StrokePointBuffer()
        return self._buffer

    def append_point(self, point: Point):
        if self._buffer is None:
            self.begin_stroke()
        self._buffer.append(point)

    def end_stroke(self) -> Optional[StrokePointBuffer]:
        """Detach and return the finished buffer."""
        buffer, self._buffer = self._buffer, None
        return buffer

    def rasterize(self, painter: Optional[QPainter], points: Optional[Iterable[Point]],
                  line_width: float) -> bool:
        """
        Paint a stroke.

        Args:
            painter: Painter on the target surface (None = no context, no-op)
            points: Stroke points; None paints the current buffer
            line_width: Pen width in logical units (brush diameter)

        Returns:
            True if anything was painted
        """
        if painter is None:
            return False
        stroke_points = list(points) if points is not None else self.points
        path = build_stroke_path(stroke_points)
        if path is None:
            return False

        painter.setPen(create_stroke_pen(line_width, self._color))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)
        return True


__all__ = ['StrokePointBuffer', 'StrokeRasterizer', 'build_stroke_path', 'create_stroke_pen']
