"""
Guide renderer for the lazy brush.

Draws the interface layer: brush disc, pointer dot, brush centre dot and the
dashed catenary connecting brush and pointer. The dash length grows with the
pull on the string so the guide visibly tightens under tension.
"""

import math
from typing import Optional

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen

from ...config import Config
from ...core.catenary import CatenaryResult, catenary_curve
from ...core.geometry import Point


def catenary_to_path(result: CatenaryResult) -> QPainterPath:
    """Convert a catenary result into a painter path."""
    path = QPainterPath()
    path.moveTo(QPointF(result.start.x, result.start.y))
    for control, end in result.curves:
        path.quadTo(QPointF(control.x, control.y), QPointF(end.x, end.y))
    for end in result.line_to:
        path.lineTo(QPointF(end.x, end.y))
    return path


def guide_tension(distance_to_target: float, radius: float,
                  slack_epsilon: float = Config.GUIDE_SLACK_EPSILON):
    """
    Pull offset and dash stretch factor for the guide.

    Args:
        distance_to_target: Brush to pointer distance
        radius: Lazy radius (string length)
        slack_epsilon: Near-zero threshold below which the string is slack

    Returns:
        (pull_offset, stretch_factor, is_tense)
    """
    pull_offset = max(distance_to_target - radius, -slack_epsilon)
    stretch_factor = pull_offset / radius + 1
    return pull_offset, stretch_factor, pull_offset > -slack_epsilon


class GuideCurveRenderer:
    """Paints the brush indicator and tension guide onto the interface surface."""

    def __init__(self):
        self._primary = QColor(Config.COLOR_PRIMARY)
        self._pointer_color = QColor(Config.COLOR_BLACK)
        self._tense_color = QColor(Config.COLOR_CATENARY)
        self._idle_color = QColor(*Config.COLOR_GUIDE_IDLE)
        self._center_color = QColor(Config.COLOR_BRUSH_CENTER)

    def _draw_dot(self, painter: QPainter, point: Point, radius: float, color: QColor):
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(color))
        painter.drawEllipse(QPointF(point.x, point.y), radius, radius)

    def render(
        self,
        painter: Optional[QPainter],
        brush_point: Point,
        pointer_point: Point,
        radius: float,
        distance_to_target: float = 0.0,
        brush_radius: float = 0.0,
        show_curve: bool = True
    ) -> bool:
        """
        Render one frame of the interface layer.

        The caller clears the surface first; nothing drawn here is persistent.

        Args:
            painter: Painter on the interface surface (None = no-op)
            brush_point: Smoothed brush position
            pointer_point: Raw pointer position
            radius: Lazy radius (chain length)
            distance_to_target: Brush to pointer distance from the brush model
            brush_radius: Radius of the brush disc (0 hides it)
            show_curve: Draw the catenary (only while smoothing is enabled)

        Returns:
            True if the frame was drawn
        """
        if painter is None:
            return False

        if brush_radius > 0:
            self._draw_dot(painter, brush_point, brush_radius, self._primary)

        self._draw_dot(painter, pointer_point, Config.POINTER_DOT_RADIUS, self._pointer_color)

        if show_curve and radius > 0:
            _, stretch, is_tense = guide_tension(distance_to_target, radius)
            pen = QPen(self._tense_color if is_tense else self._idle_color, Config.GUIDE_LINE_WIDTH)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            # Qt dash lengths are in units of pen width
            dash = Config.GUIDE_DASH * stretch / Config.GUIDE_LINE_WIDTH
            if math.isfinite(dash) and dash > 0:
                pen.setDashPattern([dash, dash])
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawPath(catenary_to_path(catenary_curve(brush_point, pointer_point, radius)))

        self._draw_dot(painter, brush_point, Config.BRUSH_DOT_RADIUS, self._center_color)
        return True


__all__ = ['GuideCurveRenderer', 'catenary_to_path', 'guide_tension']
