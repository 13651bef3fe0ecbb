"""
LazyBrush - Pointer smoothing model

The brush trails the pointer on an invisible string of length `radius`:
- Pointer farther than radius: brush is dragged so it sits exactly radius away
- Pointer within radius: brush eases toward it by the friction coefficient
- Disabled: brush follows the pointer 1:1

Friction is a coefficient in (0, 1]; 1 snaps the brush onto the target in a
single update, smaller values lag more.
"""

import math
from typing import Optional

from .geometry import Point, distance


class LazyBrush:
    """
    Lazy brush state and update rule.

    Usage:
        brush = LazyBrush(radius=10)
        brush.initialize(Point(640, 384), 10)
        brush.update(Point(700, 384), friction=0.1)
        if brush.has_moved():
            points.append(brush.get_position())
    """

    MOVE_EPSILON = 0.01
    MIN_FRICTION = 1e-3

    def __init__(self, radius: float = 10.0, enabled: bool = True,
                 initial_point: Optional[Point] = None):
        self._radius = self._validate_radius(radius)
        self._enabled = enabled
        start = initial_point or Point(0.0, 0.0)
        self._position = Point(float(start.x), float(start.y))
        self._target = self._position
        self._distance = 0.0
        self._last_moved_distance = 0.0

    @staticmethod
    def _validate_radius(radius: float) -> float:
        radius = float(radius)
        if not radius > 0:
            raise ValueError(f"Brush radius must be positive, got {radius}")
        return radius

    # ==================== State ====================

    def initialize(self, point: Point, radius: float):
        """Place brush and target on point and set the radius."""
        self._radius = self._validate_radius(radius)
        self._position = Point(float(point.x), float(point.y))
        self._target = self._position
        self._distance = 0.0
        self._last_moved_distance = 0.0

    @property
    def radius(self) -> float:
        return self._radius

    def set_radius(self, radius: float):
        self._radius = self._validate_radius(radius)

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def get_position(self) -> Point:
        return self._position

    @property
    def target(self) -> Point:
        return self._target

    def distance_to_target(self) -> float:
        """Brush to target distance seen by the last update, before moving."""
        return self._distance

    @property
    def last_moved_distance(self) -> float:
        return self._last_moved_distance

    def has_moved(self) -> bool:
        return self._last_moved_distance > self.MOVE_EPSILON

    # ==================== Update ====================

    def update(self, target: Point, continuous: bool = False,
               friction: Optional[float] = None) -> bool:
        """
        Move the brush toward target.

        Args:
            target: Raw pointer position
            continuous: Teleport brush onto target (touch start, resync)
            friction: Easing coefficient in (0, 1]; None means 1

        Returns:
            True if the brush moved more than MOVE_EPSILON
        """
        target = Point(float(target.x), float(target.y))
        self._target = target
        previous = self._position

        if continuous:
            self._distance = 0.0
            self._position = target
        elif not self._enabled:
            self._distance = 0.0
            self._position = target
        else:
            self._distance = distance(previous, target)
            self._position = self._follow(previous, target, self._distance,
                                          self._clamp_friction(friction))

        self._last_moved_distance = distance(previous, self._position)
        return self.has_moved()

    def _follow(self, brush: Point, target: Point, dist: float, friction: float) -> Point:
        if dist > self._radius:
            # Rubber band: drag the brush to exactly radius from the target
            pull = (dist - self._radius) / dist
            return Point(brush.x + (target.x - brush.x) * pull,
                         brush.y + (target.y - brush.y) * pull)
        return Point(brush.x + (target.x - brush.x) * friction,
                     brush.y + (target.y - brush.y) * friction)

    def _clamp_friction(self, friction: Optional[float]) -> float:
        if friction is None or math.isnan(friction):
            return 1.0
        return min(1.0, max(self.MIN_FRICTION, float(friction)))


__all__ = ['LazyBrush']
