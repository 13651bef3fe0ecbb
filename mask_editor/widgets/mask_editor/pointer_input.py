"""
Pointer input for the mask editor.

PointerInputTracker holds the only state pointer callbacks may touch: the
latest canvas-local position, the press flag and pending brush sync
requests. QtPointerAdapter feeds it from any Qt pointer event (mouse, touch
or tablet) through a single dispatch table.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QInputDevice, QPointerEvent, QSinglePointEvent

from ...core.geometry import Point
from ...utils.coordinate_utils import CoordinateConverter


class SyncMode(Enum):
    """Brush resynchronisation requested by an input event."""
    TO_POINTER = 1  # Teleport brush onto the pointer (touch start)
    TO_BRUSH = 2    # Pull pointer back onto the brush (touch end)


class PointerInputTracker:
    """
    Normalised pointer state in canvas-local logical coordinates.

    Touch devices have no hover phase, so a touch start asks for the brush to
    be teleported to the finger before the press is seen by the render loop.
    The request is only recorded here; the render loop applies it.
    """

    def __init__(self, converter: Optional[CoordinateConverter] = None,
                 initial_position: Optional[Point] = None):
        self._converter = converter or CoordinateConverter()
        self._position = initial_position or Point(0.0, 0.0)
        self._pressed = False
        self._sync_request: Optional[SyncMode] = None

    @property
    def position(self) -> Point:
        return self._position

    @property
    def is_pressed(self) -> bool:
        return self._pressed

    def on_move(self, client_x: float, client_y: float):
        self._position = self._converter.viewport_to_local(client_x, client_y)

    def on_press(self):
        self._pressed = True

    def on_release(self):
        self._pressed = False

    def on_touch_start(self, client_x: float, client_y: float):
        self.on_move(client_x, client_y)
        self._sync_request = SyncMode.TO_POINTER
        self.on_press()

    def on_touch_end(self):
        self.on_release()
        self._sync_request = SyncMode.TO_BRUSH

    def snap_to(self, point: Point):
        """Set the pointer directly in local coordinates."""
        self._position = Point(float(point.x), float(point.y))

    def consume_sync_request(self) -> Optional[SyncMode]:
        request, self._sync_request = self._sync_request, None
        return request


class QtPointerAdapter:
    """
    Routes Qt pointer events into a PointerInputTracker.

    Mouse, touch and tablet events are all QPointerEvents carrying global
    positions, so one handler per phase covers every source. Mouse events
    arriving while a tablet pen is down are the synthesized duplicates and
    are swallowed. Touch events are only taken from touch screens; touchpad
    contacts would otherwise press without a click.
    """

    def __init__(self, tracker: PointerInputTracker):
        self._tracker = tracker
        self._tablet_down = False

        self._handlers: Dict[QEvent.Type, Callable[[QPointerEvent], bool]] = {
            QEvent.Type.MouseButtonPress: self._on_mouse_press,
            QEvent.Type.MouseButtonDblClick: self._on_mouse_press,
            QEvent.Type.MouseMove: self._on_mouse_move,
            QEvent.Type.MouseButtonRelease: self._on_mouse_release,
            QEvent.Type.TouchBegin: self._on_touch_begin,
            QEvent.Type.TouchUpdate: self._on_touch_update,
            QEvent.Type.TouchEnd: self._on_touch_end,
            QEvent.Type.TouchCancel: self._on_touch_end,
            QEvent.Type.TabletPress: self._on_tablet_press,
            QEvent.Type.TabletMove: self._on_move,
            QEvent.Type.TabletRelease: self._on_tablet_release,
            QEvent.Type.TabletLeaveProximity: self._on_tablet_leave,
        }

    def handles(self, event_type: QEvent.Type) -> bool:
        return event_type in self._handlers

    def handle_event(self, event: QEvent) -> bool:
        """
        Dispatch a Qt event.

        Returns:
            True if the event was consumed
        """
        handler = self._handlers.get(event.type())
        if handler is None:
            return False
        return handler(event)

    # ==================== Helpers ====================

    @staticmethod
    def _global_position(event: QPointerEvent) -> Optional[QPointF]:
        points = event.points()
        if not points:
            return None
        return points[0].globalPosition()

    @staticmethod
    def _is_primary_button(event: QPointerEvent) -> bool:
        if isinstance(event, QSinglePointEvent):
            return event.button() == Qt.MouseButton.LeftButton
        return True

    @staticmethod
    def _is_touch_screen(event: QPointerEvent) -> bool:
        device = event.device()
        return device is not None and device.type() == QInputDevice.DeviceType.TouchScreen

    def _move_to(self, event: QPointerEvent) -> bool:
        pos = self._global_position(event)
        if pos is None:
            return False
        self._tracker.on_move(pos.x(), pos.y())
        return True

    # ==================== Handlers ====================

    def _on_move(self, event: QPointerEvent) -> bool:
        return self._move_to(event)

    def _on_mouse_press(self, event: QPointerEvent) -> bool:
        if self._tablet_down or not self._is_primary_button(event):
            return False
        self._move_to(event)
        self._tracker.on_press()
        return True

    def _on_mouse_move(self, event: QPointerEvent) -> bool:
        if self._tablet_down:
            return False
        return self._move_to(event)

    def _on_mouse_release(self, event: QPointerEvent) -> bool:
        if self._tablet_down or not self._is_primary_button(event):
            return False
        self._tracker.on_release()
        return True

    def _on_touch_begin(self, event: QPointerEvent) -> bool:
        if not self._is_touch_screen(event):
            return False
        pos = self._global_position(event)
        if pos is None:
            return False
        self._tracker.on_touch_start(pos.x(), pos.y())
        return True

    def _on_touch_update(self, event: QPointerEvent) -> bool:
        if not self._is_touch_screen(event):
            return False
        return self._move_to(event)

    def _on_touch_end(self, event: QPointerEvent) -> bool:
        if not self._is_touch_screen(event):
            return False
        self._tracker.on_touch_end()
        return True

    def _on_tablet_press(self, event: QPointerEvent) -> bool:
        if not self._is_primary_button(event):
            return False
        self._tablet_down = True
        self._move_to(event)
        self._tracker.on_press()
        return True

    def _on_tablet_release(self, event: QPointerEvent) -> bool:
        self._tablet_down = False
        self._tracker.on_release()
        return True

    def _on_tablet_leave(self, event: QPointerEvent) -> bool:
        # Pen lifted out of range without a release
        if self._tablet_down:
            self._tablet_down = False
            self._tracker.on_release()
        return True


__all__ = ['SyncMode', 'PointerInputTracker', 'QtPointerAdapter']
