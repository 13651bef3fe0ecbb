"""Tests for the MaskEditorCanvas widget.

Tests:
    - Frame loop lifecycle (start/stop, context manager, close and hide)
    - Option properties and validation
    - Clear via clear() and clear_signal
    - Drawing a stroke through the canvas components
    - Re-centring after a resize
    - Device pixel ratio changes requested as resizes
    - Clean interpreter exit with a live canvas and a closed window
"""

import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest
from PyQt6.QtCore import QEvent

from mask_editor.config import EditorOptions
from mask_editor.core.geometry import Point
from mask_editor.services.mask_export import is_mask_empty
from mask_editor.widgets.mask_editor import DrawState, SurfaceRole
from mask_editor.widgets.mask_editor_canvas import MaskEditorCanvas


@pytest.fixture
def canvas():
    widget = MaskEditorCanvas(EditorOptions(brush_radius=10, lazy_radius=10, friction=50))
    yield widget
    widget.stop()
    widget.deleteLater()


def _collect(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_start_stop_is_idempotent(canvas):
    assert not canvas.is_running()
    canvas.start()
    canvas.start()
    assert canvas.is_running()
    canvas.stop()
    canvas.stop()
    assert not canvas.is_running()


def test_running_context_manager(canvas):
    with canvas.running() as running:
        assert running is canvas
        assert canvas.is_running()
    assert not canvas.is_running()


def test_running_stops_on_error(canvas):
    with pytest.raises(RuntimeError):
        with canvas.running():
            raise RuntimeError("boom")
    assert not canvas.is_running()


def test_stop_cancels_pending_resize(canvas):
    canvas.start()
    canvas.surfaces.request_resize(300, 300)
    canvas.stop()
    assert not canvas.surfaces.has_pending_resize()


def test_close_stops_frame_loop(canvas):
    canvas.start()
    canvas.close()
    assert not canvas.is_running()


def test_show_starts_and_hide_stops(canvas):
    canvas.resize(320, 240)
    canvas.show()
    assert canvas.is_running()
    assert canvas.surfaces.logical_size == (320, 240)
    canvas.hide()
    assert not canvas.is_running()


def test_option_properties(canvas):
    canvas.lazy_radius = 30
    assert canvas.brush.radius == 30
    assert canvas.render_loop.options.lazy_radius == 30

    canvas.friction = 80
    assert canvas.render_loop.options.drawing_friction == pytest.approx(0.8)

    canvas.enabled = False
    assert not canvas.brush.is_enabled()
    canvas.enabled = True
    assert canvas.brush.is_enabled()

    canvas.brush_radius = 15
    assert canvas.options.brush_radius == 15


def test_invalid_option_rejected(canvas):
    with pytest.raises(ValueError):
        canvas.lazy_radius = 0
    with pytest.raises(ValueError):
        canvas.brush_radius = -1
    assert canvas.lazy_radius == 10
    assert canvas.brush.radius == 10


def _draw_stroke(canvas, start, end, frames=30):
    canvas.tracker.snap_to(start)
    canvas.render_loop.tick()
    canvas.tracker.on_press()
    canvas.render_loop.tick()
    canvas.tracker.snap_to(end)
    for _ in range(frames):
        canvas.render_loop.tick()
    canvas.tracker.on_release()
    canvas.render_loop.tick()


def test_stroke_commits_to_mask(canvas):
    committed = _collect(canvas.stroke_committed)

    _draw_stroke(canvas, Point(100, 100), Point(300, 100))

    assert committed == [()]
    assert canvas.render_loop.state == DrawState.IDLE
    assert not is_mask_empty(canvas.mask_image())


def test_clear_empties_mask(canvas):
    cleared = _collect(canvas.mask_cleared)
    _draw_stroke(canvas, Point(100, 100), Point(300, 100))

    canvas.clear()
    canvas.clear()

    assert is_mask_empty(canvas.mask_image())
    assert len(cleared) == 2


def test_clear_signal_change_clears(canvas):
    cleared = _collect(canvas.mask_cleared)
    _draw_stroke(canvas, Point(100, 100), Point(300, 100))

    canvas.clear_signal = canvas.clear_signal
    assert cleared == []
    assert not is_mask_empty(canvas.mask_image())

    canvas.clear_signal = "clear-1"
    assert len(cleared) == 1
    assert is_mask_empty(canvas.mask_image())


def test_resize_recentres_pointer_and_brush(canvas):
    resized = _collect(canvas.surfaces_resized)
    canvas.tracker.snap_to(Point(5, 5))
    canvas.render_loop.tick()

    canvas.surfaces.resize(400, 300)

    assert resized == [(400, 300)]
    assert canvas.tracker.position == Point(200, 150)
    assert canvas.brush.get_position() == Point(200, 150)


def test_resize_keeps_mask_by_default(canvas):
    _draw_stroke(canvas, Point(100, 100), Point(300, 100))
    canvas.surfaces.resize(500, 400)
    assert not is_mask_empty(canvas.mask_image())


def test_mask_image_is_persistent_surface(canvas):
    persistent = canvas.surfaces.get_surface(SurfaceRole.PERSISTENT)
    assert canvas.mask_image() is persistent.image


def test_grab_renders_layers(canvas):
    canvas.resize(320, 240)
    _draw_stroke(canvas, Point(50, 50), Point(150, 50))
    pixmap = canvas.grab()
    assert not pixmap.isNull()


def test_device_pixel_ratio_change_requests_resize(canvas):
    canvas.resize(320, 240)
    canvas.surfaces.cancel_pending_resize()

    canvas.event(QEvent(QEvent.Type.DevicePixelRatioChange))

    assert canvas.surfaces.has_pending_resize()
    canvas.stop()


def test_surfaces_are_owned_by_canvas(canvas):
    assert canvas.surfaces.parent() is canvas


SHUTDOWN_SCRIPT = textwrap.dedent("""
    import sys
    from PyQt6.QtWidgets import QApplication
    from mask_editor.widgets.main_window import MainWindow
    from mask_editor.widgets.mask_editor_canvas import MaskEditorCanvas

    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    app.processEvents()
    window.close()

    canvas = MaskEditorCanvas()
    canvas.show()
    canvas.surfaces.request_resize(200, 100)
    app.processEvents()
    print("ok")
""")


def test_interpreter_exits_cleanly_with_live_canvas(tmp_path):
    root = Path(__file__).resolve().parent.parent
    env = dict(os.environ)
    env["QT_QPA_PLATFORM"] = "offscreen"
    env["MASK_EDITOR_HOME"] = str(tmp_path)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(root), env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, "-c", SHUTDOWN_SCRIPT],
        cwd=str(root), env=env, capture_output=True, text=True, timeout=60
    )

    assert result.returncode == 0, result.stderr
    assert "ok" in result.stdout
    assert "has been deleted" not in result.stderr
