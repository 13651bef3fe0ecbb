"""Tests for the per-frame render loop.

Tests:
    - State transitions (idle, pressed, drawing)
    - Release from pressed discards, release from drawing commits
    - Smoothing disabled draws from the first frame
    - Touch sync requests applied inside the frame
    - Frame callbacks and surface health reporting
    - End-to-end stroke scenario
"""

import pytest

from mask_editor.config import EditorOptions
from mask_editor.core.geometry import Point, distance
from mask_editor.services.mask_export import is_mask_empty, mask_to_array
from mask_editor.widgets.mask_editor import DrawState, FrameScheduler, SurfaceRole

from conftest import build_loop, run_frames, run_until_stable


def _mask(loop):
    return loop.surfaces.get_surface(SurfaceRole.PERSISTENT).image


def test_idle_frame_snaps_brush_to_pointer(loop):
    loop.tracker.on_move(50, 50)
    loop.tick()

    assert loop.state == DrawState.IDLE
    # Far pointer drags the brush to exactly radius away
    assert distance(loop.brush.get_position(), Point(50, 50)) == pytest.approx(20.0)

    # Inside the radius, idle friction of 1 snaps onto the pointer
    brush = loop.brush.get_position()
    loop.tracker.on_move(brush.x + 5, brush.y)
    loop.tick()
    assert loop.brush.get_position().x == pytest.approx(brush.x + 5)
    assert loop.brush.get_position().y == pytest.approx(brush.y)


def test_press_without_movement_stays_pressed(loop):
    loop.tracker.on_press()
    run_frames(loop, 3)

    assert loop.state == DrawState.PRESSED
    assert loop.rasterizer.points == [Point(0, 0)]


def test_release_from_pressed_discards_stroke(options):
    committed = []
    loop = build_loop(options, on_stroke_committed=lambda: committed.append(True))

    loop.tracker.on_press()
    loop.tick()
    loop.tracker.on_release()
    loop.tick()

    assert loop.state == DrawState.IDLE
    assert not loop.rasterizer.is_active
    assert committed == []
    assert is_mask_empty(_mask(loop))


def test_movement_while_pressed_starts_drawing(loop):
    loop.tracker.on_press()
    loop.tick()
    loop.tracker.on_move(5, 5)
    loop.tick()

    assert loop.state == DrawState.DRAWING
    assert len(loop.rasterizer.points) == 2
    transient = loop.surfaces.get_surface(SurfaceRole.TRANSIENT).image
    assert not is_mask_empty(transient)
    assert is_mask_empty(_mask(loop))


def test_drawing_uses_option_friction(loop):
    loop.tracker.on_press()
    loop.tick()
    assert loop.current_friction() == pytest.approx(0.1)

    loop.tracker.on_move(10, 0)
    loop.tick()
    assert loop.brush.get_position().x == pytest.approx(1.0)


def test_release_from_drawing_commits(options):
    committed = []
    loop = build_loop(options, on_stroke_committed=lambda: committed.append(True))

    loop.tracker.on_press()
    loop.tick()
    loop.tracker.on_move(60, 0)
    run_frames(loop, 10)
    loop.tracker.on_release()
    loop.tick()

    assert loop.state == DrawState.IDLE
    assert committed == [True]
    assert not loop.rasterizer.is_active
    assert not is_mask_empty(_mask(loop))
    assert is_mask_empty(loop.surfaces.get_surface(SurfaceRole.TRANSIENT).image)


def test_disabled_smoothing_draws_immediately():
    loop = build_loop(EditorOptions(brush_radius=5, lazy_radius=20, friction=10, enabled=False))
    loop.tracker.on_move(10, 10)
    loop.tracker.on_press()
    loop.tick()
    assert loop.state == DrawState.DRAWING

    loop.tracker.on_move(40, 10)
    loop.tick()
    assert loop.brush.get_position() == Point(40, 10)
    assert loop.rasterizer.points[-1] == Point(40, 10)

    loop.tracker.on_release()
    loop.tick()
    assert mask_to_array(_mask(loop))[10, 25] > 0


def test_touch_start_teleports_brush(loop):
    loop.tracker.on_touch_start(150, 150)
    loop.tick()

    assert loop.brush.get_position() == Point(150, 150)
    # Stroke anchor is the touch point, not the old brush position
    assert loop.rasterizer.points[0] == Point(150, 150)


def test_touch_end_snaps_pointer_to_brush(loop):
    loop.tracker.on_touch_start(100, 100)
    loop.tick()
    loop.tracker.on_move(150, 100)
    run_frames(loop, 3)
    loop.tracker.on_touch_end()
    loop.tick()

    assert loop.tracker.position == loop.brush.get_position()
    assert loop.state == DrawState.IDLE


def test_on_frame_called_every_tick(options):
    frames = []
    loop = build_loop(options, on_frame=lambda: frames.append(loop.frame_count))

    run_frames(loop, 3)
    assert frames == [1, 2, 3]


def test_interface_layer_shows_guide(loop):
    loop.tracker.on_move(100, 100)
    run_frames(loop, 2)

    interface = loop.surfaces.get_surface(SurfaceRole.INTERFACE).image
    alpha = mask_to_array(interface)
    # Pointer dot
    assert alpha[100, 100] > 0


def test_missing_surfaces_never_raise(options):
    statuses = []
    loop = build_loop(options, width=0, height=0,
                      on_surface_status=lambda role, ok: statuses.append((role, ok)))

    loop.tracker.on_press()
    loop.tick()
    loop.tracker.on_move(50, 50)
    run_frames(loop, 3)
    loop.tracker.on_release()
    loop.tick()

    assert loop.state == DrawState.IDLE
    assert (SurfaceRole.INTERFACE, False) in statuses
    assert (SurfaceRole.TRANSIENT, False) in statuses
    # Each change is reported once
    assert len(statuses) == len(set(statuses))
    assert loop.surface_status()[SurfaceRole.INTERFACE] is False


def test_cancel_stroke(loop):
    loop.tracker.on_press()
    loop.tick()
    loop.tracker.on_move(30, 0)
    run_frames(loop, 3)

    loop.cancel_stroke()

    assert loop.state == DrawState.IDLE
    assert not loop.rasterizer.is_active
    assert is_mask_empty(loop.surfaces.get_surface(SurfaceRole.TRANSIENT).image)


def test_end_to_end_stroke():
    """Press at origin, drag to (100, 100), settle, release: one continuous band."""
    options = EditorOptions(brush_radius=20, lazy_radius=20, friction=10)
    loop = build_loop(options, width=200, height=200)

    loop.tracker.on_move(0, 0)
    loop.tracker.on_press()
    loop.tick()
    loop.tracker.on_move(5, 5)
    loop.tick()
    loop.tracker.on_move(100, 100)
    run_until_stable(loop)

    assert loop.state == DrawState.DRAWING
    assert distance(loop.brush.get_position(), Point(100, 100)) <= 20.0

    loop.tracker.on_release()
    loop.tick()

    alpha = mask_to_array(_mask(loop))
    for t in range(0, 101, 5):
        assert alpha[t, t] > 0, f"gap at ({t}, {t})"
    # Nothing painted far from the diagonal
    assert alpha[190, 10] == 0
    assert alpha[10, 190] == 0


def test_frame_scheduler_start_stop():
    ticks = []
    scheduler = FrameScheduler(lambda: ticks.append(1), interval_ms=5)

    assert not scheduler.is_running()
    scheduler.start()
    scheduler.start()
    assert scheduler.is_running()
    scheduler.stop()
    scheduler.stop()
    assert not scheduler.is_running()
