"""Shared pytest fixtures for the mask editor tests."""

import os

# Headless Qt for CI and terminals without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from mask_editor.config import EditorOptions
from mask_editor.core.geometry import Point
from mask_editor.core.lazy_brush import LazyBrush
from mask_editor.widgets.mask_editor import (
    PointerInputTracker,
    RenderLoop,
    SurfaceManager,
)


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Single QApplication for the whole session."""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def options():
    """Options from the end-to-end drawing scenario."""
    return EditorOptions(brush_radius=20, lazy_radius=20, friction=10)


def build_loop(options, width=200, height=200, dpr=1.0, start=(0.0, 0.0), **callbacks):
    """Wire a render loop around fresh components without a widget."""
    start_point = Point(*start)
    brush = LazyBrush(radius=options.lazy_radius, enabled=options.enabled, initial_point=start_point)
    tracker = PointerInputTracker(initial_position=start_point)
    surfaces = SurfaceManager(width, height, device_pixel_ratio=dpr,
                              clear_on_resize=options.clear_on_resize)
    return RenderLoop(brush, tracker, surfaces, options, **callbacks)


@pytest.fixture
def loop(options):
    """Render loop on a 200x200 logical canvas at device scale 1."""
    return build_loop(options)


def run_frames(loop, count):
    for _ in range(count):
        loop.tick()


def run_until_stable(loop, max_frames=500):
    """Tick until the brush stops moving (or max_frames)."""
    for frame in range(max_frames):
        loop.tick()
        if not loop.brush.has_moved():
            return frame + 1
    return max_frames
