"""
Mask editor canvas subpackage.

Provides modular components for the lazy brush mask editor:
- pointer_input: Pointer tracking and Qt event routing
- surface_manager: Persistent, transient and interface surfaces
- stroke_rasterizer: Stroke buffer and smoothed path painting
- guide_renderer: Brush indicator and catenary guide
- render_loop: Per-frame state machine and frame scheduler
"""

from .pointer_input import SyncMode, PointerInputTracker, QtPointerAdapter
from .surface_manager import SurfaceRole, Surface, SurfaceManager
from .stroke_rasterizer import (
    StrokePointBuffer,
    StrokeRasterizer,
    build_stroke_path,
    create_stroke_pen
)
from .guide_renderer import GuideCurveRenderer, catenary_to_path, guide_tension
from .render_loop import DrawState, FrameScheduler, RenderLoop

__all__ = [
    # Input
    'SyncMode',
    'PointerInputTracker',
    'QtPointerAdapter',
    # Surfaces
    'SurfaceRole',
    'Surface',
    'SurfaceManager',
    # Strokes
    'StrokePointBuffer',
    'StrokeRasterizer',
    'build_stroke_path',
    'create_stroke_pen',
    # Guide
    'GuideCurveRenderer',
    'catenary_to_path',
    'guide_tension',
    # Frame loop
    'DrawState',
    'FrameScheduler',
    'RenderLoop',
]
