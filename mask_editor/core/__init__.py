"""Brush and curve geometry for the mask editor"""

from .geometry import Point, midpoint, distance
from .lazy_brush import LazyBrush
from .catenary import CatenaryResult, catenary_curve, catenary_parameter

__all__ = [
    'Point',
    'midpoint',
    'distance',
    'LazyBrush',
    'CatenaryResult',
    'catenary_curve',
    'catenary_parameter',
]
