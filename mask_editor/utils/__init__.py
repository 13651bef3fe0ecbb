"""Utility functions for the mask editor"""

from .coordinate_utils import CoordinateConverter, capped_scale, physical_size
from .logging_config import LoggingConfig

__all__ = [
    'CoordinateConverter',
    'capped_scale',
    'physical_size',
    'LoggingConfig',
]
