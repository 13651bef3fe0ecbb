"""
Lazy Mask Editor

A freehand mask painting canvas with a lazy brush for Qt6.
"""

__version__ = "1.0.0"
__author__ = "Lazy Mask Editor Contributors"

from .config import Config, EditorOptions

__all__ = [
    'Config',
    'EditorOptions',
]
