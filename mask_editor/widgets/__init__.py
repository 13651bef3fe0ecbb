"""UI Widgets for the mask editor"""

from .mask_editor_canvas import MaskEditorCanvas
from .editor_toolbar import EditorToolbar
from .main_window import MainWindow

__all__ = [
    'MaskEditorCanvas',
    'EditorToolbar',
    'MainWindow',
]
