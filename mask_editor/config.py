"""
Global configuration for the Lazy Mask Editor

Holds application constants, editor defaults and the persisted brush settings.
"""

import json
import logging
import os
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Final, Optional

logger = logging.getLogger(__name__)


@dataclass
class EditorOptions:
    """
    Options recognised by the mask editor canvas.

    Attributes:
        brush_radius: Painted brush radius in logical pixels
        lazy_radius: Smoothing string length in logical pixels
        friction: Drawing lag on a 0-100 scale (divided by 100 while drawing)
        enabled: Lazy smoothing on/off (off = brush tracks pointer 1:1)
        clear_signal: Opaque value; any change clears the mask
        clear_on_resize: Drop the mask when the surfaces are resized
    """
    brush_radius: float = 27.5
    lazy_radius: float = 10.0
    friction: float = 10.0
    enabled: bool = True
    clear_signal: object = 0
    clear_on_resize: bool = False

    def __post_init__(self):
        if not self.brush_radius > 0:
            raise ValueError(f"brush_radius must be positive, got {self.brush_radius}")
        if not self.lazy_radius > 0:
            raise ValueError(f"lazy_radius must be positive, got {self.lazy_radius}")
        self.friction = max(0.0, min(100.0, float(self.friction)))

    @property
    def drawing_friction(self) -> float:
        """Friction coefficient used while a stroke is in progress."""
        return self.friction / 100.0


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Lazy Mask Editor"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "LazyMaskEditor"

    # Surface resolution caps
    DRAW_MAX_DPI: Final[float] = 2.0       # Transient and persistent surfaces
    INTERFACE_MAX_DPI: Final[float] = 3.0  # Guide/interface surface

    # Container size before the first measurement
    DEFAULT_CANVAS_WIDTH: Final[int] = 1280
    DEFAULT_CANVAS_HEIGHT: Final[int] = 768

    # Scheduling
    FRAME_INTERVAL_MS: Final[int] = 16     # ~60 fps
    RESIZE_DEBOUNCE_MS: Final[int] = 500   # Settle delay before reallocating surfaces

    # Colors
    COLOR_PRIMARY: Final[str] = "#ffffff"     # Brush disc and mask paint
    COLOR_BLACK: Final[str] = "#0a0302"       # Pointer dot
    COLOR_CATENARY: Final[str] = "#0a0302"    # Guide under tension
    COLOR_GUIDE_IDLE: Final[tuple] = (0, 0, 0, 77)  # rgba(0,0,0,0.3)
    COLOR_BRUSH_CENTER: Final[str] = "#222222"

    # Indicator sizes (logical px)
    POINTER_DOT_RADIUS: Final[float] = 4.0
    BRUSH_DOT_RADIUS: Final[float] = 2.0
    GUIDE_LINE_WIDTH: Final[float] = 1.5
    GUIDE_DASH: Final[float] = 5.0
    GUIDE_SLACK_EPSILON: Final[float] = 0.1

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 1280
    DEFAULT_WINDOW_HEIGHT: Final[int] = 860

    SETTINGS_FILE_NAME: Final[str] = "settings.json"
    LOG_FILE_NAME: Final[str] = "mask_editor.log"

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS)
        or .local/share (Linux). MASK_EDITOR_HOME overrides all of them.
        """
        override = os.environ.get('MASK_EDITOR_HOME')
        if override:
            user_dir = Path(override)
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / 'LazyMaskEditor'
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / 'LazyMaskEditor'
        else:
            user_dir = Path.home() / '.local' / 'share' / 'LazyMaskEditor'

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get the log directory"""
        return cls.get_user_data_dir() / 'logs'

    @classmethod
    def get_settings_file(cls) -> Path:
        """Get settings JSON file path"""
        return cls.get_user_data_dir() / cls.SETTINGS_FILE_NAME

    @classmethod
    def load_editor_options(cls, settings_file: Optional[Path] = None) -> EditorOptions:
        """
        Load brush settings saved by a previous session

        Args:
            settings_file: Override for the settings path

        Returns:
            EditorOptions (defaults if the file is missing or invalid)
        """
        settings_file = settings_file or cls.get_settings_file()
        if not settings_file.exists():
            return EditorOptions()

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                settings = json.load(f)
            known = {f.name for f in fields(EditorOptions)} - {'clear_signal'}
            stored = settings.get('editor', {})
            return EditorOptions(**{k: v for k, v in stored.items() if k in known})
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Could not load editor settings from {settings_file}: {e}")
            return EditorOptions()

    @classmethod
    def save_editor_options(cls, options: EditorOptions,
                            settings_file: Optional[Path] = None) -> bool:
        """
        Save brush settings

        Args:
            options: Options to persist (clear_signal is not stored)
            settings_file: Override for the settings path

        Returns:
            bool: True if saved successfully, False otherwise
        """
        settings_file = settings_file or cls.get_settings_file()
        try:
            settings_file.parent.mkdir(parents=True, exist_ok=True)

            # Keep any unrelated keys already in the file
            settings = {}
            if settings_file.exists():
                try:
                    with open(settings_file, 'r', encoding='utf-8') as f:
                        settings = json.load(f)
                except (OSError, ValueError):
                    settings = {}
                if not isinstance(settings, dict):
                    settings = {}

            stored = asdict(options)
            stored.pop('clear_signal', None)
            settings['editor'] = stored

            with open(settings_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            return True
        except OSError as e:
            logger.warning(f"Could not save editor settings to {settings_file}: {e}")
            return False


# Export for convenient imports
__all__ = ['Config', 'EditorOptions']
