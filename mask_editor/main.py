"""
Lazy Mask Editor - Main Entry Point

Freehand mask painting with a lazy brush.

Usage:
    python -m mask_editor.main [background_image]
"""

import sys
from pathlib import Path
from typing import List, Optional

from PyQt6.QtWidgets import QApplication

from .config import Config
from .utils.logging_config import LoggingConfig


def setup_application(argv: Optional[List[str]] = None) -> QApplication:
    """
    Initialize and configure the Qt application

    Returns:
        Configured QApplication instance
    """
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)

    # Set application metadata
    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)

    # Note: High DPI scaling is enabled by default in PyQt6

    return app


def _parse_image_path(argv: List[str]) -> Optional[Path]:
    """First non-option argument, if any, is the background image."""
    for arg in argv[1:]:
        if not arg.startswith('-'):
            return Path(arg)
    return None


def main():
    """
    Main entry point for the Lazy Mask Editor

    Creates the application, sets up the main window, and runs the event loop.
    """
    # Setup logging first
    LoggingConfig.setup_logging(Config.get_log_dir())

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")
    logger.info(f"Settings: {Config.get_settings_file()}")

    app = setup_application()

    image_path = _parse_image_path(sys.argv)
    options = Config.load_editor_options()
    logger.info(
        f"Brush radius {options.brush_radius}, lazy radius {options.lazy_radius}, "
        f"friction {options.friction}, smoothing {'on' if options.enabled else 'off'}"
    )

    # Create and show main window
    from .widgets.main_window import MainWindow
    window = MainWindow(image_path=image_path, options=options)
    window.show()

    logger.info("Application started successfully!")

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
