"""Tests for the editor toolbar and main window wiring."""

import json

import pytest

from mask_editor.config import Config, EditorOptions
from mask_editor.widgets import EditorToolbar, MainWindow


@pytest.fixture
def user_home(tmp_path, monkeypatch):
    monkeypatch.setenv("MASK_EDITOR_HOME", str(tmp_path))
    return tmp_path


def test_toolbar_shows_options_without_emitting():
    toolbar = EditorToolbar()
    emitted = []
    toolbar.brush_radius_changed.connect(emitted.append)
    toolbar.smoothing_toggled.connect(emitted.append)

    toolbar.set_options(EditorOptions(brush_radius=42, lazy_radius=7, friction=33, enabled=False))

    assert emitted == []
    assert toolbar.brush_radius == 42
    assert toolbar.lazy_radius == 7
    assert toolbar.friction == 33
    assert not toolbar.smoothing_enabled


def test_toolbar_drives_canvas_options(user_home):
    window = MainWindow(options=EditorOptions())
    canvas = window.canvas

    window.toolbar._brush_slider.setValue(40)
    window.toolbar._lazy_slider.setValue(25)
    window.toolbar._friction_slider.setValue(60)
    window.toolbar._smoothing_check.setChecked(False)

    assert canvas.brush_radius == 40
    assert canvas.lazy_radius == 25
    assert canvas.friction == 60
    assert not canvas.enabled


def test_clear_button_clears_canvas(user_home):
    window = MainWindow(options=EditorOptions())
    cleared = []
    window.canvas.mask_cleared.connect(lambda: cleared.append(True))

    window.toolbar._clear_btn.click()

    assert cleared == [True]


def test_missing_background_reports_failure(user_home, tmp_path):
    window = MainWindow(options=EditorOptions())
    assert not window.load_background(tmp_path / "missing.png")


def test_close_persists_options(user_home):
    window = MainWindow(options=EditorOptions(brush_radius=33))
    window.show()
    window.close()

    stored = json.loads(Config.get_settings_file().read_text(encoding="utf-8"))
    assert stored["editor"]["brush_radius"] == 33
    assert not window.canvas.is_running()
