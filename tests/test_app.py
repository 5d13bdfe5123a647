"""Tests for the app module."""

import datetime
import json

import pytest

from roomview import app
from roomview.camera import CameraMode
from roomview.digitalclock import DigitalClock
from roomview.errors import ConfigurationError
from roomview.scene import RoomScene


@pytest.fixture
def window(qapp):
    scene = RoomScene(clock=DigitalClock(now=lambda: datetime.datetime(2024, 1, 1, 10, 20)))
    window = app.RoomViewerWindow(scene=scene)
    yield window
    window.close()
    window.deleteLater()


def test_window_construction(window):
    """The window hosts the view, the scene and the settings panel."""
    assert window.view.scene is window.scene
    assert window.settingsPanel.cameraMode() is CameraMode.Perspective
    assert window.view.dualCamera.mode is CameraMode.Perspective


def test_camera_setting_switches_projection(window):
    """Changing the camera setting switches the camera, and the other way round."""
    dualCamera = window.view.dualCamera

    window.settingsPanel.setCameraMode(CameraMode.Orthographic)
    assert dualCamera.mode is CameraMode.Orthographic
    assert window.view.vtkCamera().GetParallelProjection()

    dualCamera.switchTo(CameraMode.Perspective)
    assert window.settingsPanel.cameraMode() is CameraMode.Perspective


def test_neutral_setting(window):
    window.settingsPanel.setNeutral(True)
    assert window.scene.neutral
    window.settingsPanel.setNeutral(False)
    assert not window.scene.neutral


def test_custom_clock(window):
    """Custom clock mode starts from the shown time and follows the time setting."""
    panel = window.settingsPanel
    clock = window.scene.clock
    assert clock.text() == "10:20"

    panel.setClockMode("custom")
    assert not clock.synced
    assert panel.time() == (10, 20)

    panel.setTime(18, 5)
    assert clock.text() == "18:05"

    panel.setClockMode("current")
    assert clock.synced
    assert clock.text() == "10:20"


def test_reset_scene(window):
    """Reset Scene restores the settings and the initial view."""
    navigation = window.view.dualCamera.controls
    navigation.dollyTo(2.0, smooth=False)
    window.settingsPanel.setClockMode("custom")

    window.settingsWidget.resetButton.click()

    assert navigation.raw.radius == navigation.config.initialRadius
    assert window.scene.clock.synced


def test_start_orthographic(qapp):
    window = app.RoomViewerWindow(mode=CameraMode.Orthographic)
    assert window.view.dualCamera.mode is CameraMode.Orthographic
    assert window.settingsPanel.cameraMode() is CameraMode.Orthographic
    window.close()
    window.deleteLater()


def test_load_config(tmp_path):
    assert app.loadConfig(None).initialRadius == 5.0

    path = tmp_path / "navigation.json"
    path.write_text(json.dumps({"initialRadius": 3.0, "dragSensitivity": 0.5}))
    config = app.loadConfig(str(path))
    assert config.initialRadius == 3.0
    assert config.dragSensitivity == 0.5


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "navigation.json"
    path.write_text(json.dumps({"spinSpeed": 2.0}))
    with pytest.raises(ConfigurationError):
        app.loadConfig(str(path))


def test_parser():
    args = app.makeParser().parse_args(["--orthographic", "--fps", "30", "-v"])
    assert args.orthographic
    assert args.fps == 30
    assert args.verbose
    assert args.config is None
    assert not args.auto_quit


@pytest.mark.parametrize("fps", ["0", "-5", "fast"])
def test_parser_rejects_invalid_fps(fps):
    with pytest.raises(SystemExit):
        app.makeParser().parse_args(["--fps", fps])


def test_window_frame_rate(qapp):
    window = app.RoomViewerWindow(targetFps=30)
    assert window.view.frameClock.targetFps == 30
    window.close()
    window.deleteLater()
