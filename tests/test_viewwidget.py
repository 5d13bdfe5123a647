"""Tests for the viewwidget module."""

import pytest
import vtk

from roomview.camera import CameraMode
from roomview.dualcamera import DualCamera
from roomview.navigationeventfilter import NavigationEventFilter
from roomview.scene import RoomScene


@pytest.fixture
def view(qapp, monkeypatch):
    from roomview.viewwidget import RoomViewWidget

    widget = RoomViewWidget()
    renders = []
    monkeypatch.setattr(widget, "forceRender", lambda: renders.append(True))
    widget.renders = renders
    yield widget
    widget.close()
    widget.deleteLater()


def test_view_construction(view):
    """The view owns a renderer and a DualCamera with controls on the QVTK widget."""
    assert isinstance(view.renderWindow(), vtk.vtkRenderWindow)
    assert isinstance(view.renderer(), vtk.vtkRenderer)
    assert isinstance(view.dualCamera, DualCamera)
    assert view.dualCamera.hasControls()
    assert isinstance(view.dualCamera.eventFilter(), NavigationEventFilter)
    assert view.dualCamera.eventFilter().surface() is view.vtkWidget()


def test_vtk_camera_follows_damped_state(view):
    """The vtkCamera is posed at the navigation camera looking at the damped target."""
    navigation = view.dualCamera.controls
    view.onFrame(16.0)

    vtkCamera = view.vtkCamera()
    assert vtkCamera.GetPosition() == pytest.approx(tuple(navigation.camera.position))
    assert vtkCamera.GetFocalPoint() == pytest.approx(tuple(navigation.damped.target))
    assert not vtkCamera.GetParallelProjection()
    assert vtkCamera.GetViewAngle() == pytest.approx(view.dualCamera.perspective.effectiveFov())
    assert view.renders == [True]


def test_switch_to_orthographic(view):
    """Switching modes turns on parallel projection at the converted zoom."""
    view.dualCamera.switchTo(CameraMode.Orthographic)

    vtkCamera = view.vtkCamera()
    ortho = view.dualCamera.orthographic
    assert vtkCamera.GetParallelProjection()
    assert vtkCamera.GetParallelScale() == pytest.approx(ortho.visibleHeight() / 2.0)

    view.dualCamera.switchTo(CameraMode.Perspective)
    assert not vtkCamera.GetParallelProjection()


def test_set_scene_and_frame(view):
    """A frame updates the scene as well as the camera."""
    scene = RoomScene()
    view.setScene(scene)
    assert view.renderer().GetViewProps().GetNumberOfItems() == len(scene.actors) + 1

    view.onFrame(16.0)
    assert view.renders == [True]


def test_close_disposes_controls(qapp):
    """Closing the view stops the frame clock and removes the event filter."""
    from roomview.viewwidget import RoomViewWidget

    widget = RoomViewWidget()
    eventFilter = widget.dualCamera.eventFilter()
    widget.close()
    assert not widget.frameClock.isActive()
    assert not widget.dualCamera.hasControls()
    assert eventFilter.surface() is None
    widget.deleteLater()
