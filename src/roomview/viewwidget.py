"""RoomViewWidget: a VTK view driven by a DualCamera instead of a VTK interactor style."""

import logging

import vtk
from qtpy.QtWidgets import QVBoxLayout, QWidget

from roomview.camera import CameraMode
from roomview.dualcamera import DualCamera
from roomview.frameclock import FrameClock
from roomview.vtkcamera import applyToVtkCamera

logger = logging.getLogger(__name__)


class RoomViewWidget(QWidget):
    """Renders a scene through a DualCamera at a fixed frame rate.

    The QVTK widget is the input surface: the navigation event filter sits
    on it and consumes navigation input before VTK sees it. VTK's own
    interactor style is replaced by vtkInteractorStyleUser, which does nothing.
    """

    def __init__(self, parent=None, mode=CameraMode.Perspective, config=None, projectionCount=None, targetFps=60):
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        try:
            from vtkmodules.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor
        except ImportError:
            from vtk.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor

        self._vtk_widget = QVTKRenderWindowInteractor(self)
        layout.addWidget(self._vtk_widget)

        self._render_window = self._vtk_widget.GetRenderWindow()
        self._render_window.SetMultiSamples(8)

        self._renderer = vtk.vtkRenderer()
        self._renderer.GradientBackgroundOn()
        self._renderer.SetBackground(25/255, 25/255, 30/255)
        self._renderer.SetBackground2(45/255, 45/255, 55/255)
        self._render_window.AddRenderer(self._renderer)

        self._light_kit = vtk.vtkLightKit()
        self._light_kit.SetKeyLightWarmth(0.5)
        self._light_kit.SetFillLightWarmth(0.5)
        self._light_kit.AddLightsToRenderer(self._renderer)

        interactor = self._render_window.GetInteractor()
        if interactor:
            interactor.SetInteractorStyle(vtk.vtkInteractorStyleUser())

        width, height = max(self.width(), 1), max(self.height(), 1)
        kwargs = {} if projectionCount is None else {"projectionCount": projectionCount}
        self.dualCamera = DualCamera(mode, width, height, **kwargs)
        self.dualCamera.initControls(self._vtk_widget, config)
        self._modeChangedSubscription = self.dualCamera.connectModeChanged(self._onModeChanged)

        self.scene = None
        self.frameClock = FrameClock(targetFps=targetFps, callback=self.onFrame)
        self._applyCamera()

    def renderWindow(self):
        return self._render_window

    def renderer(self):
        return self._renderer

    def vtkCamera(self):
        return self._renderer.GetActiveCamera()

    def vtkWidget(self):
        """Return the QVTK widget, the surface navigation input is read from."""
        return self._vtk_widget

    def setScene(self, scene):
        self.scene = scene
        scene.addToRenderer(self._renderer)

    def start(self):
        self.frameClock.start()

    def stop(self):
        self.frameClock.stop()

    def onFrame(self, elapsedMillis):
        """Advance the camera and scene by one frame and render."""
        self.dualCamera.update(elapsedMillis)
        if self.scene is not None:
            self.scene.update()
        self._applyCamera()
        self.forceRender()

    def _applyCamera(self):
        target = self.dualCamera.controls.damped.target
        applyToVtkCamera(self.dualCamera.getActiveCamera(), self.vtkCamera(), target)

    def _onModeChanged(self, mode):
        self._applyCamera()

    def forceRender(self):
        self._renderer.ResetCameraClippingRange()
        self._render_window.Render()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        width, height = self.width(), self.height()
        if width > 0 and height > 0:
            self.dualCamera.onResize(width, height)

    def closeEvent(self, event):
        self.frameClock.stop()
        self._modeChangedSubscription.release()
        self.dualCamera.dispose()
        super().closeEvent(event)
