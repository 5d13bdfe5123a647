"""Copy a roomview camera onto a vtkCamera."""

from roomview.camera import CameraMode


def applyToVtkCamera(camera, vtkCamera, target):
    """Pose and project *vtkCamera* like *camera*, looking at *target*.

    Clipping planes for the orthographic camera are left to the renderer's
    ResetCameraClippingRange(), VTK does not accept a negative near plane.
    """
    vtkCamera.SetPosition(*[float(v) for v in camera.position])
    vtkCamera.SetFocalPoint(*[float(v) for v in target])
    vtkCamera.SetViewUp(*[float(v) for v in camera.up()])

    if camera.mode is CameraMode.Orthographic:
        vtkCamera.ParallelProjectionOn()
        vtkCamera.SetParallelScale((camera.top - camera.bottom) / (2.0 * camera.zoom))
    else:
        vtkCamera.ParallelProjectionOff()
        vtkCamera.SetViewAngle(camera.effectiveFov())
        vtkCamera.SetClippingRange(camera.near, camera.far)
