"""Perspective and orthographic camera models.

Conventions follow the usual GL camera: the camera looks down its local -Z
axis with +Y up, and world +Y is vertical. Angles for the field of view are
in degrees, everything else is in radians.
"""

import enum
import math

import numpy as np

WORLD_UP = np.array([0.0, 1.0, 0.0])

# Orbit radius units per orthographic zoom unit. The orbit radius is a
# distance for the perspective camera and a magnification for the
# orthographic one, these two functions are the only place they meet.
ORTHOGRAPHIC_ZOOM_PER_RADIUS = 1.0


class CameraMode(enum.Enum):
    Perspective = "perspective"
    Orthographic = "orthographic"


def orbitRadiusToZoom(radius, scale=ORTHOGRAPHIC_ZOOM_PER_RADIUS):
    return radius * scale


def zoomToOrbitRadius(zoom, scale=ORTHOGRAPHIC_ZOOM_PER_RADIUS):
    return zoom / scale


def visibleHeightAtDistance(distance, fov):
    """Height of the perspective frustum slice *distance* in front of the camera."""
    return 2.0 * distance * math.tan(math.radians(fov) / 2.0)


def distanceForVisibleHeight(height, fov):
    return height / (2.0 * math.tan(math.radians(fov) / 2.0))


def perspectiveDistanceToOrthographicZoom(distance, fov, size):
    """Orthographic zoom that shows the same height as a perspective view at *distance*.

    size is the orthographic frustum height at zoom 1.
    """
    return size / visibleHeightAtDistance(distance, fov)


def orthographicZoomToPerspectiveDistance(zoom, fov, size):
    """Perspective distance that shows the same height as an orthographic view at *zoom*."""
    return distanceForVisibleHeight(size / zoom, fov)


def lookAtRotation(eye, target, up=WORLD_UP):
    """Rotation whose columns are the camera right, up and backward axes in world space."""
    z = np.asarray(eye, dtype=float) - np.asarray(target, dtype=float)
    if not z.any():
        z = np.array([0.0, 0.0, 1.0])
    z = z / np.linalg.norm(z)

    x = np.cross(up, z)
    if np.linalg.norm(x) < 1e-12:
        # looking straight along up, nudge the view direction
        nudge = np.array([1e-4, 0.0, 0.0]) if abs(up[2]) == 1.0 else np.array([0.0, 0.0, 1e-4])
        z = z + nudge
        z = z / np.linalg.norm(z)
        x = np.cross(up, z)
    x = x / np.linalg.norm(x)
    y = np.cross(z, x)
    return np.column_stack([x, y, z])


def perspectiveMatrix(left, right, top, bottom, near, far):
    m = np.zeros((4, 4))
    m[0, 0] = 2.0 * near / (right - left)
    m[1, 1] = 2.0 * near / (top - bottom)
    m[0, 2] = (right + left) / (right - left)
    m[1, 2] = (top + bottom) / (top - bottom)
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -2.0 * far * near / (far - near)
    m[3, 2] = -1.0
    return m


def orthographicMatrix(left, right, top, bottom, near, far):
    w = 1.0 / (right - left)
    h = 1.0 / (top - bottom)
    p = 1.0 / (far - near)
    m = np.eye(4)
    m[0, 0] = 2.0 * w
    m[1, 1] = 2.0 * h
    m[2, 2] = -2.0 * p
    m[0, 3] = -(right + left) * w
    m[1, 3] = -(top + bottom) * h
    m[2, 3] = -(far + near) * p
    return m


class Camera:
    """Pose and projection shared by both camera kinds."""

    mode = None

    def __init__(self, near, far):
        if near == far:
            raise ValueError("near and far clip planes must differ, both are %g" % near)
        self.near = float(near)
        self.far = float(far)
        self.zoom = 1.0
        self.position = np.zeros(3)
        self.rotation = np.eye(3)
        self.projectionMatrixDirty = True
        self._projectionMatrix = np.eye(4)

    def lookAt(self, target, up=WORLD_UP):
        self.rotation = lookAtRotation(self.position, target, up)

    def right(self):
        return self.rotation[:, 0].copy()

    def up(self):
        return self.rotation[:, 1].copy()

    def viewDirection(self):
        return -self.rotation[:, 2]

    def markProjectionDirty(self):
        self.projectionMatrixDirty = True

    def projectionMatrix(self):
        if self.projectionMatrixDirty:
            self.updateProjectionMatrix()
        return self._projectionMatrix

    def updateProjectionMatrix(self):
        self._projectionMatrix = self.computeProjectionMatrix()
        self.projectionMatrixDirty = False

    def computeProjectionMatrix(self):
        raise NotImplementedError


class PerspectiveCamera(Camera):
    mode = CameraMode.Perspective

    def __init__(self, fov=75.0, aspect=1.0, near=0.1, far=1000.0):
        super().__init__(near, far)
        if not 0.0 < fov < 180.0:
            raise ValueError("fov must be between 0 and 180 degrees, got %g" % fov)
        self.fov = float(fov)
        self.aspect = float(aspect)

    def __repr__(self):
        return "PerspectiveCamera(fov=%g, aspect=%g, near=%g, far=%g, zoom=%g)" % (
            self.fov,
            self.aspect,
            self.near,
            self.far,
            self.zoom,
        )

    def effectiveFov(self):
        """Vertical field of view after zoom, in degrees."""
        return math.degrees(2.0 * math.atan(math.tan(math.radians(self.fov) / 2.0) / self.zoom))

    def setViewportSize(self, width, height):
        self.aspect = width / height
        self.updateProjectionMatrix()

    def panScale(self, radius):
        return radius * 0.1

    def computeProjectionMatrix(self):
        top = self.near * math.tan(math.radians(self.fov) / 2.0) / self.zoom
        height = 2.0 * top
        width = self.aspect * height
        left = -0.5 * width
        return perspectiveMatrix(left, left + width, top, top - height, self.near, self.far)


class OrthographicCamera(Camera):
    """Parallel projection with a fixed world-space frustum height.

    size is the visible height at zoom 1; the horizontal extent follows the
    viewport aspect ratio. standoff is how far from the pivot the camera
    sits, which only matters for clipping.
    """

    mode = CameraMode.Orthographic

    def __init__(self, size=6.5, aspect=1.0, near=-300.0, far=300.0, standoff=5.0):
        super().__init__(near, far)
        if size <= 0.0:
            raise ValueError("orthographic size must be positive, got %g" % size)
        self.size = float(size)
        self.standoff = float(standoff)
        self.left = self.right = self.top = self.bottom = 0.0
        self._setExtents(aspect)

    def __repr__(self):
        return "OrthographicCamera(left=%g, right=%g, top=%g, bottom=%g, near=%g, far=%g, zoom=%g)" % (
            self.left,
            self.right,
            self.top,
            self.bottom,
            self.near,
            self.far,
            self.zoom,
        )

    @property
    def aspect(self):
        return (self.right - self.left) / (self.top - self.bottom)

    def _setExtents(self, aspect):
        self.left = self.size * aspect / -2.0
        self.right = self.size * aspect / 2.0
        self.top = self.size / 2.0
        self.bottom = self.size / -2.0

    def setViewportSize(self, width, height):
        self._setExtents(width / height)
        self.updateProjectionMatrix()

    def visibleHeight(self):
        return (self.top - self.bottom) / self.zoom

    def panScale(self, radius):
        return (1.0 / self.zoom) * 0.5

    def computeProjectionMatrix(self):
        dx = (self.right - self.left) / (2.0 * self.zoom)
        dy = (self.top - self.bottom) / (2.0 * self.zoom)
        cx = (self.right + self.left) / 2.0
        cy = (self.top + self.bottom) / 2.0
        return orthographicMatrix(cx - dx, cx + dx, cy + dy, cy - dy, self.near, self.far)
