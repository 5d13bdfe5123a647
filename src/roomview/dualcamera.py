"""A camera that can switch between perspective and orthographic projection.

Both projections share one Navigation. Switching converts the visible
distance so the framing stays the same and only the projection changes:
azimuth, polar angle and target are carried over untouched.
"""

import enum
import logging

from roomview.callbacks import CallbackRegistry, SubscriptionScope
from roomview.camera import (
    CameraMode,
    OrthographicCamera,
    PerspectiveCamera,
    orbitRadiusToZoom,
    orthographicZoomToPerspectiveDistance,
    perspectiveDistanceToOrthographicZoom,
    zoomToOrbitRadius,
)
from roomview.errors import ConfigurationError, ControlsNotInitializedError
from roomview.navigation import Navigation
from roomview.navigationeventfilter import NavigationEventFilter

logger = logging.getLogger(__name__)


class ProjectionCount(enum.Enum):
    One = 1
    Two = 2


def coerceMode(mode):
    try:
        return CameraMode(mode)
    except ValueError:
        raise ConfigurationError("Unknown camera mode: %r" % (mode,)) from None


def _checkViewportSize(width, height):
    if not (width > 0 and height > 0):
        raise ValueError("Viewport size must be positive, got %rx%r" % (width, height))


class DualCamera:
    """Owns a perspective and an orthographic camera and the controls driving them.

    With projectionCount=ProjectionCount.One only the perspective camera
    exists and switching to orthographic is a configuration error.
    """

    MODE_CHANGED_SIGNAL = "MODE_CHANGED_SIGNAL"
    RESIZED_SIGNAL = "RESIZED_SIGNAL"
    RESET_SIGNAL = "RESET_SIGNAL"

    def __init__(
        self,
        mode=CameraMode.Perspective,
        width=800,
        height=600,
        fov=75.0,
        near=0.1,
        far=1000.0,
        orthographicSize=6.5,
        orthographicNear=-300.0,
        orthographicFar=300.0,
        projectionCount=ProjectionCount.Two,
    ):
        _checkViewportSize(width, height)
        mode = coerceMode(mode)
        projectionCount = ProjectionCount(projectionCount)
        if projectionCount is ProjectionCount.One and mode is not CameraMode.Perspective:
            raise ConfigurationError("A single-projection camera only supports perspective mode.")

        aspect = width / height
        self.projectionCount = projectionCount
        self.perspective = PerspectiveCamera(fov, aspect, near, far)
        self.orthographic = None
        if projectionCount is ProjectionCount.Two:
            self.orthographic = OrthographicCamera(orthographicSize, aspect, orthographicNear, orthographicFar)

        self._mode = mode
        self._width = width
        self._height = height
        self._controls = None
        self._eventFilter = None
        self._scope = SubscriptionScope()
        self.callbacks = CallbackRegistry([self.MODE_CHANGED_SIGNAL, self.RESIZED_SIGNAL, self.RESET_SIGNAL])

    @property
    def mode(self):
        return self._mode

    @property
    def current(self):
        return self.camera(self._mode)

    def getActiveCamera(self):
        """The camera the renderer should draw with."""
        return self.current

    def camera(self, mode):
        mode = coerceMode(mode)
        if mode is CameraMode.Perspective:
            return self.perspective
        if self.orthographic is None:
            raise ConfigurationError("This camera was created with a single projection.")
        return self.orthographic

    def viewportSize(self):
        return self._width, self._height

    @property
    def controls(self):
        if self._controls is None:
            raise ControlsNotInitializedError("controls")
        return self._controls

    def hasControls(self):
        return self._controls is not None

    def eventFilter(self):
        return self._eventFilter

    def initControls(self, surface, config=None):
        """Create the navigation and start listening to input on *surface*.

        Replaces any previously initialized controls.
        """
        if surface is None:
            raise ConfigurationError("initControls() requires a viewport surface.")
        if self._controls is not None:
            self.dispose()

        navigation = Navigation(self.current, config)
        if self._mode is CameraMode.Orthographic:
            self.orthographic.standoff = navigation.config.initialRadius
            navigation.reset(radius=self._initialRadius(navigation))
        elif self.orthographic is not None:
            self.orthographic.standoff = navigation.damped.radius

        eventFilter = NavigationEventFilter(navigation.sampler)
        self._scope.add(eventFilter.attach(surface))
        self._controls = navigation
        self._eventFilter = eventFilter

        width, height = surface.width(), surface.height()
        if width > 0 and height > 0:
            self.onResize(width, height)
        return navigation

    def update(self, elapsedMillis):
        """Advance the controls by one frame."""
        self.controls.update(elapsedMillis, min(self._width, self._height))

    def switchTo(self, mode):
        """Make *mode* the live projection. Switching to the current mode does nothing."""
        navigation = self.controls
        mode = coerceMode(mode)
        if mode is self._mode:
            return
        incoming = self.camera(mode)

        distance = self._perspectiveDistance(navigation)
        if mode is CameraMode.Orthographic:
            zoom = perspectiveDistanceToOrthographicZoom(distance, self.perspective.effectiveFov(), incoming.size)
            radius = zoomToOrbitRadius(zoom, navigation.config.zoomPerRadius)
            incoming.standoff = distance
        else:
            radius = distance

        navigation.setCamera(incoming, radius)
        incoming.updateProjectionMatrix()
        previous, self._mode = self._mode, mode
        logger.debug("Camera switched from %s to %s at distance %.4f", previous.value, mode.value, distance)
        self.callbacks.process(self.MODE_CHANGED_SIGNAL, mode)

    def _perspectiveDistance(self, navigation):
        """Perspective distance equivalent to what the live camera shows now."""
        if self._mode is CameraMode.Perspective:
            return navigation.damped.radius
        zoom = orbitRadiusToZoom(navigation.damped.radius, navigation.config.zoomPerRadius)
        return orthographicZoomToPerspectiveDistance(zoom, self.perspective.effectiveFov(), self.orthographic.size)

    def onResize(self, width, height):
        """Recompute both projections for a new viewport size."""
        _checkViewportSize(width, height)
        self._width = width
        self._height = height
        self.perspective.setViewportSize(width, height)
        if self.orthographic is not None:
            self.orthographic.setViewportSize(width, height)
        logger.debug("Viewport resized to %dx%d", width, height)
        self.callbacks.process(self.RESIZED_SIGNAL, width, height)

    def _initialRadius(self, navigation):
        """The configured initial distance expressed in the live camera's radius units."""
        distance = navigation.config.initialRadius
        if self._mode is CameraMode.Perspective:
            return distance
        zoom = perspectiveDistanceToOrthographicZoom(distance, self.perspective.effectiveFov(), self.orthographic.size)
        return zoomToOrbitRadius(zoom, navigation.config.zoomPerRadius)

    def resetView(self):
        """Return to the initial view, framed the same in either projection."""
        navigation = self.controls
        if self._mode is CameraMode.Orthographic:
            self.orthographic.standoff = navigation.config.initialRadius
        navigation.reset(radius=self._initialRadius(navigation))
        self.callbacks.process(self.RESET_SIGNAL)

    def connectModeChanged(self, func):
        return self.callbacks.connect(self.MODE_CHANGED_SIGNAL, func)

    def connectResized(self, func):
        return self.callbacks.connect(self.RESIZED_SIGNAL, func)

    def connectReset(self, func):
        return self.callbacks.connect(self.RESET_SIGNAL, func)

    def dispose(self):
        """Release input listeners and drop the controls."""
        self._scope.releaseAll()
        self._controls = None
        self._eventFilter = None
