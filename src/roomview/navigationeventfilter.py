"""Qt event filter feeding mouse, touch and wheel input to a GestureSampler."""

import logging

from qtpy.QtCore import QEvent, QObject, Qt

from roomview.callbacks import Subscription
from roomview.errors import ConfigurationError
from roomview.gestures import PointerButton, WheelDeltaMode

logger = logging.getLogger(__name__)

# Qt reports wheel rotation in eighths of a degree, 120 per notch.
ANGLE_DELTA_PER_NOTCH = 120.0


def eventPosition(event):
    """Local (x, y) of a mouse or wheel event on Qt5 and Qt6."""
    pos = event.position() if hasattr(event, "position") else event.pos()
    return pos.x(), pos.y()


def touchPoints(event):
    """Local (x, y) of every touch point in a touch event."""
    points = event.points() if hasattr(event, "points") else event.touchPoints()
    result = []
    for point in points:
        pos = point.position() if hasattr(point, "position") else point.pos()
        result.append((pos.x(), pos.y()))
    return result


def pointerButton(button):
    if button == Qt.LeftButton:
        return PointerButton.Primary
    if button == Qt.RightButton:
        return PointerButton.Secondary
    if button == Qt.MiddleButton:
        return PointerButton.Middle
    return None


class NavigationEventFilter(QObject):
    """Translates Qt input events on a viewport surface into gesture samples.

    Navigation events are consumed so the surface does not also scroll or
    open a context menu. Focus loss and window deactivation end the current
    drag so a release that never arrives cannot leave it stuck.
    """

    def __init__(self, sampler, wheelScrollLines=3):
        super().__init__()
        self.sampler = sampler
        self.wheelScrollLines = wheelScrollLines
        self._touchCount = 0
        self._surface = None

    def surface(self):
        return self._surface

    def attach(self, surface):
        """Install on *surface*. Returns a Subscription that uninstalls the filter."""
        if surface is None:
            raise ConfigurationError("A viewport surface is required to attach navigation input.")
        if self._surface is not None:
            raise RuntimeError("NavigationEventFilter is already attached to a surface.")

        surface.installEventFilter(self)
        if hasattr(surface, "setAttribute"):
            surface.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self._surface = surface

        def release():
            self.sampler.cancel()
            surface.removeEventFilter(self)
            self._surface = None

        return Subscription(release)

    def eventFilter(self, obj, event):
        eventType = event.type()

        if eventType in (QEvent.MouseButtonPress, QEvent.MouseButtonDblClick):
            return self.onMousePress(event)
        elif eventType == QEvent.MouseMove:
            return self.onMouseMove(event)
        elif eventType == QEvent.MouseButtonRelease:
            return self.onMouseRelease(event)
        elif eventType == QEvent.Wheel:
            return self.onWheel(event)
        elif eventType == QEvent.TouchBegin:
            return self.onTouchBegin(event)
        elif eventType == QEvent.TouchUpdate:
            return self.onTouchUpdate(event)
        elif eventType == QEvent.TouchEnd:
            return self.onTouchEnd(event)
        elif eventType == QEvent.TouchCancel:
            self._endTouch()
            return True
        elif eventType == QEvent.ContextMenu:
            return True
        elif eventType in (QEvent.FocusOut, QEvent.WindowDeactivate, QEvent.Hide):
            if self.sampler.dragging:
                logger.debug("Cancelling drag on event type %s", eventType)
            self.sampler.cancel()
        return False

    def onMousePress(self, event):
        button = pointerButton(event.button())
        if button is None:
            return False
        modifiers = event.modifiers()
        x, y = eventPosition(event)
        self.sampler.pointerDown(
            x,
            y,
            button=button,
            ctrl=bool(modifiers & Qt.ControlModifier),
            shift=bool(modifiers & Qt.ShiftModifier),
        )
        return True

    def onMouseMove(self, event):
        if not self.sampler.dragging:
            return False
        self.sampler.pointerMove(*eventPosition(event))
        return True

    def onMouseRelease(self, event):
        wasDragging = self.sampler.dragging
        self.sampler.pointerUp()
        return wasDragging

    def onWheel(self, event):
        pixelDelta = event.pixelDelta()
        angleDelta = event.angleDelta()
        if not pixelDelta.isNull():
            # Qt counts scrolling away from the user as positive, wheel deltas count it negative
            self.sampler.wheel(-pixelDelta.y(), WheelDeltaMode.Pixel)
        elif angleDelta.y():
            lines = -angleDelta.y() / ANGLE_DELTA_PER_NOTCH * self.wheelScrollLines
            self.sampler.wheel(lines, WheelDeltaMode.Line)
        return True

    def onTouchBegin(self, event):
        points = touchPoints(event)
        self._touchCount = len(points)
        self.sampler.touchStart(points)
        return True

    def onTouchUpdate(self, event):
        points = touchPoints(event)
        if len(points) != self._touchCount:
            # a finger was added or lifted, reclassify from the new first point
            self._touchCount = len(points)
            self.sampler.touchStart(points)
        else:
            self.sampler.touchMove(points)
        return True

    def onTouchEnd(self, event):
        self._endTouch()
        return True

    def _endTouch(self):
        self._touchCount = 0
        self.sampler.touchEnd()
