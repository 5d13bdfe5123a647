"""Delta-based gesture accumulation for orbit, pan and zoom input.

GestureSampler is toolkit independent. NavigationEventFilter feeds it from
Qt events; tests and scripted tours can call it directly.
"""

import enum
import logging
import math
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


# Wheel normalization constants, in pixels.
LINE_HEIGHT = 40
PAGE_HEIGHT = 800


class WheelDeltaMode(enum.IntEnum):
    Pixel = 0
    Line = 1
    Page = 2


class PointerButton(enum.Enum):
    Primary = "primary"
    Middle = "middle"
    Secondary = "secondary"


def normalizeWheel(delta, deltaMode=WheelDeltaMode.Pixel):
    """Convert a wheel delta in any unit to pixels. Positive scrolls down/away from the user."""
    deltaMode = WheelDeltaMode(deltaMode)
    if deltaMode == WheelDeltaMode.Line:
        return delta * LINE_HEIGHT
    if deltaMode == WheelDeltaMode.Page:
        return delta * PAGE_HEIGHT
    return float(delta)


@dataclass
class GestureBindings:
    """Per-projection differences in how raw input maps to gestures."""

    invertWheel: bool = False


PERSPECTIVE_BINDINGS = GestureBindings(invertWheel=False)
# Orthographic zoom grows as the view gets closer, the opposite of a distance.
ORTHOGRAPHIC_BINDINGS = GestureBindings(invertWheel=True)


class GestureSample:
    """Input accumulated since the last frame."""

    __slots__ = ("dragDelta", "zoomDelta", "panMode")

    def __init__(self):
        self.dragDelta = np.zeros(2)
        self.zoomDelta = 0.0
        self.panMode = False

    def isEmpty(self):
        return self.zoomDelta == 0.0 and not self.dragDelta.any()

    def drain(self):
        """Return (dragDelta, zoomDelta, panMode) and reset both deltas to zero."""
        dragDelta = self.dragDelta.copy()
        zoomDelta = self.zoomDelta
        self.dragDelta[:] = 0.0
        self.zoomDelta = 0.0
        return dragDelta, zoomDelta, self.panMode


def _isFinitePoint(x, y):
    try:
        return math.isfinite(x) and math.isfinite(y)
    except TypeError:
        return False


class GestureSampler:
    """Turns pointer, touch and wheel input into a GestureSample.

    A drag session starts on pointer/touch down and ends on up, end or
    cancel. Moves outside a session are ignored, so a lost release event can
    at worst leave one session open until the next cancel or release.
    """

    def __init__(self, sample=None, bindings=None):
        self.sample = sample if sample is not None else GestureSample()
        self.bindings = bindings if bindings is not None else GestureBindings()
        self._previous = None

    @property
    def dragging(self):
        return self._previous is not None

    def setBindings(self, bindings):
        self.bindings = bindings

    def _begin(self, x, y, panMode):
        self.sample.panMode = panMode
        self._previous = (float(x), float(y))
        logger.debug("Drag started at (%g, %g) as %s", x, y, "pan" if panMode else "orbit")

    def _move(self, x, y):
        previousX, previousY = self._previous
        self.sample.dragDelta += (x - previousX, y - previousY)
        self._previous = (float(x), float(y))

    def pointerDown(self, x, y, button=PointerButton.Primary, ctrl=False, shift=False):
        if not _isFinitePoint(x, y):
            logger.warning("Ignoring pointer down at non-finite position (%r, %r)", x, y)
            return
        panMode = button in (PointerButton.Middle, PointerButton.Secondary) or ctrl or shift
        self._begin(x, y, panMode)

    def pointerMove(self, x, y):
        if not self.dragging or not _isFinitePoint(x, y):
            return
        self._move(x, y)

    def pointerUp(self):
        self.endDrag()

    def touchStart(self, points):
        points = list(points)
        if not points:
            return
        x, y = points[0]
        if not _isFinitePoint(x, y):
            return
        self._begin(x, y, len(points) > 1)

    def touchMove(self, points):
        points = list(points)
        if not self.dragging or not points:
            return
        x, y = points[0]
        if _isFinitePoint(x, y):
            self._move(x, y)

    def touchEnd(self):
        self.endDrag()

    def cancel(self):
        self.endDrag()

    def endDrag(self):
        if self._previous is not None:
            logger.debug("Drag ended")
        self._previous = None

    def wheel(self, delta, deltaMode=WheelDeltaMode.Pixel):
        try:
            pixels = normalizeWheel(delta, deltaMode)
        except ValueError:
            logger.warning("Ignoring wheel event with unknown delta mode %r", deltaMode)
            return
        if not math.isfinite(pixels):
            return
        if self.bindings.invertWheel:
            pixels = -pixels
        self.sample.zoomDelta += pixels
