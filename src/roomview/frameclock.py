"""Qt timer that drives per-frame updates."""

import logging
import time

from qtpy import QtCore

logger = logging.getLogger(__name__)


class FrameClock(object):
    """Calls tick(elapsedMillis) at a target frame rate.

    elapsedMillis is the wall time since the previous tick, or 0 for the
    first tick after start(). Returning False from tick() stops the clock.
    """

    def __init__(self, targetFps=60, callback=None):
        '''
        Construct FrameClock. callback, if given, is called with the elapsed
        milliseconds on every tick.
        '''
        if not targetFps > 0:
            raise ValueError("targetFps must be positive, got %r" % targetFps)
        self.targetFps = targetFps
        self.callback = callback
        self.timer = QtCore.QTimer()
        self.timer.setSingleShot(True)
        self.timer.timeout.connect(self._timerEvent)
        self.lastTickTime = None
        self.frameCount = 0

    def start(self):
        '''
        Start the clock. The first tick reports zero elapsed time.
        '''
        self.lastTickTime = None
        self.timer.start(0)

    def stop(self):
        self.timer.stop()

    def isActive(self):
        return self.timer.isActive()

    def tick(self, elapsedMillis):
        '''
        Frame callback. Subclasses can override this method.
        '''
        if self.callback:
            return self.callback(elapsedMillis)

    def _schedule(self, elapsedTimeInSeconds):
        '''
        Schedule the next tick so that tick() plus the wait matches targetFps.
        '''
        fpsDelayMilliseconds = int(1000.0 / self.targetFps)
        elapsedMilliseconds = int(elapsedTimeInSeconds * 1000.0)
        waitMilliseconds = fpsDelayMilliseconds - elapsedMilliseconds
        self.timer.start(waitMilliseconds if waitMilliseconds > 0 else 1)

    def _timerEvent(self):
        startTime = time.monotonic()
        if self.lastTickTime is None:
            elapsedMillis = 0.0
        else:
            elapsedMillis = (startTime - self.lastTickTime) * 1000.0

        try:
            result = self.tick(elapsedMillis)
        except Exception:
            logger.exception("Frame tick failed, stopping the frame clock")
            self.stop()
            raise

        if result is not False:
            self.lastTickTime = startTime
            self.frameCount += 1
            self._schedule(time.monotonic() - startTime)
        else:
            self.stop()
