"""The digital clock over the shelf."""

import datetime
import logging

import vtk

logger = logging.getLogger(__name__)


def formatTime(hours, minutes):
    return "%02d:%02d" % (hours, minutes)


class DigitalClock(object):
    """Shows a time as a 3D text actor, either following wall time or fixed.

    While synced, update() copies the local wall time into the clock. A
    custom time can only be set with setTime() after stopUserTimeSync().
    """

    def __init__(self, sync=True, now=None):
        self._now = now or datetime.datetime.now
        self.hours = 0
        self.minutes = 0
        self.synced = False

        self.actor = vtk.vtkTextActor3D()
        self.actor.SetInput(formatTime(0, 0))
        textProperty = self.actor.GetTextProperty()
        textProperty.SetFontSize(48)
        textProperty.SetColor(0.8, 0.87, 0.75)
        textProperty.SetJustificationToCentered()
        textProperty.SetVerticalJustificationToCentered()

        if sync:
            self.syncWithUserTime()

    def syncWithUserTime(self, setNow=True):
        self.synced = True
        if setNow:
            self.update()

    def stopUserTimeSync(self):
        self.synced = False

    def update(self):
        """Copy the wall time into the clock when synced. Called once per frame."""
        if self.synced:
            now = self._now()
            self.setTime(now.hour, now.minute)

    def setTime(self, hours, minutes):
        if not (0 <= hours <= 23 and 0 <= minutes <= 59):
            raise ValueError("Invalid clock time %r:%r" % (hours, minutes))
        if hours == self.hours and minutes == self.minutes and self.actor.GetInput() == formatTime(hours, minutes):
            return
        self.hours = hours
        self.minutes = minutes
        self.actor.SetInput(formatTime(hours, minutes))
        logger.debug("Clock set to %s", formatTime(hours, minutes))

    def text(self):
        return formatTime(self.hours, self.minutes)
