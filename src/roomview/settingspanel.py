"""User-tweakable viewer settings and the dock widget that edits them."""

import logging

from qtpy.QtWidgets import QFormLayout, QGroupBox, QPushButton, QVBoxLayout, QWidget

from roomview.callbacks import CallbackRegistry
from roomview.camera import CameraMode
from roomview.propertyeditors import BoolEditor, EnumEditor, IntEditor
from roomview.propertyset import PropertyAttributes, PropertySet

logger = logging.getLogger(__name__)

CAMERA_MODES = [CameraMode.Perspective.value, CameraMode.Orthographic.value]
CLOCK_MODES = ["current", "custom"]


class SettingsPanel(object):
    """The viewer settings: camera mode, clock, style and a reset action.

    Constructed explicitly and handed to whatever wants to react to it.
    Every connect method returns a Subscription.
    """

    CAMERA_MODE_CHANGED_SIGNAL = "CAMERA_MODE_CHANGED_SIGNAL"
    CLOCK_MODE_CHANGED_SIGNAL = "CLOCK_MODE_CHANGED_SIGNAL"
    CLOCK_CHANGED_SIGNAL = "CLOCK_CHANGED_SIGNAL"
    NEUTRAL_CHANGED_SIGNAL = "NEUTRAL_CHANGED_SIGNAL"
    RESET_SIGNAL = "RESET_SIGNAL"

    def __init__(self, cameraMode=CameraMode.Perspective):
        self.callbacks = CallbackRegistry(
            [
                self.CAMERA_MODE_CHANGED_SIGNAL,
                self.CLOCK_MODE_CHANGED_SIGNAL,
                self.CLOCK_CHANGED_SIGNAL,
                self.NEUTRAL_CHANGED_SIGNAL,
                self.RESET_SIGNAL,
            ]
        )

        self.properties = PropertySet()
        self.properties.addProperty(
            "Camera", CameraMode(cameraMode).value, attributes=PropertyAttributes(enumNames=CAMERA_MODES)
        )
        self.properties.addProperty("Clock", "current", attributes=PropertyAttributes(enumNames=CLOCK_MODES))
        self.properties.addProperty("Hours", 0, attributes=PropertyAttributes(minimum=0, maximum=23))
        self.properties.addProperty("Minutes", 0, attributes=PropertyAttributes(minimum=0, maximum=59))
        self.properties.addProperty("Neutral", False)
        self._defaults = self.properties.snapshot()

        self.properties.connectPropertyChanged(self._onPropertyChanged)

    def cameraMode(self):
        return CameraMode(self.properties.getPropertyEnumValue("Camera"))

    def setCameraMode(self, mode):
        self.properties.setProperty("Camera", CameraMode(mode).value)

    def clockMode(self):
        return self.properties.getPropertyEnumValue("Clock")

    def setClockMode(self, mode):
        self.properties.setProperty("Clock", mode)

    def time(self):
        return self.properties.getProperty("Hours"), self.properties.getProperty("Minutes")

    def setTime(self, hours, minutes):
        """Show *hours*:*minutes* in the panel. Values are clamped to a valid time."""
        self.properties.setProperty("Hours", int(hours))
        self.properties.setProperty("Minutes", int(minutes))

    def isNeutral(self):
        return self.properties.getProperty("Neutral")

    def setNeutral(self, neutral):
        self.properties.setProperty("Neutral", bool(neutral))

    def reset(self):
        """Restore every setting except the camera mode to its default, then notify."""
        self.properties.restore(self._defaults, exclude=("Camera",))
        logger.debug("Settings reset to defaults")
        self.callbacks.process(self.RESET_SIGNAL)

    def connectCameraModeChanged(self, func):
        return self.callbacks.connect(self.CAMERA_MODE_CHANGED_SIGNAL, func)

    def connectClockModeChanged(self, func):
        return self.callbacks.connect(self.CLOCK_MODE_CHANGED_SIGNAL, func)

    def connectClockChanged(self, func):
        return self.callbacks.connect(self.CLOCK_CHANGED_SIGNAL, func)

    def connectNeutralChanged(self, func):
        return self.callbacks.connect(self.NEUTRAL_CHANGED_SIGNAL, func)

    def connectReset(self, func):
        return self.callbacks.connect(self.RESET_SIGNAL, func)

    def _onPropertyChanged(self, propertySet, propertyName):
        if propertyName == "Camera":
            self.callbacks.process(self.CAMERA_MODE_CHANGED_SIGNAL, self.cameraMode())
        elif propertyName == "Clock":
            self.callbacks.process(self.CLOCK_MODE_CHANGED_SIGNAL, self.clockMode())
        elif propertyName in ("Hours", "Minutes"):
            self.callbacks.process(self.CLOCK_CHANGED_SIGNAL, *self.time())
        elif propertyName == "Neutral":
            self.callbacks.process(self.NEUTRAL_CHANGED_SIGNAL, self.isNeutral())


class SettingsPanelWidget(QWidget):
    """Form view of a SettingsPanel. The time fields only show for a custom clock."""

    def __init__(self, panel, parent=None):
        super().__init__(parent)
        self.panel = panel
        properties = panel.properties
        layout = QVBoxLayout(self)

        settingsGroup = QGroupBox("Settings", self)
        settingsForm = QFormLayout(settingsGroup)
        self.cameraEditor = EnumEditor(properties, "Camera", labels=["Perspective", "Orthographic"])
        self.clockEditor = EnumEditor(properties, "Clock", labels=["Show Current Time", "Show Custom Time"])
        settingsForm.addRow("Camera", self.cameraEditor)
        settingsForm.addRow("Clock", self.clockEditor)

        self.timeGroup = QGroupBox("Time", self)
        timeForm = QFormLayout(self.timeGroup)
        self.hoursEditor = IntEditor(properties, "Hours")
        self.minutesEditor = IntEditor(properties, "Minutes")
        timeForm.addRow("Hours", self.hoursEditor)
        timeForm.addRow("Minutes", self.minutesEditor)

        styleGroup = QGroupBox("Style", self)
        styleForm = QFormLayout(styleGroup)
        self.neutralEditor = BoolEditor(properties, "Neutral")
        styleForm.addRow("Neutral", self.neutralEditor)

        actionsGroup = QGroupBox("Actions", self)
        actionsLayout = QVBoxLayout(actionsGroup)
        self.resetButton = QPushButton("Reset Scene", actionsGroup)
        self.resetButton.clicked.connect(panel.reset)
        actionsLayout.addWidget(self.resetButton)

        layout.addWidget(settingsGroup)
        layout.addWidget(self.timeGroup)
        layout.addWidget(styleGroup)
        layout.addWidget(actionsGroup)
        layout.addStretch(1)

        self._editors = [self.cameraEditor, self.clockEditor, self.hoursEditor, self.minutesEditor, self.neutralEditor]
        self._clockModeSubscription = panel.connectClockModeChanged(self._onClockModeChanged)
        self._onClockModeChanged(panel.clockMode())

    def _onClockModeChanged(self, mode):
        self.timeGroup.setHidden(mode != "custom")

    def dispose(self):
        self._clockModeSubscription.release()
        for editor in self._editors:
            editor.dispose()
