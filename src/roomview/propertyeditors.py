"""Qt editor widgets bound to a single PropertySet property."""

from qtpy.QtCore import Qt
from qtpy.QtWidgets import QCheckBox, QComboBox, QHBoxLayout, QSlider, QSpinBox, QWidget


class PropertyEditor(QWidget):
    """Base class for property editors.

    The editor writes user edits to the PropertySet and follows changes made
    elsewhere through a value-changed subscription, released by dispose().
    """

    def __init__(self, propertySet, propertyName, parent=None):
        super().__init__(parent)
        self.propertySet = propertySet
        self.propertyName = propertyName
        self._updating = False
        self._subscription = propertySet.connectPropertyValueChanged(propertyName, self._onPropertyValueChanged)

    def getValue(self):
        return self.propertySet.getProperty(self.propertyName)

    def setValue(self, value):
        if not self._updating:
            self._updating = True
            try:
                self.propertySet.setProperty(self.propertyName, value)
            finally:
                self._updating = False

    def updateFromPropertySet(self):
        self._updating = True
        try:
            self._updateWidget(self.getValue())
        finally:
            self._updating = False

    def dispose(self):
        self._subscription.release()

    def _onPropertyValueChanged(self, value):
        if not self._updating:
            self.updateFromPropertySet()

    def _updateWidget(self, value):
        pass


class BoolEditor(PropertyEditor):
    def __init__(self, propertySet, propertyName, parent=None):
        super().__init__(propertySet, propertyName, parent)
        self.checkbox = QCheckBox(self)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.checkbox)

        self.checkbox.toggled.connect(self._onToggled)
        self.updateFromPropertySet()

    def _updateWidget(self, value):
        self.checkbox.blockSignals(True)
        try:
            self.checkbox.setChecked(bool(value))
        finally:
            self.checkbox.blockSignals(False)

    def _onToggled(self, checked):
        if not self._updating:
            self.setValue(checked)


class EnumEditor(PropertyEditor):
    """Combo box editor for enum properties (integer with enumNames attribute)."""

    def __init__(self, propertySet, propertyName, labels=None, parent=None):
        super().__init__(propertySet, propertyName, parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        enumNames = propertySet.getPropertyAttribute(propertyName, "enumNames") or []
        self.comboBox = QComboBox(self)
        self.comboBox.addItems(list(labels) if labels else list(enumNames))
        self.comboBox.currentIndexChanged.connect(self._onIndexChanged)
        layout.addWidget(self.comboBox)

        self.updateFromPropertySet()

    def _updateWidget(self, value):
        self.comboBox.blockSignals(True)
        try:
            self.comboBox.setCurrentIndex(int(value))
        finally:
            self.comboBox.blockSignals(False)

    def _onIndexChanged(self, index):
        if not self._updating and index >= 0:
            self.setValue(index)


class IntEditor(PropertyEditor):
    """Spin box editor for integer properties, with a slider for small ranges."""

    def __init__(self, propertySet, propertyName, parent=None):
        super().__init__(propertySet, propertyName, parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        minimum = int(propertySet.getPropertyAttribute(propertyName, "minimum"))
        maximum = int(propertySet.getPropertyAttribute(propertyName, "maximum"))
        step = int(propertySet.getPropertyAttribute(propertyName, "singleStep"))

        self.spinbox = QSpinBox(self)
        self.spinbox.setRange(minimum, maximum)
        self.spinbox.setSingleStep(step)

        self.slider = None
        if 1 < maximum - minimum <= 1000:
            self.slider = QSlider(Qt.Horizontal, self)
            self.slider.setRange(minimum, maximum)
            self.slider.setSingleStep(step)
            layout.addWidget(self.slider, 1)
            self.slider.valueChanged.connect(self._onSliderChanged)

        layout.addWidget(self.spinbox)
        self.spinbox.valueChanged.connect(self._onSpinBoxChanged)
        self.updateFromPropertySet()

    def _updateWidget(self, value):
        value = int(value)
        self.spinbox.setValue(value)
        if self.slider is not None:
            self.slider.setValue(value)

    def _onSpinBoxChanged(self, value):
        if not self._updating:
            self.setValue(value)
            self.updateFromPropertySet()

    def _onSliderChanged(self, value):
        if not self._updating:
            self.setValue(value)
            self.updateFromPropertySet()
