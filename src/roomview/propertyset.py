"""Typed, observable values backing the settings panel."""

import copy
import logging
import re
from dataclasses import dataclass, fields
from typing import Optional, Sequence

from roomview.callbacks import CallbackRegistry

logger = logging.getLogger(__name__)


def cleanPropertyName(name):
    """Python identifier for a display name: lower case, non-word characters become underscores."""
    return re.sub(r"\W|^(?=\d)", "_", name).lower()


@dataclass
class PropertyAttributes:
    """Editing hints and limits for one property.

    A property with enumNames stores an index into them. Numeric values are
    clamped to [minimum, maximum].
    """

    minimum: float = -1e4
    maximum: float = 1e4
    singleStep: float = 1
    enumNames: Optional[Sequence[str]] = None

    @classmethod
    def coerce(cls, attributes):
        if attributes is None:
            return cls()
        if isinstance(attributes, cls):
            return attributes
        if isinstance(attributes, dict):
            known = {f.name for f in fields(cls)}
            unknown = set(attributes) - known
            if unknown:
                raise TypeError("Unknown property attributes: %s" % ", ".join(sorted(unknown)))
            return cls(**attributes)
        raise TypeError("Unsupported attributes type: %s" % type(attributes).__name__)


def _enumIndex(name, value, enumNames):
    if isinstance(value, str):
        try:
            return list(enumNames).index(value)
        except ValueError:
            raise ValueError("%s: %r is not one of %s" % (name, value, ", ".join(enumNames))) from None
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < len(enumNames):
            raise ValueError("%s: enum index %d out of range" % (name, value))
        return value
    raise ValueError("%s: enum values are names or indices, got %r" % (name, value))


def _castLike(name, value, previous):
    """Convert *value* to the type of *previous*, rejecting values that do not fit."""
    if isinstance(previous, bool):
        if not isinstance(value, (bool, int)):
            raise ValueError("%s expects a bool, got %r" % (name, value))
        return bool(value)
    if isinstance(previous, (int, float)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("%s expects a number, got %r" % (name, value))
        return type(previous)(value)
    if isinstance(previous, tuple):
        if not isinstance(value, tuple) or len(value) != len(previous):
            raise ValueError("%s expects %d values, got %r" % (name, len(previous), value))
        return value
    if type(value) is not type(previous):
        raise ValueError("%s expects %s, got %r" % (name, type(previous).__name__, value))
    return value


def coerceValue(name, value, previous, attributes):
    """The value stored for *name* when it is set to *value*."""
    if attributes.enumNames:
        return _enumIndex(name, value, attributes.enumNames)
    if isinstance(value, list):
        value = tuple(value)
    if previous is not None:
        value = _castLike(name, value, previous)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = type(value)(min(max(value, attributes.minimum), attributes.maximum))
    return value


class PropertySet(object):
    """Ordered named values with change notification.

    Every property can also be read and written as an attribute under its
    cleanPropertyName(), e.g. props.reset_scene for "Reset Scene".
    """

    PROPERTY_CHANGED_SIGNAL = "PROPERTY_CHANGED_SIGNAL"
    PROPERTY_ADDED_SIGNAL = "PROPERTY_ADDED_SIGNAL"
    PROPERTY_ATTRIBUTE_CHANGED_SIGNAL = "PROPERTY_ATTRIBUTE_CHANGED_SIGNAL"

    def __init__(self):
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_attributes", {})
        object.__setattr__(self, "_alternateNames", {})
        object.__setattr__(
            self,
            "callbacks",
            CallbackRegistry(
                [self.PROPERTY_CHANGED_SIGNAL, self.PROPERTY_ADDED_SIGNAL, self.PROPERTY_ATTRIBUTE_CHANGED_SIGNAL]
            ),
        )

    def __getattr__(self, name):
        alternateNames = self.__dict__.get("_alternateNames", {})
        if name in alternateNames:
            return self.getProperty(alternateNames[name])
        raise AttributeError("%s has no property or attribute %r" % (type(self).__name__, name))

    def __setattr__(self, name, value):
        if name in self._alternateNames:
            self.setProperty(self._alternateNames[name], value)
        else:
            object.__setattr__(self, name, value)

    def propertyNames(self):
        return list(self._values)

    def hasProperty(self, propertyName):
        return propertyName in self._values

    def addProperty(self, propertyName, value, attributes=None):
        alternateName = cleanPropertyName(propertyName)
        owner = self._alternateNames.get(alternateName)
        if owner is not None and owner != propertyName:
            raise ValueError("%r clashes with existing property %r as %r" % (propertyName, owner, alternateName))

        attributes = PropertyAttributes.coerce(attributes)
        self._values[propertyName] = coerceValue(propertyName, value, None, attributes)
        self._attributes[propertyName] = attributes
        self._alternateNames[alternateName] = propertyName
        self.callbacks.process(self.PROPERTY_ADDED_SIGNAL, self, propertyName)

    def getProperty(self, propertyName):
        return self._values[propertyName]

    def getPropertyEnumValue(self, propertyName):
        return self._attributes[propertyName].enumNames[self._values[propertyName]]

    def setProperty(self, propertyName, value):
        previous = self._values[propertyName]
        value = coerceValue(propertyName, value, previous, self._attributes[propertyName])
        if value == previous:
            return
        self._values[propertyName] = value
        self.callbacks.process(self.PROPERTY_CHANGED_SIGNAL, self, propertyName)

    def getPropertyAttribute(self, propertyName, attributeName):
        return getattr(self._attributes[propertyName], attributeName)

    def setPropertyAttribute(self, propertyName, attributeName, value):
        attributes = self._attributes[propertyName]
        if getattr(attributes, attributeName) == value:
            return
        setattr(attributes, attributeName, value)
        self.callbacks.process(self.PROPERTY_ATTRIBUTE_CHANGED_SIGNAL, self, propertyName, attributeName)

    def connectPropertyChanged(self, func):
        """Call func(propertySet, propertyName) after any value changes."""
        return self.callbacks.connect(self.PROPERTY_CHANGED_SIGNAL, func)

    def connectPropertyAdded(self, func):
        return self.callbacks.connect(self.PROPERTY_ADDED_SIGNAL, func)

    def connectPropertyAttributeChanged(self, func):
        return self.callbacks.connect(self.PROPERTY_ATTRIBUTE_CHANGED_SIGNAL, func)

    def connectPropertyValueChanged(self, propertyName, func):
        """Call func(newValue) whenever *propertyName* changes. Returns a Subscription."""
        if not self.hasProperty(propertyName):
            raise KeyError(propertyName)

        def onPropertyChanged(propertySet, changedName):
            if changedName == propertyName:
                func(propertySet.getProperty(propertyName))

        return self.connectPropertyChanged(onPropertyChanged)

    def snapshot(self):
        """Plain copy of every value, suitable for JSON and for restore()."""
        return {name: copy.deepcopy(value) for name, value in self._values.items()}

    def restore(self, values, exclude=()):
        """Set each property named in *values*, skipping *exclude* and names this set lacks."""
        for name, value in values.items():
            if name in exclude:
                continue
            if not self.hasProperty(name):
                logger.warning("Ignoring unknown property %r", name)
                continue
            self.setProperty(name, copy.deepcopy(value))
