"""Closed-interval bounds for the orbit radius, angles and pivot target."""

import math
from dataclasses import dataclass

import numpy as np

from roomview.errors import ConfigurationError


@dataclass(frozen=True)
class Bounds:
    """A closed interval [minimum, maximum].

    Either end may be infinite, which is how an unconstrained azimuth is
    expressed. An inverted or NaN interval is rejected immediately.
    """

    minimum: float = -math.inf
    maximum: float = math.inf

    def __post_init__(self):
        minimum = float(self.minimum)
        maximum = float(self.maximum)
        if math.isnan(minimum) or math.isnan(maximum):
            raise ConfigurationError("Bounds must not be NaN, got [%s, %s]." % (minimum, maximum))
        if minimum > maximum:
            raise ConfigurationError("Inverted bounds: minimum %g is greater than maximum %g." % (minimum, maximum))
        object.__setattr__(self, "minimum", minimum)
        object.__setattr__(self, "maximum", maximum)

    @classmethod
    def unbounded(cls):
        return cls(-math.inf, math.inf)

    @classmethod
    def coerce(cls, value, name="bounds"):
        """Build Bounds from a Bounds, a (min, max) pair or a {'min', 'max'} dict."""
        if isinstance(value, Bounds):
            return value
        if value is None:
            return cls.unbounded()
        if isinstance(value, dict):
            unknown = set(value) - {"min", "max"}
            if unknown:
                raise ConfigurationError("Unknown keys for %s: %s" % (name, ", ".join(sorted(unknown))))
            return cls(value.get("min", -math.inf), value.get("max", math.inf))
        try:
            minimum, maximum = value
        except (TypeError, ValueError):
            raise ConfigurationError("%s must be a (min, max) pair, got %r" % (name, value)) from None
        return cls(minimum, maximum)

    def clamp(self, value):
        return min(max(float(value), self.minimum), self.maximum)

    def clampFrom(self, value, previous):
        """Clamp *value* moved from *previous*.

        A previous value outside the interval is not snapped back: the result
        may stay outside, but never further out than *previous*.
        """
        minimum = min(self.minimum, float(previous))
        maximum = max(self.maximum, float(previous))
        return min(max(float(value), minimum), maximum)

    def contains(self, value):
        return self.minimum <= value <= self.maximum

    def isBounded(self):
        return math.isfinite(self.minimum) and math.isfinite(self.maximum)

    def asTuple(self):
        return (self.minimum, self.maximum)


def positiveBounds(value, name):
    """Coerce *value* to Bounds whose minimum is strictly positive."""
    bounds = Bounds.coerce(value, name)
    if bounds.minimum <= 0.0:
        raise ConfigurationError("%s minimum must be positive, got %g." % (name, bounds.minimum))
    return bounds


@dataclass(frozen=True)
class TargetBounds:
    """Per-axis bounds for the pivot point."""

    x: Bounds = Bounds()
    y: Bounds = Bounds()
    z: Bounds = Bounds()

    @classmethod
    def coerce(cls, value):
        if isinstance(value, TargetBounds):
            return value
        if value is None:
            return cls()
        if isinstance(value, dict):
            unknown = set(value) - {"x", "y", "z"}
            if unknown:
                raise ConfigurationError("Unknown target axes: %s" % ", ".join(sorted(unknown)))
            return cls(*[Bounds.coerce(value.get(axis), "target " + axis) for axis in "xyz"])
        axes = list(value)
        if len(axes) != 3:
            raise ConfigurationError("Target bounds need exactly three axes, got %d." % len(axes))
        return cls(*[Bounds.coerce(axis, "target " + name) for axis, name in zip(axes, "xyz")])

    def axes(self):
        return (self.x, self.y, self.z)

    def clamp(self, point):
        """Return a copy of *point* with each axis clamped to its interval."""
        return np.array([bounds.clamp(v) for bounds, v in zip(self.axes(), point)], dtype=float)

    def contains(self, point):
        return all(bounds.contains(v) for bounds, v in zip(self.axes(), point))


@dataclass(frozen=True)
class OrbitConstraints:
    """All bounds applied to the raw orbit state.

    radius applies to the perspective camera, where the orbit radius is a
    distance. zoom applies to the orthographic camera, where the orbit
    radius is converted to a magnification factor.
    """

    radius: Bounds
    polar: Bounds
    azimuth: Bounds
    target: TargetBounds
    zoom: Bounds

    def clampTarget(self, point):
        return self.target.clamp(point)
