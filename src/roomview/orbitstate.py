"""Spherical orbit state of a camera around its pivot."""

import math

import numpy as np


def sphericalToCartesian(radius, polar, azimuth):
    """Offset from the pivot for the given spherical coordinates.

    Y is the vertical axis. polar is measured from +Y and azimuth is measured
    around +Y starting at +Z.
    """
    sinPolarRadius = math.sin(polar) * radius
    return np.array(
        [
            sinPolarRadius * math.sin(azimuth),
            math.cos(polar) * radius,
            sinPolarRadius * math.cos(azimuth),
        ]
    )


class OrbitState:
    """Where a camera is looking from (radius, polar, azimuth) and at (target)."""

    __slots__ = ("radius", "polar", "azimuth", "target")

    def __init__(self, radius=1.0, polar=math.pi / 2, azimuth=0.0, target=(0.0, 0.0, 0.0)):
        self.radius = float(radius)
        self.polar = float(polar)
        self.azimuth = float(azimuth)
        self.target = np.array(target, dtype=float)

    def __repr__(self):
        return "OrbitState(radius=%.4f, polar=%.4f, azimuth=%.4f, target=%s)" % (
            self.radius,
            self.polar,
            self.azimuth,
            np.array2string(self.target, precision=4),
        )

    def __eq__(self, other):
        if not isinstance(other, OrbitState):
            return NotImplemented
        return (
            self.radius == other.radius
            and self.polar == other.polar
            and self.azimuth == other.azimuth
            and np.array_equal(self.target, other.target)
        )

    def copy(self):
        return OrbitState(self.radius, self.polar, self.azimuth, self.target.copy())

    def copyFrom(self, other):
        self.radius = other.radius
        self.polar = other.polar
        self.azimuth = other.azimuth
        self.target[:] = other.target

    def offset(self):
        return sphericalToCartesian(self.radius, self.polar, self.azimuth)

    def position(self):
        """Camera position in world coordinates."""
        return self.target + self.offset()

    def distanceTo(self, other):
        """Largest absolute component difference between two states."""
        return max(
            abs(self.radius - other.radius),
            abs(self.polar - other.polar),
            abs(self.azimuth - other.azimuth),
            float(np.max(np.abs(self.target - other.target))),
        )
