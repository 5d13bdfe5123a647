"""Orbit navigation: turns accumulated gestures into a smoothed camera pose.

Each Navigation keeps two OrbitState instances. The raw state follows input
immediately and is clamped at every mutation; the damped state chases it
once per frame and is what the camera actually shows.
"""

import logging
import math
from dataclasses import dataclass, field, fields

import numpy as np

from roomview.camera import (
    ORTHOGRAPHIC_ZOOM_PER_RADIUS,
    CameraMode,
    orbitRadiusToZoom,
    zoomToOrbitRadius,
)
from roomview.constraints import Bounds, OrbitConstraints, TargetBounds, positiveBounds
from roomview.errors import ConfigurationError
from roomview.gestures import ORTHOGRAPHIC_BINDINGS, PERSPECTIVE_BINDINGS, GestureSample, GestureSampler
from roomview.orbitstate import OrbitState, sphericalToCartesian
from roomview.smoothing import SmoothingIntegrator

logger = logging.getLogger(__name__)

# Pan distance per pixel of drag, before the projection's pan scale.
PAN_SPEED = 0.01


@dataclass
class NavigationConfig:
    """Limits, sensitivities and the initial view. Every field has a default."""

    radiusRange: tuple = (1.0, 5.0)
    polarRange: tuple = (0.01, math.pi * 0.5)
    azimuthRange: tuple = (-math.pi * 0.5, 0.0)
    targetRange: tuple = ((-1.0, 1.0), (0.5, 3.0), (-1.0, 1.0))
    zoomRange: tuple = (1.0, 8.0)
    dragSensitivity: float = 1.0
    zoomSensitivity: float = 0.005
    orbitSmoothingRate: float = 0.01
    panSmoothingRate: float = 0.0025
    zoomPerRadius: float = ORTHOGRAPHIC_ZOOM_PER_RADIUS
    initialRadius: float = 5.0
    initialPolar: float = math.pi * 0.35
    initialAzimuth: float = -math.pi * 0.25
    initialTarget: tuple = (0.0, 1.3, 0.0)
    constraints: OrbitConstraints = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for name in ("dragSensitivity", "zoomSensitivity", "orbitSmoothingRate", "panSmoothingRate"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0.0:
                raise ConfigurationError("%s must be a finite non-negative number, got %r" % (name, value))
        if not self.zoomPerRadius > 0.0:
            raise ConfigurationError("zoomPerRadius must be positive, got %r" % self.zoomPerRadius)
        if len(self.initialTarget) != 3:
            raise ConfigurationError("initialTarget needs three components, got %r" % (self.initialTarget,))

        self.constraints = OrbitConstraints(
            radius=positiveBounds(self.radiusRange, "radiusRange"),
            polar=Bounds.coerce(self.polarRange, "polarRange"),
            azimuth=Bounds.coerce(self.azimuthRange, "azimuthRange"),
            target=TargetBounds.coerce(self.targetRange),
            zoom=positiveBounds(self.zoomRange, "zoomRange"),
        )

    @classmethod
    def fromDict(cls, data):
        """Build a config from plain data, e.g. a parsed JSON file."""
        data = dict(data or {})
        known = {f.name for f in fields(cls) if f.init}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError("Unknown navigation options: %s" % ", ".join(sorted(unknown)))
        return cls(**data)

    def radiusBounds(self, mode):
        """Bounds of the orbit radius for a camera mode."""
        if mode is CameraMode.Orthographic:
            zoom = self.constraints.zoom
            return Bounds(
                zoomToOrbitRadius(zoom.minimum, self.zoomPerRadius),
                zoomToOrbitRadius(zoom.maximum, self.zoomPerRadius),
            )
        return self.constraints.radius

    def initialState(self, mode=CameraMode.Perspective):
        constraints = self.constraints
        return OrbitState(
            radius=self.radiusBounds(mode).clamp(self.initialRadius),
            polar=constraints.polar.clamp(self.initialPolar),
            azimuth=constraints.azimuth.clamp(self.initialAzimuth),
            target=constraints.clampTarget(self.initialTarget),
        )


def bindingsFor(mode):
    return ORTHOGRAPHIC_BINDINGS if mode is CameraMode.Orthographic else PERSPECTIVE_BINDINGS


class Navigation:
    """Orbit, pan and zoom controls for one camera.

    The camera can be swapped with setCamera(); the orbit angles and target
    carry over and only the radius is reinterpreted.
    """

    def __init__(self, camera, config=None):
        self.config = config if config is not None else NavigationConfig()
        self.constraints = self.config.constraints
        self.camera = camera
        self.gestures = GestureSample()
        self.sampler = GestureSampler(self.gestures, bindingsFor(camera.mode))
        self.integrator = SmoothingIntegrator(self.config.orbitSmoothingRate, self.config.panSmoothingRate)

        self.raw = self.config.initialState(camera.mode)
        self.damped = self.raw.copy()
        self._applyToCamera()

    def radiusBounds(self):
        return self.config.radiusBounds(self.camera.mode)

    def update(self, elapsedMillis, normalizingLength):
        """Advance one frame.

        normalizingLength is the shorter viewport side in pixels, so a drag of
        a given pixel length turns the view by the same angle in any window.
        """
        if not normalizingLength > 0:
            raise ValueError("normalizingLength must be positive, got %r" % normalizingLength)

        raw = self.raw
        constraints = self.constraints
        dragDelta, zoomDelta, panMode = self.gestures.drain()

        # a radius carried over from a projection switch may sit outside the bounds
        raw.radius = self.radiusBounds().clampFrom(raw.radius + zoomDelta * self.config.zoomSensitivity, raw.radius)

        if panMode:
            if dragDelta.any():
                scale = PAN_SPEED * self.camera.panScale(raw.radius)
                up = self.camera.up()
                right = -self.camera.right()
                raw.target = raw.target + up * (dragDelta[1] * scale) + right * (dragDelta[0] * scale)
                raw.target = constraints.clampTarget(raw.target)
        else:
            sensitivity = self.config.dragSensitivity / normalizingLength
            raw.azimuth = constraints.azimuth.clamp(raw.azimuth - dragDelta[0] * sensitivity)
            raw.polar = constraints.polar.clamp(raw.polar - dragDelta[1] * sensitivity)

        self.integrator.advance(raw, self.damped, elapsedMillis)
        self._applyToCamera()

    def _applyToCamera(self):
        camera = self.camera
        damped = self.damped
        if camera.mode is CameraMode.Orthographic:
            camera.zoom = orbitRadiusToZoom(damped.radius, self.config.zoomPerRadius)
            camera.markProjectionDirty()
            distance = camera.standoff
        else:
            distance = damped.radius

        camera.position = damped.target + sphericalToCartesian(distance, damped.polar, damped.azimuth)
        camera.lookAt(damped.target)

    def setCamera(self, camera, radius=None):
        """Drive a different camera, optionally with a new radius for both states.

        An explicit radius is a conversion of the current framing and is kept
        as given, even outside the new camera's radius bounds. Later zoom
        input can only move it back toward the bounds.
        """
        bindings = bindingsFor(camera.mode)
        if bindings != self.sampler.bindings:
            # wheel input collected under the old sign
            self.gestures.zoomDelta = 0.0
        self.camera = camera
        self.sampler.setBindings(bindings)
        bounds = self.radiusBounds()
        if radius is not None:
            self.raw.radius = float(radius)
            self.damped.radius = self.raw.radius
        else:
            self.raw.radius = bounds.clamp(self.raw.radius)
            self.damped.radius = bounds.clamp(self.damped.radius)
        self._applyToCamera()

    def moveTo(self, target, smooth=True):
        self.raw.target = self.constraints.clampTarget(np.asarray(target, dtype=float))
        if not smooth:
            self.damped.target = self.raw.target.copy()
            self._applyToCamera()

    def rotateTo(self, azimuth, polar, smooth=True):
        self.raw.azimuth = self.constraints.azimuth.clamp(azimuth)
        self.raw.polar = self.constraints.polar.clamp(polar)
        if not smooth:
            self.damped.azimuth = self.raw.azimuth
            self.damped.polar = self.raw.polar
            self._applyToCamera()

    def dollyTo(self, radius, smooth=True):
        self.raw.radius = self.radiusBounds().clamp(radius)
        if not smooth:
            self.damped.radius = self.raw.radius
            self._applyToCamera()

    def reset(self, radius=None):
        """Jump back to the configured initial view, dropping pending input.

        *radius*, when given, replaces the initial radius as is, like the
        radius passed to setCamera().
        """
        initial = self.config.initialState(self.camera.mode)
        if radius is not None:
            initial.radius = float(radius)
        self.sampler.endDrag()
        self.gestures.drain()
        self.raw.copyFrom(initial)
        self.integrator.settle(self.raw, self.damped)
        self._applyToCamera()
        logger.debug("Navigation reset to %r", self.raw)

    def isSettled(self, epsilon=1e-4):
        return self.integrator.converged(self.raw, self.damped, epsilon)
