"""Exponential smoothing of the rendered (damped) orbit toward the raw orbit."""

import logging

logger = logging.getLogger(__name__)


def smoothingFactor(rate, elapsedMillis):
    """Fraction of the remaining gap closed in one step.

    The linear form rate * elapsedMillis is capped at 1 so a long frame
    (a backgrounded window) lands on the raw value instead of passing it.
    """
    if elapsedMillis <= 0.0 or rate <= 0.0:
        return 0.0
    return min(rate * elapsedMillis, 1.0)


def damp(current, target, rate, elapsedMillis):
    """Move *current* toward *target* by one smoothing step."""
    return current + (target - current) * smoothingFactor(rate, elapsedMillis)


class SmoothingIntegrator:
    """Advances a damped orbit toward its raw counterpart once per frame.

    Radius and angles use orbitRate, the pivot target uses panRate so the
    view pans more slowly than it rotates. The raw state is never written.
    """

    def __init__(self, orbitRate=0.01, panRate=0.0025):
        self.orbitRate = float(orbitRate)
        self.panRate = float(panRate)

    def advance(self, raw, damped, elapsedMillis):
        if elapsedMillis < 0.0:
            logger.debug("Ignoring negative frame time %s ms", elapsedMillis)
            return

        orbitFactor = smoothingFactor(self.orbitRate, elapsedMillis)
        damped.radius += (raw.radius - damped.radius) * orbitFactor
        damped.polar += (raw.polar - damped.polar) * orbitFactor
        damped.azimuth += (raw.azimuth - damped.azimuth) * orbitFactor

        panFactor = smoothingFactor(self.panRate, elapsedMillis)
        damped.target += (raw.target - damped.target) * panFactor

    def settle(self, raw, damped):
        """Snap the damped state onto the raw state."""
        damped.copyFrom(raw)

    @staticmethod
    def converged(raw, damped, epsilon=1e-4):
        return damped.distanceTo(raw) <= epsilon
