"""Interpolation primitives for body and energy states."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from simrender.models.trace import BodyState, EnergyState


class InterpolationMethod(str, Enum):
    """Interpolation schemes accepted by the resampler."""

    LINEAR = "linear"
    CUBIC = "cubic"  # Falls back to linear
    HERMITE = "hermite"  # Falls back to linear


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation: ``a + (b - a) * t``."""
    return a + (b - a) * t


def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians into ``[-pi, pi)``."""
    return ((angle + math.pi) % (2 * math.pi)) - math.pi


def lerp_angle(a: float, b: float, t: float) -> float:
    """Interpolate an orientation along the shortest arc."""
    return a + wrap_angle(b - a) * t


def interpolate_body(
    before: BodyState,
    after: BodyState,
    alpha: float,
    method: InterpolationMethod = InterpolationMethod.LINEAR,
) -> BodyState:
    """
    Interpolate between two body states.

    Every method currently resolves to linear interpolation for positions
    and velocities, and shortest-arc interpolation for theta.
    """
    return BodyState(
        x=lerp(before.x, after.x, alpha),
        y=lerp(before.y, after.y, alpha),
        theta=lerp_angle(before.theta, after.theta, alpha),
        vx=lerp(before.vx, after.vx, alpha),
        vy=lerp(before.vy, after.vy, alpha),
        omega=lerp(before.omega, after.omega, alpha),
    )


def interpolate_energy(
    before: Optional[EnergyState],
    after: Optional[EnergyState],
    alpha: float,
) -> EnergyState:
    """Interpolate energies; fall back to whichever side has data, else zero."""
    if before is not None and after is not None:
        return EnergyState(
            Ek=lerp(before.Ek, after.Ek, alpha),
            Ep=lerp(before.Ep, after.Ep, alpha),
            Em=lerp(before.Em, after.Em, alpha),
        )
    return before or after or EnergyState()


def interpolate_bodies(
    before: dict[str, BodyState],
    after: dict[str, BodyState],
    alpha: float,
    method: InterpolationMethod = InterpolationMethod.LINEAR,
) -> dict[str, BodyState]:
    """
    Interpolate every body of ``before``.

    Bodies missing from ``after`` are passed through unchanged; bodies that
    only appear in ``after`` are not extrapolated backwards.
    """
    bodies = {}
    for body_id, state in before.items():
        other = after.get(body_id)
        if other is None:
            bodies[body_id] = state
        else:
            bodies[body_id] = interpolate_body(state, other, alpha, method)
    return bodies
