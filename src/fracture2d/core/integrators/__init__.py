"""Integrator interfaces and implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..forces.base import Model
from ..math.angle import wrap_angle
from ..state.particles import MOVABLE_EPS
from ..state.system import SystemState


class Integrator(Protocol):
    def step(self, state: SystemState, model: Model, dt: float) -> None:
        """Advance state by one fixed sub-step (mutating)."""


@dataclass(slots=True)
class Leapfrog:
    """Drift-kick leapfrog on half-step velocities.

    Order per sub-step: clear accumulators, drift positions and angles with
    ``vel_mid``/``angvel_mid``, evaluate forces at the drifted configuration,
    then kick. ``vel``/``angvel`` are reported at the full step as
    ``mid + 0.5 * a * dt``. Immovable particles are never written.
    """

    def step(self, state: SystemState, model: Model, dt: float) -> None:
        p = state.particles
        mov = p.movable(MOVABLE_EPS)

        p.clear_accumulators()

        p.pos[mov] += p.vel_mid[mov] * dt
        p.angle[mov] = wrap_angle(p.angle[mov] + p.angvel_mid[mov] * dt)

        model.accumulate(state)

        a = model.acc_particles(state)[mov]
        p.vel[mov] = p.vel_mid[mov] + 0.5 * a * dt
        p.vel_mid[mov] += a * dt

        alpha = model.alpha_particles(state)[mov]
        p.angvel[mov] = p.angvel_mid[mov] + 0.5 * alpha * dt
        p.angvel_mid[mov] += alpha * dt
