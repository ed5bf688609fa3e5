"""Composite BDEM model: force models plus gravity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .base import ForceModel
from .uniform_gravity import UniformGravity
from ..state.system import SystemState


@dataclass(slots=True)
class BDEMModel:
    forces: Sequence[ForceModel]
    gravity: UniformGravity | None = None

    def accumulate(self, state: SystemState) -> None:
        for model in self.forces:
            model.accumulate(state)

    def acc_particles(self, state: SystemState) -> np.ndarray:
        p = state.particles
        acc = p.force * p.inv_mass[:, np.newaxis]
        if self.gravity is not None:
            acc += self.gravity.acc_particles(state)
        return acc

    def alpha_particles(self, state: SystemState) -> np.ndarray:
        p = state.particles
        return p.torque * p.inv_moment
