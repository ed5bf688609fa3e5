"""Force/model interfaces."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from ..state.system import SystemState


ArrayF = NDArray[np.float64]


class ForceModel(Protocol):
    def accumulate(self, state: SystemState) -> None:
        """Add forces and torques into ``state.particles.force``/``torque``."""


class Model(Protocol):
    def accumulate(self, state: SystemState) -> None:
        """Evaluate every force model at the current positions and angles."""

    def acc_particles(self, state: SystemState) -> ArrayF:
        """Return particle linear accelerations as (N, 2)."""

    def alpha_particles(self, state: SystemState) -> ArrayF:
        """Return particle angular accelerations as (N,)."""
