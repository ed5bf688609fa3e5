"""Uniform gravity for movable particles."""

from __future__ import annotations

import numpy as np

from ..state.particles import MOVABLE_EPS
from ..state.system import SystemState


class UniformGravity:
    def __init__(self, g: np.ndarray) -> None:
        self.g = np.asarray(g, dtype=np.float64)
        if self.g.shape != (2,):
            raise ValueError("g must have shape (2,)")

    def acc_particles(self, state: SystemState) -> np.ndarray:
        p = state.particles
        n = len(p)
        if n == 0:
            return np.zeros((0, 2), dtype=np.float64)
        acc = np.broadcast_to(self.g, (n, 2)).copy()
        acc[~p.movable(MOVABLE_EPS)] = 0.0
        return acc
