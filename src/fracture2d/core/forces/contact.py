"""Penalty contact between overlapping particles."""

from __future__ import annotations

import numpy as np

from ..math.vector import norm
from ..state.particles import MOVABLE_EPS, ParticlesState
from ..state.system import SystemState


OVERLAP_TOL = 1e-12


class ContactForces:
    """All-pairs normal contact with a critical-damping-like dashpot.

    Every movable particle ``i`` receives, from every overlapping particle
    ``j`` (movable or not),
    ``n * (kn * overlap + a * dot(v_j - v_i, n))`` with ``n`` pointing from
    ``j`` to ``i`` and ``a = damping * sqrt(kn / (w_i + w_j))``. There is no
    tangential component. ``chunk_size`` bounds the number of rows evaluated
    at once; results do not depend on it.
    """

    def __init__(
        self,
        kn: float,
        damping: float = 1.4,
        chunk_size: int | None = None,
    ) -> None:
        if kn <= 0.0:
            raise ValueError("kn must be > 0")
        if chunk_size is not None and chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        self.kn = float(kn)
        self.damping = float(damping)
        self.chunk_size = chunk_size

    def accumulate(self, state: SystemState) -> None:
        p = state.particles
        n = len(p)
        if n < 2:
            return
        rows = np.flatnonzero(p.movable(MOVABLE_EPS))
        if rows.size == 0:
            return
        cols = np.arange(n)
        step = rows.size if self.chunk_size is None else self.chunk_size
        for i0 in range(0, rows.size, step):
            block = rows[i0 : i0 + step]
            p.force[block] += _contact_block(p, block, cols, self.kn, self.damping)

    def pair_force(self, state: SystemState, i: int, j: int) -> np.ndarray:
        """Return the contact force particle ``j`` exerts on movable particle ``i``."""
        rows = np.array([i], dtype=np.int64)
        cols = np.array([j], dtype=np.int64)
        return _contact_block(state.particles, rows, cols, self.kn, self.damping)[0]


def _contact_block(
    p: ParticlesState,
    rows: np.ndarray,
    cols: np.ndarray,
    kn: float,
    damping: float,
) -> np.ndarray:
    delta = p.pos[rows][:, None, :] - p.pos[cols][None, :, :]
    dist = norm(delta)
    overlap = p.radius[rows][:, None] + p.radius[cols][None, :] - dist
    touching = (overlap >= OVERLAP_TOL) & (rows[:, None] != cols[None, :])
    if not np.any(touching):
        return np.zeros((rows.size, 2), dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore"):
        normal = np.where(dist[..., None] > 0.0, delta / dist[..., None], 0.0)
        a = damping * np.sqrt(
            kn / (p.inv_mass[rows][:, None] + p.inv_mass[cols][None, :])
        )
        rel_vel = p.vel[cols][None, :, :] - p.vel[rows][:, None, :]
        vn = np.sum(rel_vel * normal, axis=-1)
        magnitude = np.where(touching, kn * overlap + a * vn, 0.0)
    return np.sum(normal * magnitude[..., None], axis=1)
