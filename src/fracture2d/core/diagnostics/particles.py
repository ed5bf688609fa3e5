"""Energy and momentum diagnostics."""

from __future__ import annotations

import numpy as np

from ..math.vector import norm
from ..state.particles import MOVABLE_EPS
from ..state.system import SystemState


def _masses(state: SystemState) -> tuple[np.ndarray, np.ndarray]:
    p = state.particles
    mov = p.movable(MOVABLE_EPS)
    mass = np.zeros(len(p), dtype=np.float64)
    mass[mov] = 1.0 / p.inv_mass[mov]
    moment = np.zeros(len(p), dtype=np.float64)
    spin = mov & (p.inv_moment > MOVABLE_EPS)
    moment[spin] = 1.0 / p.inv_moment[spin]
    return mass, moment


def total_mass(state: SystemState) -> float:
    mass, _ = _masses(state)
    return float(np.sum(mass))


def linear_momentum(state: SystemState) -> np.ndarray:
    mass, _ = _masses(state)
    return np.sum(state.particles.vel * mass[:, np.newaxis], axis=0)


def kinetic_energy(state: SystemState) -> float:
    """Translational plus rotational kinetic energy of movable particles."""
    p = state.particles
    mass, moment = _masses(state)
    v2 = np.sum(p.vel**2, axis=1)
    return float(0.5 * np.sum(mass * v2) + 0.5 * np.sum(moment * p.angvel**2))


def potential_energy_gravity(state: SystemState, g: np.ndarray) -> float:
    mass, _ = _masses(state)
    g = np.asarray(g, dtype=np.float64)
    return float(-np.sum(mass * (state.particles.pos @ g)))


def contact_energy(state: SystemState, kn: float) -> float:
    """Penalty energy ``0.5 * kn * overlap**2`` summed over unordered pairs."""
    p = state.particles
    n = len(p)
    if n < 2:
        return 0.0
    iu = np.triu_indices(n, k=1)
    delta = p.pos[iu[0]] - p.pos[iu[1]]
    dist = norm(delta)
    overlap = p.radius[iu[0]] + p.radius[iu[1]] - dist
    # wall-wall overlaps never change
    either = p.movable(MOVABLE_EPS)[iu[0]] | p.movable(MOVABLE_EPS)[iu[1]]
    overlap = np.where((overlap > 0.0) & either, overlap, 0.0)
    return float(0.5 * kn * np.sum(overlap * overlap))


def bond_energy(state: SystemState, kn: float) -> float:
    """Axial strain energy ``0.5 * kn * dl**2`` per bonded pair.

    A pair counts while at least one of its two directed rows is unbroken.
    """
    p = state.particles
    b = state.bonds
    rows = np.flatnonzero(~b.broken)
    if rows.size == 0:
        return 0.0
    lo = np.minimum(b.owner[rows], b.endpoint[rows])
    hi = np.maximum(b.owner[rows], b.endpoint[rows])
    _, first = np.unique(np.stack([lo, hi], axis=1), axis=0, return_index=True)
    rows = rows[first]
    span = p.pos[b.endpoint[rows]] - p.pos[b.owner[rows]]
    dl = norm(span) - b.rest_length[rows]
    return float(0.5 * kn * np.sum(dl * dl))


def total_energy(state: SystemState, kn: float, g: np.ndarray) -> float:
    return (
        kinetic_energy(state)
        + potential_energy_gravity(state, g)
        + contact_energy(state, kn)
        + bond_energy(state, kn)
    )


def broken_bond_count(state: SystemState) -> int:
    return int(np.count_nonzero(state.bonds.broken))


def is_finite(state: SystemState) -> bool:
    """False once any position or velocity has diverged to inf/NaN."""
    p = state.particles
    return bool(
        np.all(np.isfinite(p.pos))
        and np.all(np.isfinite(p.vel))
        and np.all(np.isfinite(p.angle))
        and np.all(np.isfinite(p.angvel))
    )
