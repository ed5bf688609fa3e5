"""Particle state containers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]
ArrayB = NDArray[np.bool_]

MOVABLE_EPS = 1e-6


@dataclass(slots=True)
class ParticlesState:
    """Circular particles in 2D.

    ``vel``/``angvel`` are the reported full-step values; ``vel_mid`` and
    ``angvel_mid`` are the half-step velocities the integrator drifts with.
    Immovable (boundary) particles have ``inv_mass == inv_moment == 0``.
    Kinematic fields left as ``None`` start at zero.
    """

    pos: ArrayF
    radius: ArrayF
    inv_mass: ArrayF
    inv_moment: ArrayF
    vel: ArrayF | None = None
    vel_mid: ArrayF | None = None
    angle: ArrayF | None = None
    angvel: ArrayF | None = None
    angvel_mid: ArrayF | None = None
    force: ArrayF | None = None
    torque: ArrayF | None = None

    def __post_init__(self) -> None:
        self.pos = np.ascontiguousarray(self.pos, dtype=np.float64)
        n = self.pos.shape[0] if self.pos.ndim == 2 else 0
        self.radius = _as_array(self.radius, (n,))
        self.inv_mass = _as_array(self.inv_mass, (n,))
        self.inv_moment = _as_array(self.inv_moment, (n,))
        self.vel = _as_array(self.vel, (n, 2))
        self.vel_mid = _as_array(self.vel_mid, (n, 2))
        self.angle = _as_array(self.angle, (n,))
        self.angvel = _as_array(self.angvel, (n,))
        self.angvel_mid = _as_array(self.angvel_mid, (n,))
        self.force = _as_array(self.force, (n, 2))
        self.torque = _as_array(self.torque, (n,))
        self.validate()

    def __len__(self) -> int:
        return self.pos.shape[0]

    def validate(self) -> None:
        if self.pos.ndim != 2 or self.pos.shape[1] != 2:
            raise ValueError("pos must have shape (N, 2)")
        n = self.pos.shape[0]
        for name in ("vel", "vel_mid", "force"):
            if getattr(self, name).shape != (n, 2):
                raise ValueError(f"{name} must have shape (N, 2)")
        for name in (
            "radius",
            "inv_mass",
            "inv_moment",
            "angle",
            "angvel",
            "angvel_mid",
            "torque",
        ):
            if getattr(self, name).shape != (n,):
                raise ValueError(f"{name} must have shape (N,)")
        if np.any(self.radius <= 0.0):
            raise ValueError("radius must be > 0")
        if np.any(self.inv_mass < 0.0) or np.any(self.inv_moment < 0.0):
            raise ValueError("inv_mass and inv_moment must be >= 0")

    def movable(self, eps: float = MOVABLE_EPS) -> ArrayB:
        return self.inv_mass > eps

    def clear_accumulators(self) -> None:
        self.force.fill(0.0)
        self.torque.fill(0.0)

    def copy(self) -> "ParticlesState":
        return ParticlesState(
            pos=self.pos.copy(),
            radius=self.radius.copy(),
            inv_mass=self.inv_mass.copy(),
            inv_moment=self.inv_moment.copy(),
            vel=self.vel.copy(),
            vel_mid=self.vel_mid.copy(),
            angle=self.angle.copy(),
            angvel=self.angvel.copy(),
            angvel_mid=self.angvel_mid.copy(),
            force=self.force.copy(),
            torque=self.torque.copy(),
        )


def _as_array(values: object, shape: tuple[int, ...]) -> ArrayF:
    if values is None:
        return np.zeros(shape, dtype=np.float64)
    return np.ascontiguousarray(values, dtype=np.float64)
