"""Directed bond state containers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]
ArrayI = NDArray[np.int64]
ArrayB = NDArray[np.bool_]


@dataclass(slots=True)
class BondsState:
    """Flat arrays of directed bonds.

    Row ``k`` belongs to particle ``owner[k]`` and points at ``endpoint[k]``.
    A bonded pair is stored as two independent rows, one per direction, each
    with its own ``broken`` flag. ``direction`` is the unit vector from owner
    to endpoint at formation time.
    """

    owner: ArrayI
    endpoint: ArrayI
    rest_length: ArrayF
    direction: ArrayF
    max_normal_force: ArrayF
    max_tangent_force: ArrayF
    broken: ArrayB | None = None

    def __post_init__(self) -> None:
        self.owner = np.ascontiguousarray(self.owner, dtype=np.int64)
        self.endpoint = np.ascontiguousarray(self.endpoint, dtype=np.int64)
        self.rest_length = np.ascontiguousarray(self.rest_length, dtype=np.float64)
        self.direction = np.ascontiguousarray(self.direction, dtype=np.float64).reshape(
            -1, 2
        )
        self.max_normal_force = np.ascontiguousarray(
            self.max_normal_force, dtype=np.float64
        )
        self.max_tangent_force = np.ascontiguousarray(
            self.max_tangent_force, dtype=np.float64
        )
        if self.broken is None:
            self.broken = np.zeros(self.owner.shape[0], dtype=bool)
        else:
            self.broken = np.ascontiguousarray(self.broken, dtype=bool)

    @classmethod
    def empty(cls) -> "BondsState":
        return cls(
            owner=np.zeros(0, dtype=np.int64),
            endpoint=np.zeros(0, dtype=np.int64),
            rest_length=np.zeros(0, dtype=np.float64),
            direction=np.zeros((0, 2), dtype=np.float64),
            max_normal_force=np.zeros(0, dtype=np.float64),
            max_tangent_force=np.zeros(0, dtype=np.float64),
        )

    def __len__(self) -> int:
        return self.owner.shape[0]

    def validate(self, n_particles: int) -> None:
        m = self.owner.shape[0]
        if self.owner.ndim != 1:
            raise ValueError("owner must have shape (M,)")
        for name in (
            "endpoint",
            "rest_length",
            "max_normal_force",
            "max_tangent_force",
            "broken",
        ):
            if getattr(self, name).shape != (m,):
                raise ValueError(f"{name} must have shape (M,)")
        if self.direction.shape != (m, 2):
            raise ValueError("direction must have shape (M, 2)")
        if m == 0:
            return
        if self.owner.min() < 0 or self.owner.max() >= n_particles:
            raise ValueError("bond owner index out of range")
        if self.endpoint.min() < 0 or self.endpoint.max() >= n_particles:
            raise ValueError("bond endpoint index out of range")
        if np.any(self.owner == self.endpoint):
            raise ValueError("bond endpoint must differ from its owner")
        if np.any(self.rest_length <= 0.0):
            raise ValueError("rest_length must be > 0")

    def of_particle(self, i: int) -> ArrayI:
        """Return the row indices of the bonds owned by particle ``i``."""
        return np.flatnonzero(self.owner == i)

    def append(
        self,
        owner: int,
        endpoint: int,
        rest_length: float,
        direction: ArrayF,
        max_normal_force: float,
        max_tangent_force: float,
    ) -> int:
        """Grow the arrays by one unbroken bond and return its row index."""
        k = self.owner.shape[0]
        self.owner = np.append(self.owner, np.int64(owner))
        self.endpoint = np.append(self.endpoint, np.int64(endpoint))
        self.rest_length = np.append(self.rest_length, float(rest_length))
        self.direction = np.concatenate(
            [self.direction, np.asarray(direction, dtype=np.float64).reshape(1, 2)],
            axis=0,
        )
        self.max_normal_force = np.append(self.max_normal_force, float(max_normal_force))
        self.max_tangent_force = np.append(
            self.max_tangent_force, float(max_tangent_force)
        )
        self.broken = np.append(self.broken, False)
        return k

    def copy(self) -> "BondsState":
        return BondsState(
            owner=self.owner.copy(),
            endpoint=self.endpoint.copy(),
            rest_length=self.rest_length.copy(),
            direction=self.direction.copy(),
            max_normal_force=self.max_normal_force.copy(),
            max_tangent_force=self.max_tangent_force.copy(),
            broken=self.broken.copy(),
        )
