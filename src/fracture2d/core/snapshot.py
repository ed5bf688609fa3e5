"""Read-only views of particle and bond state for renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .state.system import SystemState


@dataclass(slots=True, frozen=True)
class Snapshot:
    frame: int
    time: float
    pos: np.ndarray
    angle: np.ndarray
    radius: np.ndarray
    bond_owner: np.ndarray
    bond_endpoint: np.ndarray
    bond_broken: np.ndarray

    @classmethod
    def capture(cls, state: SystemState, frame: int, time: float) -> "Snapshot":
        p = state.particles
        b = state.bonds
        return cls(
            frame=frame,
            time=time,
            pos=_frozen(p.pos),
            angle=_frozen(p.angle),
            radius=_frozen(p.radius),
            bond_owner=_frozen(b.owner),
            bond_endpoint=_frozen(b.endpoint),
            bond_broken=_frozen(b.broken),
        )

    @property
    def broken_count(self) -> int:
        return int(np.count_nonzero(self.bond_broken))

    def crack_segments(self) -> np.ndarray:
        """Return (K, 2, 2) line segments for every broken bond."""
        k = np.flatnonzero(self.bond_broken)
        return np.stack(
            [self.pos[self.bond_owner[k]], self.pos[self.bond_endpoint[k]]], axis=1
        )


class Renderer(Protocol):
    def __call__(self, snapshot: Snapshot) -> None:
        """Consume one frame; must not keep references past the call."""


def _frozen(a: np.ndarray) -> np.ndarray:
    out = a.copy()
    out.setflags(write=False)
    return out
