"""System state container for particles and their bond graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from .bonds import BondsState
from .particles import ParticlesState


@dataclass(slots=True)
class SystemState:
    particles: ParticlesState
    bonds: BondsState = field(default_factory=BondsState.empty)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        self.particles.validate()
        self.bonds.validate(len(self.particles))

    def clone(self) -> "SystemState":
        return SystemState(particles=self.particles.copy(), bonds=self.bonds.copy())
