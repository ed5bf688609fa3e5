"""Simulation object owning the particle and bond arrays."""

from __future__ import annotations

import logging

from .forces.base import Model
from .integrators import Integrator, Leapfrog
from .scheduler import StepScheduler
from .snapshot import Renderer, Snapshot
from .state.system import SystemState


logger = logging.getLogger(__name__)


class Simulation:
    def __init__(
        self,
        state: SystemState,
        model: Model,
        scheduler: StepScheduler,
        integrator: Integrator | None = None,
    ) -> None:
        state.validate()
        self.state = state
        self.model = model
        self.scheduler = scheduler
        self.integrator = integrator if integrator is not None else Leapfrog()
        self.initial_state = state.clone()
        self.substep = 0
        self.frame = 0

    @property
    def dt(self) -> float:
        return self.scheduler.dt

    @property
    def time(self) -> float:
        return self.substep * self.scheduler.dt

    def step(self) -> None:
        """Advance by one sub-step."""
        self.integrator.step(self.state, self.model, self.scheduler.dt)
        self.substep += 1

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self.state, self.frame, self.time)

    def advance_frame(self) -> Snapshot:
        """Run one batch of sub-steps and return the resulting snapshot."""
        broken_before = int(self.state.bonds.broken.sum())
        self.scheduler.run_batch(self.step)
        self.frame += 1
        snap = self.snapshot()
        if snap.broken_count != broken_before:
            logger.debug(
                "frame %d: %d bond(s) broken in total", self.frame, snap.broken_count
            )
        return snap

    def run_frames(
        self,
        frames: int,
        on_frame: Renderer | None = None,
    ) -> Snapshot:
        if frames < 0:
            raise ValueError("frames must be >= 0")
        snap = self.snapshot()
        for _ in range(frames):
            snap = self.advance_frame()
            if on_frame is not None:
                on_frame(snap)
        return snap

    def reset(self) -> None:
        self.state = self.initial_state.clone()
        self.substep = 0
        self.frame = 0
