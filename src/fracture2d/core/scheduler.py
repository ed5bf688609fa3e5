"""Sub-step sizing and per-frame batching."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StepScheduler:
    """Choose a stable sub-step and run a fixed batch of them per frame.

    ``substeps_per_frame`` comes from the elastic timescale of the stiffest
    contact, ``floor((1/fps) / (stability_constant * r**2 / kn)) * refinement``,
    and only sets ``dt``. Every frame then runs ``batch_size`` sub-steps
    regardless of that count.
    """

    fps: float
    kn: float
    radius: float
    stability_constant: float = 7.5e3
    refinement: int = 10
    batch_size: int = 1000
    substeps_per_frame: int = field(init=False)
    dt: float = field(init=False)

    def __post_init__(self) -> None:
        if self.fps <= 0.0:
            raise ValueError("fps must be > 0")
        if self.kn <= 0.0:
            raise ValueError("kn must be > 0")
        if self.radius <= 0.0:
            raise ValueError("radius must be > 0")
        if self.stability_constant <= 0.0:
            raise ValueError("stability_constant must be > 0")
        if self.refinement <= 0:
            raise ValueError("refinement must be > 0")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")

        frame = 1.0 / self.fps
        timescale = self.stability_constant * self.radius * self.radius / self.kn
        self.substeps_per_frame = int(math.floor(frame / timescale)) * int(
            self.refinement
        )
        if self.substeps_per_frame <= 0:
            raise ValueError(
                "frame interval is shorter than the elastic timescale; "
                "increase kn or lower fps"
            )
        self.dt = frame / self.substeps_per_frame

        logger.info(
            "sub-steps per frame: %d (dt=%.3e s, batch=%d)",
            self.substeps_per_frame,
            self.dt,
            self.batch_size,
        )
        if self.batch_time < frame:
            logger.warning(
                "batch covers %.3e s of a %.3e s frame; simulation runs at "
                "%.2f%% of real time",
                self.batch_time,
                frame,
                100.0 * self.realtime_ratio,
            )

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    @property
    def batch_time(self) -> float:
        """Simulated time advanced by one batch."""
        return self.batch_size * self.dt

    @property
    def realtime_ratio(self) -> float:
        return self.batch_time / self.frame_interval

    def run_batch(self, substep: Callable[[], None]) -> None:
        for _ in range(self.batch_size):
            substep()
