"""Frame run loop with optional sampling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .simulation import Simulation
from .snapshot import Snapshot


@dataclass(slots=True)
class RunResult:
    final: Snapshot
    time: np.ndarray | None = None
    pos: np.ndarray | None = None
    angle: np.ndarray | None = None
    broken: np.ndarray | None = None


def run(
    sim: Simulation,
    frames: int,
    sample_every: int | None = None,
    callback: Callable[[Snapshot], None] | None = None,
) -> RunResult:
    if sample_every is not None and sample_every <= 0:
        raise ValueError("sample_every must be > 0")
    if frames < 0:
        raise ValueError("frames must be >= 0")

    times: list[float] = []
    pos: list[np.ndarray] = []
    angle: list[np.ndarray] = []
    broken: list[int] = []

    def sample(snap: Snapshot) -> None:
        times.append(snap.time)
        pos.append(snap.pos)
        angle.append(snap.angle)
        broken.append(snap.broken_count)

    snap = sim.snapshot()
    if sample_every is not None:
        sample(snap)

    for frame in range(1, frames + 1):
        snap = sim.advance_frame()
        if callback is not None:
            callback(snap)
        if sample_every is not None and frame % sample_every == 0:
            sample(snap)

    if sample_every is None:
        return RunResult(final=snap)

    return RunResult(
        final=snap,
        time=np.asarray(times, dtype=np.float64),
        pos=np.asarray(pos, dtype=np.float64),
        angle=np.asarray(angle, dtype=np.float64),
        broken=np.asarray(broken, dtype=np.int64),
    )
