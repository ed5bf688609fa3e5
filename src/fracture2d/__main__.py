"""CLI entrypoint: run a fracture scenario headless."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from . import __version__
from .core.diagnostics import kinetic_energy
from .core.forces import BDEMModel, BondForces, ContactForces, UniformGravity
from .core.scene import Material, demo_scene
from .core.scheduler import StepScheduler
from .core.simulation import Simulation
from .core.snapshot import Snapshot
from .io import load_scenario, scenario_to_runtime


logger = logging.getLogger("fracture2d")


def build_demo(fps: float = 60.0, batch_size: int = 1000) -> Simulation:
    material = Material()
    model = BDEMModel(
        forces=[ContactForces(material.kn), BondForces(material.kn)],
        gravity=UniformGravity(g=np.array([0.0, -9.8])),
    )
    scheduler = StepScheduler(
        fps=fps, kn=material.kn, radius=material.radius, batch_size=batch_size
    )
    return Simulation(demo_scene(material), model, scheduler)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="fracture2d")
    parser.add_argument("scenario", type=Path, nargs="?", default=None)
    parser.add_argument("--frames", type=int, default=None)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.scenario is None:
        sim = build_demo()
        frames = 10
    else:
        sim, frames = scenario_to_runtime(load_scenario(args.scenario))
    if args.frames is not None:
        frames = args.frames

    def report(snap: Snapshot) -> None:
        logger.info(
            "frame %d t=%.4e s broken=%d KE=%.4e",
            snap.frame,
            snap.time,
            snap.broken_count,
            kinetic_energy(sim.state),
        )

    sim.run_frames(frames, on_frame=report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
