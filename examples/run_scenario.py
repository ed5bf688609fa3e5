"""Run a scenario JSON and print fracture diagnostics."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from fracture2d.core.diagnostics import (
    broken_bond_count,
    is_finite,
    kinetic_energy,
    linear_momentum,
    total_mass,
)
from fracture2d.core.run import run
from fracture2d.io import load_scenario, scenario_to_runtime


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("scenario", type=Path)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    defn = load_scenario(args.scenario)
    sim, frames = scenario_to_runtime(defn)
    sample_every = defn.get("sampling", {}).get("every")

    result = run(sim, frames, sample_every=sample_every)
    state = sim.state

    print("frames:", frames)
    print("dt:", sim.dt)
    print("sim time:", result.final.time)
    print("movable mass:", total_mass(state))
    print("momentum:", linear_momentum(state))
    print("KE:", kinetic_energy(state))
    print("broken bonds:", broken_bond_count(state), "of", len(state.bonds))
    print("finite:", is_finite(state))
    if result.time is not None:
        for t, n in zip(result.time, result.broken):
            print(f"  t={t:.4e} broken={n}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
