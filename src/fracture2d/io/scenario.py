"""Scenario I/O and adapters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from ..core.forces import BDEMModel, BondForces, ContactForces, UniformGravity
from ..core.scene import Material, SceneBuilder
from ..core.scheduler import StepScheduler
from ..core.simulation import Simulation


ScenarioDefinition = dict[str, Any]

DEFAULT_GRAVITY = (0.0, -9.8)
MATERIAL_KEYS = (
    "kn",
    "radius",
    "invmass_coeff",
    "invmoment_coeff",
    "bond_strength",
    "bond_range",
)


def load_scenario(path: str | Path) -> ScenarioDefinition:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return validate_scenario(data)


def save_scenario(path: str | Path, defn: ScenarioDefinition) -> None:
    Path(path).write_text(
        json.dumps(defn, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def material_from_defn(defn: ScenarioDefinition) -> Material:
    cfg = defn.get("material", {})
    return Material(**{key: float(cfg[key]) for key in MATERIAL_KEYS if key in cfg})


def scenario_to_runtime(defn: ScenarioDefinition) -> tuple[Simulation, int]:
    """Build a ready-to-run simulation and return it with the frame count."""
    sim_cfg = defn["simulation"]
    material = material_from_defn(defn)

    builder = SceneBuilder(material)
    for block in defn.get("blocks", []):
        builder.add_block(
            (float(block["x"][0]), float(block["x"][1])),
            (float(block["y"][0]), float(block["y"][1])),
            bonded=bool(block.get("bonded", True)),
        )
    for entry in defn.get("particles", []):
        builder.add_particle(
            float(entry["pos"][0]),
            float(entry["pos"][1]),
            fixed=bool(entry.get("fixed", False)),
            bonded=bool(entry.get("bonded", False)),
        )
    walls = defn.get("walls")
    if walls is not None and walls.get("enabled", True):
        builder.add_walls(float(walls.get("size", 1.0)))
    state = builder.build()

    gravity = sim_cfg.get("gravity", DEFAULT_GRAVITY)
    g = np.asarray(gravity, dtype=np.float64)
    model = BDEMModel(
        forces=[
            ContactForces(
                material.kn,
                damping=float(sim_cfg.get("contact_damping", 1.4)),
                chunk_size=sim_cfg.get("chunk_size"),
            ),
            BondForces(material.kn),
        ],
        gravity=UniformGravity(g=g) if np.any(g != 0.0) else None,
    )
    scheduler = StepScheduler(
        fps=float(sim_cfg["fps"]),
        kn=material.kn,
        radius=material.radius,
        stability_constant=float(sim_cfg.get("stability_constant", 7.5e3)),
        refinement=int(sim_cfg.get("refinement", 10)),
        batch_size=int(sim_cfg.get("batch_size", 1000)),
    )
    return Simulation(state, model, scheduler), int(sim_cfg.get("frames", 0))


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing required field: {ctx}.{key}")
    return obj[key]


def _validate_pair(value: Any, ctx: str) -> None:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{ctx} must have length 2")
    for v in value:
        if not isinstance(v, (int, float)) or isinstance(v, bool):
            raise ValueError(f"{ctx} must contain numbers")


def validate_scenario(data: Any) -> ScenarioDefinition:
    if not isinstance(data, dict):
        raise ValueError("scenario must be a JSON object")
    if data.get("schema_version") != 1:
        raise ValueError("schema_version must be 1")

    sim = _require(data, "simulation", "scenario")
    if not isinstance(sim, dict):
        raise ValueError("simulation must be an object")
    fps = _require(sim, "fps", "simulation")
    if fps <= 0:
        raise ValueError("simulation.fps must be > 0")
    if sim.get("frames", 0) < 0:
        raise ValueError("simulation.frames must be >= 0")
    for key in ("batch_size", "refinement", "chunk_size"):
        if key in sim and sim[key] is not None:
            if not isinstance(sim[key], int) or sim[key] <= 0:
                raise ValueError(f"simulation.{key} must be a positive integer")
    if "stability_constant" in sim and sim["stability_constant"] <= 0:
        raise ValueError("simulation.stability_constant must be > 0")
    if "gravity" in sim:
        _validate_pair(sim["gravity"], "simulation.gravity")

    if "sampling" in data:
        every = data["sampling"].get("every")
        if every is not None and every <= 0:
            raise ValueError("sampling.every must be > 0")

    material = data.get("material", {})
    if not isinstance(material, dict):
        raise ValueError("material must be an object")
    for key in material:
        if key not in MATERIAL_KEYS:
            raise ValueError(f"unknown material field: {key}")
        if float(material[key]) <= 0.0 and key != "bond_range":
            raise ValueError(f"material.{key} must be > 0")

    blocks = data.get("blocks", [])
    if not isinstance(blocks, list):
        raise ValueError("blocks must be a list")
    for idx, block in enumerate(blocks):
        ctx = f"blocks[{idx}]"
        if not isinstance(block, dict):
            raise ValueError(f"{ctx} must be an object")
        for axis in ("x", "y"):
            value = _require(block, axis, ctx)
            _validate_pair(value, f"{ctx}.{axis}")
            if value[1] <= value[0]:
                raise ValueError(f"{ctx}.{axis} must be increasing")
        if "bonded" in block and not isinstance(block["bonded"], bool):
            raise ValueError(f"{ctx}.bonded must be boolean")

    particles = data.get("particles", [])
    if not isinstance(particles, list):
        raise ValueError("particles must be a list")
    for idx, entry in enumerate(particles):
        ctx = f"particles[{idx}]"
        if not isinstance(entry, dict):
            raise ValueError(f"{ctx} must be an object")
        _validate_pair(_require(entry, "pos", ctx), f"{ctx}.pos")
        for flag in ("fixed", "bonded"):
            if flag in entry and not isinstance(entry[flag], bool):
                raise ValueError(f"{ctx}.{flag} must be boolean")

    if "walls" in data:
        walls = data["walls"]
        if not isinstance(walls, dict):
            raise ValueError("walls must be an object")
        if "enabled" in walls and not isinstance(walls["enabled"], bool):
            raise ValueError("walls.enabled must be boolean")
        if "size" in walls and walls["size"] <= 0:
            raise ValueError("walls.size must be > 0")

    return data
