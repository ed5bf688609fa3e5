"""Scenario I/O namespace."""

from .scenario import (  # noqa: F401
    load_scenario,
    material_from_defn,
    save_scenario,
    scenario_to_runtime,
    validate_scenario,
)
