"""Diagnostics namespace."""

from .particles import (  # noqa: F401
    bond_energy,
    broken_bond_count,
    contact_energy,
    is_finite,
    kinetic_energy,
    linear_momentum,
    potential_energy_gravity,
    total_energy,
    total_mass,
)
