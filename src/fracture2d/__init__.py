"""Bonded discrete element fracture simulation in 2D."""

__version__ = "0.1.0"
