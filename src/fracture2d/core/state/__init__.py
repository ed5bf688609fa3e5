"""State namespace."""

from .bonds import BondsState  # noqa: F401
from .particles import MOVABLE_EPS, ParticlesState  # noqa: F401
from .system import SystemState  # noqa: F401
