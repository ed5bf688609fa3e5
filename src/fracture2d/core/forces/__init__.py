"""Forces and model utilities."""

from .base import ForceModel, Model  # noqa: F401
from .bonds import BondForces, BondLoads  # noqa: F401
from .composite import BDEMModel  # noqa: F401
from .contact import ContactForces  # noqa: F401
from .uniform_gravity import UniformGravity  # noqa: F401
