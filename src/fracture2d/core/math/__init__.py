"""Math utilities namespace."""

from .angle import wrap_angle  # noqa: F401
from .vector import heading, norm, perp, unit  # noqa: F401
