"""Vector utilities for NumPy arrays.

All vectors are expected to be shaped (..., 2).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]


def norm(v: ArrayF, axis: int = -1) -> ArrayF:
    """Return the L2 norm along an axis."""
    return np.linalg.norm(v, axis=axis)


def unit(v: ArrayF, axis: int = -1) -> ArrayF:
    """Return unit vectors with safe handling of zero vectors."""
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v, axis=axis, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        u = np.where(n > 0.0, v / n, 0.0)
    return u


def perp(v: ArrayF) -> ArrayF:
    """Rotate vectors by +90 degrees."""
    v = np.asarray(v, dtype=np.float64)
    return np.stack([-v[..., 1], v[..., 0]], axis=-1)


def heading(v: ArrayF) -> ArrayF:
    """Return the polar angle of each vector."""
    v = np.asarray(v, dtype=np.float64)
    return np.arctan2(v[..., 1], v[..., 0])
