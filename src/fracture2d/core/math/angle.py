"""Planar angle helpers."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


TWO_PI = 2.0 * np.pi


def wrap_angle(a: ArrayLike) -> NDArray[np.float64]:
    """Map angles into ``(-pi, pi]``.

    Values already inside the interval are returned untouched, so the
    mapping is exactly idempotent.
    """
    a = np.asarray(a, dtype=np.float64)
    inside = (a > -np.pi) & (a <= np.pi)
    w = np.pi - np.mod(np.pi - a, TWO_PI)
    # np.mod can round up to 2*pi for tiny negative inputs
    w = np.where(w <= -np.pi, w + TWO_PI, w)
    return np.where(inside, a, w)
