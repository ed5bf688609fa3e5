"""Scene construction: particle grids, boundary walls and the initial bond graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .math.vector import norm, unit
from .state import BondsState, ParticlesState, SystemState


logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Material:
    """Single-material BDEM parameters.

    ``kn`` is the normal stiffness (Young's modulus scale). Per-particle
    inverse mass and moment scale as ``1/r**2`` and ``1/r**4``.
    """

    kn: float = 1e7
    radius: float = 0.02
    invmass_coeff: float = 1.3e-4
    invmoment_coeff: float = 2.6e-4
    bond_strength: float = 0.07
    bond_range: float = 0.1

    def __post_init__(self) -> None:
        if self.kn <= 0.0:
            raise ValueError("kn must be > 0")
        if self.radius <= 0.0:
            raise ValueError("radius must be > 0")
        if self.invmass_coeff <= 0.0 or self.invmoment_coeff <= 0.0:
            raise ValueError("inverse mass/moment coefficients must be > 0")
        if self.bond_strength <= 0.0:
            raise ValueError("bond_strength must be > 0")

    @property
    def inv_mass(self) -> float:
        return self.invmass_coeff / self.radius**2

    @property
    def inv_moment(self) -> float:
        return self.invmoment_coeff / self.radius**4

    @property
    def bond_threshold(self) -> float:
        return self.bond_strength * self.kn

    @property
    def rest_length(self) -> float:
        return 2.0 * self.radius


def frange(start: float, end: float, step: float) -> list[float]:
    """Half-open range built by repeated addition, ``start <= x < end``."""
    if step <= 0.0:
        raise ValueError("step must be > 0")
    values = []
    x = float(start)
    while x < end:
        values.append(x)
        x += step
    return values


class SceneBuilder:
    def __init__(self, material: Material | None = None) -> None:
        self.material = material if material is not None else Material()
        self._pos: list[tuple[float, float]] = []
        self._fixed: list[bool] = []
        self._bonded: list[bool] = []

    def __len__(self) -> int:
        return len(self._pos)

    def add_particle(
        self, x: float, y: float, fixed: bool = False, bonded: bool = False
    ) -> int:
        self._pos.append((float(x), float(y)))
        self._fixed.append(bool(fixed))
        self._bonded.append(bool(bonded) and not fixed)
        return len(self._pos) - 1

    def add_block(
        self,
        x_range: tuple[float, float],
        y_range: tuple[float, float],
        bonded: bool = True,
    ) -> range:
        """Fill a rectangle with a square grid of touching particles."""
        spacing = self.material.rest_length
        first = len(self._pos)
        for x in frange(x_range[0], x_range[1], spacing):
            for y in frange(y_range[0], y_range[1], spacing):
                self.add_particle(x, y, bonded=bonded)
        return range(first, len(self._pos))

    def add_walls(self, size: float = 1.0) -> range:
        """Line the four sides of a ``size`` box with immovable particles."""
        r = self.material.radius
        first = len(self._pos)
        for x in frange(r, size, 2.0 * r):
            self.add_particle(x, 0.0, fixed=True)
            self.add_particle(x, size, fixed=True)
            self.add_particle(0.0, x, fixed=True)
            self.add_particle(size, x, fixed=True)
        return range(first, len(self._pos))

    def build(self) -> SystemState:
        mat = self.material
        n = len(self._pos)
        pos = np.asarray(self._pos, dtype=np.float64).reshape(n, 2)
        fixed = np.asarray(self._fixed, dtype=bool)
        particles = ParticlesState(
            pos=pos,
            radius=np.full(n, mat.radius),
            inv_mass=np.where(fixed, 0.0, mat.inv_mass),
            inv_moment=np.where(fixed, 0.0, mat.inv_moment),
        )
        bonds = form_bonds(particles, np.asarray(self._bonded, dtype=bool), mat)
        logger.info(
            "scene: %d particles (%d fixed), %d directed bonds",
            n,
            int(fixed.sum()),
            len(bonds),
        )
        return SystemState(particles=particles, bonds=bonds)


def form_bonds(
    particles: ParticlesState, bonded: np.ndarray, material: Material
) -> BondsState:
    """Bond every ordered pair of ``bonded`` particles that nearly touch.

    A pair ``(i, j)`` is bonded when ``r_i + r_j - |x_j - x_i|`` is at least
    ``-bond_range * r``. Each direction gets its own row.
    """
    idx = np.flatnonzero(bonded)
    if idx.size < 2:
        return BondsState.empty()
    pos = particles.pos[idx]
    rad = particles.radius[idx]
    delta = pos[None, :, :] - pos[:, None, :]
    dist = norm(delta)
    overlap = rad[:, None] + rad[None, :] - dist
    close = overlap >= -material.bond_range * material.radius
    np.fill_diagonal(close, False)
    a, b = np.nonzero(close)
    m = a.size
    threshold = material.bond_threshold
    return BondsState(
        owner=idx[a],
        endpoint=idx[b],
        rest_length=np.full(m, material.rest_length),
        direction=unit(delta[a, b]),
        max_normal_force=np.full(m, threshold),
        max_tangent_force=np.full(m, threshold),
    )


def demo_scene(material: Material | None = None) -> SystemState:
    """A bonded beam and a bonded block inside a walled box, with a loose
    block of particles above the beam that falls onto it."""
    builder = SceneBuilder(material)
    builder.add_block((0.1, 0.9), (0.4, 0.45), bonded=True)
    builder.add_block((0.7, 0.9), (0.1, 0.3), bonded=True)
    builder.add_walls(1.0)
    builder.add_block((0.2, 0.8), (0.5, 0.7), bonded=False)
    return builder.build()
