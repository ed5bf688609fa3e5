"""Elastic, breakable beam bonds between particles."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..math.angle import wrap_angle
from ..math.vector import heading, norm, perp
from ..state.particles import MOVABLE_EPS
from ..state.system import SystemState


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BondLoads:
    """Per-bond loads for the rows in ``index``, before the breaking test."""

    index: np.ndarray
    stretch: np.ndarray
    normal_force: np.ndarray
    tangent_force: np.ndarray
    torque: np.ndarray
    failed: np.ndarray


class BondForces:
    """Normal, shear and bending response of unbroken bonds.

    Each directed bond acts on its owner only; the mirrored bond owned by
    the endpoint is evaluated on its own. A bond that exceeds either
    threshold is marked broken and contributes nothing from then on.
    """

    def __init__(self, kn: float) -> None:
        if kn <= 0.0:
            raise ValueError("kn must be > 0")
        self.kn = float(kn)

    def loads(self, state: SystemState) -> BondLoads:
        p = state.particles
        b = state.bonds
        kn = self.kn

        active = ~b.broken & p.movable(MOVABLE_EPS)[b.owner]
        index = np.flatnonzero(active)
        i = b.owner[index]
        j = b.endpoint[index]

        span = p.pos[j] - p.pos[i]
        length = norm(span)
        with np.errstate(divide="ignore", invalid="ignore"):
            n = span / length[:, None]
        t = perp(n)
        dl = length - b.rest_length[index]

        qb = heading(b.direction[index]) - heading(n)
        ti = wrap_angle(qb + p.angle[i])
        tj = wrap_angle(qb + p.angle[j])

        r2 = p.radius[i] ** 2
        f_n = n * (kn * dl)[:, None]
        with np.errstate(divide="ignore", invalid="ignore"):
            f_t = t * (-kn / 3.0 * r2 / length * (ti + tj))[:, None]
        torque = kn / 6.0 * r2 * (tj - 3.0 * ti)

        diameter = 2.0 * p.radius[i]
        f_n_mag = norm(f_n)
        f_t_mag = norm(f_t)
        tension = (dl > 0.0) & (
            f_n_mag / diameter + np.abs(kn / 2.0 * (tj - ti))
            > b.max_normal_force[index]
        )
        shear = f_t_mag / diameter > b.max_tangent_force[index]

        return BondLoads(
            index=index,
            stretch=dl,
            normal_force=f_n,
            tangent_force=f_t,
            torque=torque,
            failed=tension | shear,
        )

    def accumulate(self, state: SystemState) -> None:
        if len(state.bonds) == 0:
            return
        loads = self.loads(state)
        if loads.index.size == 0:
            return

        failed = loads.failed
        if np.any(failed):
            state.bonds.broken[loads.index[failed]] = True
            logger.debug("%d bond(s) broke", int(np.count_nonzero(failed)))

        keep = ~failed
        owner = state.bonds.owner[loads.index[keep]]
        p = state.particles
        np.add.at(p.force, owner, loads.normal_force[keep] + loads.tangent_force[keep])
        np.add.at(p.torque, owner, loads.torque[keep])
