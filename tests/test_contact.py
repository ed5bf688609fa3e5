from __future__ import annotations

import numpy as np

from fracture2d.core.forces import ContactForces
from fracture2d.core.state import ParticlesState, SystemState


KN = 1e7


def _state(pos, vel=None, inv_mass=None, radius=0.02) -> SystemState:
    pos = np.asarray(pos, dtype=np.float64)
    n = pos.shape[0]
    if inv_mass is None:
        inv_mass = np.full(n, 0.325)
    inv_mass = np.asarray(inv_mass, dtype=np.float64)
    return SystemState(
        particles=ParticlesState(
            pos=pos,
            vel=vel,
            radius=np.full(n, radius),
            inv_mass=inv_mass,
            inv_moment=inv_mass * 2.0,
        )
    )


def test_static_overlap_repels_along_line_of_centres() -> None:
    state = _state([[0.0, 0.0], [0.039, 0.0]])
    ContactForces(KN).accumulate(state)

    f = state.particles.force
    assert np.allclose(f[0], [-KN * 0.001, 0.0], rtol=1e-9)
    assert np.allclose(f[1], [KN * 0.001, 0.0], rtol=1e-9)
    assert not np.any(state.particles.torque)


def test_separated_and_touching_particles_do_not_interact() -> None:
    state = _state([[0.0, 0.0], [0.04, 0.0], [0.5, 0.5]])
    ContactForces(KN).accumulate(state)
    assert np.array_equal(state.particles.force, np.zeros((3, 2)))


def test_contact_reciprocity_with_velocities() -> None:
    vel = np.array([[0.3, -0.2], [-0.1, 0.4]])
    state = _state([[0.01, 0.02], [0.035, 0.045]], vel=vel, inv_mass=[0.3, 0.5])
    contact = ContactForces(KN)

    f_ij = contact.pair_force(state, 0, 1)
    f_ji = contact.pair_force(state, 1, 0)

    assert np.linalg.norm(f_ij) > 0.0
    assert np.allclose(f_ij, -f_ji, rtol=1e-12, atol=0.0)


def test_damping_opposes_approach() -> None:
    still = _state([[0.0, 0.0], [0.039, 0.0]])
    closing = _state(
        [[0.0, 0.0], [0.039, 0.0]], vel=np.array([[1.0, 0.0], [-1.0, 0.0]])
    )
    contact = ContactForces(KN)
    f_still = contact.pair_force(still, 0, 1)
    f_closing = contact.pair_force(closing, 0, 1)

    a = 1.4 * np.sqrt(KN / (0.325 + 0.325))
    assert f_closing[0] < f_still[0]
    assert np.isclose(f_closing[0] - f_still[0], -2.0 * a)


def test_immovable_particles_push_but_never_receive() -> None:
    state = _state([[0.0, 0.0], [0.0, 0.035]], inv_mass=[0.0, 0.325])
    ContactForces(KN).accumulate(state)

    f = state.particles.force
    assert np.array_equal(f[0], [0.0, 0.0])
    assert f[1, 1] > 0.0
    assert np.isclose(f[1, 1], KN * 0.005)


def test_chunked_evaluation_matches_full() -> None:
    rng = np.random.default_rng(7)
    pos = rng.uniform(0.0, 0.2, size=(40, 2))
    vel = rng.normal(size=(40, 2))
    inv_mass = np.where(rng.uniform(size=40) < 0.2, 0.0, 0.325)

    full = _state(pos, vel=vel, inv_mass=inv_mass)
    chunked = _state(pos, vel=vel, inv_mass=inv_mass)
    ContactForces(KN).accumulate(full)
    ContactForces(KN, chunk_size=7).accumulate(chunked)

    assert np.any(full.particles.force)
    assert np.allclose(
        full.particles.force, chunked.particles.force, rtol=1e-12, atol=1e-6
    )
