from __future__ import annotations

import numpy as np

from fracture2d.core.forces import BondForces
from fracture2d.core.scene import Material, SceneBuilder
from fracture2d.core.state import BondsState, ParticlesState, SystemState


MAT = Material()
KN = MAT.kn
R = MAT.radius


def _pair(x1: float = 0.039, material: Material = MAT) -> SystemState:
    builder = SceneBuilder(material)
    builder.add_particle(0.0, 0.0, bonded=True)
    builder.add_particle(x1, 0.0, bonded=True)
    return builder.build()


def test_pair_forms_two_directed_bonds() -> None:
    state = _pair()
    b = state.bonds
    assert len(b) == 2
    assert np.array_equal(b.owner, [0, 1])
    assert np.array_equal(b.endpoint, [1, 0])
    assert np.allclose(b.rest_length, 0.04)
    assert np.allclose(b.direction, [[1.0, 0.0], [-1.0, 0.0]])
    assert np.allclose(b.max_normal_force, 0.07 * KN)
    assert np.allclose(b.max_tangent_force, 0.07 * KN)


def test_compressed_bond_pushes_owner_away() -> None:
    state = _pair(0.039)
    BondForces(KN).accumulate(state)

    f = state.particles.force
    assert np.allclose(f[0], [-KN * 0.001, 0.0], rtol=1e-9)
    assert np.allclose(f[1], [KN * 0.001, 0.0], rtol=1e-9)
    assert np.allclose(state.particles.torque, 0.0)
    assert not np.any(state.bonds.broken)


def test_bond_at_rest_length_is_force_free() -> None:
    state = _pair(0.04)
    BondForces(KN).accumulate(state)
    assert np.array_equal(state.particles.force, np.zeros((2, 2)))
    assert np.array_equal(state.particles.torque, np.zeros(2))


def test_rotation_produces_shear_and_bending() -> None:
    state = _pair(0.04)
    state.particles.angle[:] = 0.3
    BondForces(KN).accumulate(state)

    shear = -KN / 3.0 * R**2 / 0.04 * 0.6
    torque = KN / 6.0 * R**2 * (0.3 - 3.0 * 0.3)
    assert np.allclose(state.particles.force[0], [0.0, shear])
    assert np.allclose(state.particles.force[1], [0.0, -shear])
    assert np.allclose(state.particles.torque, [torque, torque])
    assert not np.any(state.bonds.broken)


def test_tension_breaks_both_directions() -> None:
    state = _pair(0.039)
    state.particles.pos[1, 0] = 0.045
    BondForces(KN).accumulate(state)

    assert np.all(state.bonds.broken)
    assert np.array_equal(state.particles.force, np.zeros((2, 2)))
    assert np.array_equal(state.particles.torque, np.zeros(2))


def test_compression_never_breaks_on_normal_criterion() -> None:
    state = _pair(0.039)
    state.particles.pos[1, 0] = 0.030
    BondForces(KN).accumulate(state)

    assert not np.any(state.bonds.broken)
    assert np.allclose(state.particles.force[0], [-KN * 0.01, 0.0])


def test_excess_rotation_breaks_in_shear() -> None:
    state = _pair(0.04)
    state.particles.angle[:] = 0.5
    BondForces(KN).accumulate(state)

    assert np.all(state.bonds.broken)
    assert not np.any(state.particles.force)


def test_broken_bond_stays_broken_and_inert() -> None:
    state = _pair(0.039)
    forces = BondForces(KN)
    state.particles.pos[1, 0] = 0.045
    forces.accumulate(state)
    assert np.all(state.bonds.broken)

    state.particles.pos[1, 0] = 0.039
    state.particles.clear_accumulators()
    forces.accumulate(state)

    assert np.all(state.bonds.broken)
    assert np.array_equal(state.particles.force, np.zeros((2, 2)))
    assert forces.loads(state).index.size == 0


def test_mirrored_bonds_carry_independent_flags() -> None:
    state = _pair(0.039)
    state.bonds.broken[0] = True
    BondForces(KN).accumulate(state)

    f = state.particles.force
    assert np.array_equal(f[0], [0.0, 0.0])
    assert np.allclose(f[1], [KN * 0.001, 0.0], rtol=1e-9)
    assert state.bonds.broken.tolist() == [True, False]


def test_bending_mismatch_adds_to_tension_criterion() -> None:
    state = _pair(0.04)
    state.particles.angle[0] = 0.09
    state.particles.angle[1] = -0.09
    state.particles.pos[1, 0] = 0.0401
    loads = BondForces(KN).loads(state)
    assert loads.index.tolist() == [0, 1]
    assert np.allclose(loads.stretch, 1e-4)
    assert loads.failed.tolist() == [True, True]

    state.particles.angle[:] = 0.0
    loads = BondForces(KN).loads(state)
    assert not np.any(loads.failed)


def test_immovable_owner_bonds_are_not_evaluated() -> None:
    particles = ParticlesState(
        pos=np.array([[0.0, 0.0], [0.05, 0.0]]),
        radius=np.full(2, R),
        inv_mass=np.array([0.0, MAT.inv_mass]),
        inv_moment=np.array([0.0, MAT.inv_moment]),
    )
    bonds = BondsState.empty()
    bonds.append(0, 1, 0.04, np.array([1.0, 0.0]), 0.07 * KN, 0.07 * KN)
    bonds.append(1, 0, 0.04, np.array([-1.0, 0.0]), 0.07 * KN, 0.07 * KN)
    state = SystemState(particles=particles, bonds=bonds)

    BondForces(KN).accumulate(state)
    assert state.bonds.broken.tolist() == [False, True]
