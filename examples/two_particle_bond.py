"""Two bonded particles released slightly compressed (toy model)."""

from __future__ import annotations

from fracture2d.core.forces import BDEMModel, BondForces, ContactForces
from fracture2d.core.scene import Material, SceneBuilder
from fracture2d.core.scheduler import StepScheduler
from fracture2d.core.simulation import Simulation


if __name__ == "__main__":
    material = Material()
    builder = SceneBuilder(material)
    builder.add_particle(0.0, 0.0, bonded=True)
    builder.add_particle(0.039, 0.0, bonded=True)
    state = builder.build()

    model = BDEMModel(forces=[ContactForces(material.kn), BondForces(material.kn)])
    scheduler = StepScheduler(fps=60.0, kn=material.kn, radius=material.radius)
    sim = Simulation(state, model, scheduler)

    for frame in range(5):
        snap = sim.advance_frame()
        gap = snap.pos[1, 0] - snap.pos[0, 0]
        print(f"t={snap.time:.3e} gap={gap:.6f} broken={snap.broken_count}")
