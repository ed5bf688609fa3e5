"""Physics core: state, force models, integrator and scheduling."""
