# MIT License (see LICENSE)
"""
Default parameters used throughout the simulation.

The engine is unit-agnostic; these values only matter as defaults for
particles, forces and the particle system.
"""
from __future__ import annotations

# Mass given to particles when none is specified.
DEFAULT_MASS: float = 1.0

# Default floor on separation for inverse-square attraction. Below this
# distance the force magnitude is held at strength / DEFAULT_MIN_DISTANCE².
DEFAULT_MIN_DISTANCE: float = 1.0

# Default time step for ParticleSystem.tick().
DEFAULT_DT: float = 1.0

# Integrator used when a ParticleSystem is created without choosing one.
DEFAULT_INTEGRATOR: str = "rk4"

# Lengths below this are treated as zero when normalizing directions.
UNIT_EPS: float = 1e-12
