# MIT License (see LICENSE)
"""
particle_sim - A force-directed particle simulation engine.

Point masses connected by springs, pushed by attraction/repulsion and
slowed by drag, advanced by interchangeable numerical integrators. Typical
use is animating force-directed layouts such as graph drawings, where
positions emerge from repeated relaxation steps.

Main entry points:
    - ParticleSystem: The world containing particles and forces.
    - Particle: A point mass with position, velocity and force accumulator.
    - Vector3D: Vector type used for particle state.
    - Spring, Attraction, Drag: Built-in forces.

Submodules:
    - core: Forces, integrators and invariants.
    - renderer: Optional read-only visualization adapters.

Example:
    from particle_sim import ParticleSystem

    system = ParticleSystem(integrator="rk4", drag=0.1)
    a = system.make_particle(position=(0, 0, 0))
    b = system.make_particle(position=(30, 0, 0))
    system.make_spring(a, b, strength=0.2, damping=0.1, rest_length=20)
    system.tick(0.5)
"""
import logging

from .vector import Vector3D
from .particle import Particle
from .system import ParticleSystem
from .core.forces import Force, Spring, Attraction, Drag
from .core.integrators import (
    Integrator,
    ForwardEulerIntegrator,
    ModifiedEulerIntegrator,
    RungeKuttaIntegrator,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core simulation
    "ParticleSystem",
    "Particle",
    "Vector3D",
    # Forces
    "Force",
    "Spring",
    "Attraction",
    "Drag",
    # Integrators
    "Integrator",
    "ForwardEulerIntegrator",
    "ModifiedEulerIntegrator",
    "RungeKuttaIntegrator",
]
