# MIT License (see LICENSE)
"""
Core simulation components.

This subpackage provides:
    - Forces: Spring, Attraction, Drag and the Force base class, plus the
      global gravity and drag helpers.
    - Integrators: forward Euler, modified Euler and RK4.
    - Invariants: energy and momentum diagnostics.

Typical usage:
    from particle_sim.core import Spring, RungeKuttaIntegrator

    spring = Spring(a, b, strength=0.5, damping=0.1, rest_length=20)
    system.add_force(spring)
    RungeKuttaIntegrator(system).step(0.1)
"""
from .forces import (
    Force,
    Spring,
    Attraction,
    Drag,
    apply_gravity,
    apply_linear_drag,
)
from .integrators import (
    Integrator,
    ForwardEulerIntegrator,
    ModifiedEulerIntegrator,
    RungeKuttaIntegrator,
    make_integrator,
)
from .invariants import kinetic_energy, linear_momentum, spring_potential_energy

__all__ = [
    # Forces
    "Force",
    "Spring",
    "Attraction",
    "Drag",
    "apply_gravity",
    "apply_linear_drag",
    # Integrators
    "Integrator",
    "ForwardEulerIntegrator",
    "ModifiedEulerIntegrator",
    "RungeKuttaIntegrator",
    "make_integrator",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "spring_potential_energy",
]
