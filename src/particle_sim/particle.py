# MIT License (see LICENSE)
"""
Point-mass particle: the entity moved by the simulation.

Each particle carries its own kinematic state and a force accumulator:
  - Forces add into `force` during ParticleSystem.apply_forces().
  - Integrators read force/mass/velocity and write position/velocity.
  - The accumulator is zeroed by ParticleSystem.clear_forces() before every
    force evaluation.

Fixed particles act as anchors: integrators never move them, although
external code (e.g. an interactive drag) may reposition them directly.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field

import numpy as np

from .constants import DEFAULT_MASS
from .vector import Vector3D


def _check_mass(mass: float) -> float:
    mass = float(mass)
    if not math.isfinite(mass) or mass <= 0.0:
        raise ValueError(f"Particle mass must be positive and finite, got {mass}")
    return mass


@dataclass(eq=False)
class Particle:
    """
    A point mass with position, velocity and accumulated force.

    Attributes:
        mass: Mass (> 0). Validated on construction and by set_mass().
        position: Current position. Copied into a Vector3D owned by this particle.
        velocity: Current velocity. Copied into a Vector3D owned by this particle.
        fixed: If True the particle is an anchor and is skipped by integrators.
        age: Simulated time this particle has existed, advanced by integrators.
        force: Accumulated force for the current evaluation (runtime state).
        id: Identifier assigned by ParticleSystem.add_particle(). Never reused.
        alive: True while the particle belongs to a ParticleSystem. Set by
               add_particle() and cleared on removal.

    Note:
        Particles compare by identity. Forces hold direct references and
        use `alive` to detect that an endpoint is not (or no longer) part
        of a system.
    """
    mass: float = DEFAULT_MASS
    position: Vector3D | np.ndarray | tuple[float, ...] = (0.0, 0.0, 0.0)
    velocity: Vector3D | np.ndarray | tuple[float, ...] = (0.0, 0.0, 0.0)
    fixed: bool = False
    age: float = 0.0

    # Runtime state (not user-specified)
    force: Vector3D = field(default_factory=Vector3D)
    id: int = -1
    alive: bool = False

    def __post_init__(self) -> None:
        """Validate mass and take private copies of all vectors."""
        self.mass = _check_mass(self.mass)
        self.position = Vector3D.of(self.position)
        self.velocity = Vector3D.of(self.velocity)
        self.force = Vector3D.of(self.force)

    def is_free(self) -> bool:
        """True if integrators may move this particle."""
        return not self.fixed

    def is_fixed(self) -> bool:
        return self.fixed

    def make_fixed(self) -> "Particle":
        """Pin the particle in place. Its velocity is zeroed."""
        self.fixed = True
        self.velocity.clear()
        return self

    def make_free(self) -> "Particle":
        self.fixed = False
        return self

    def set_mass(self, mass: float) -> None:
        """
        Change the particle's mass.

        Raises:
            ValueError: If mass is not positive and finite.
        """
        self.mass = _check_mass(mass)

    def apply_force(self, f: Vector3D | np.ndarray | tuple[float, ...]) -> None:
        """Add f into the force accumulator. No scaling is applied."""
        self.force.add(f)

    def clear_force(self) -> None:
        """Reset accumulated force to zero."""
        self.force.clear()

    def reset(self) -> None:
        """Restore default state: unit mass, free, at rest at the origin."""
        self.mass = DEFAULT_MASS
        self.fixed = False
        self.age = 0.0
        self.position.clear()
        self.velocity.clear()
        self.force.clear()
