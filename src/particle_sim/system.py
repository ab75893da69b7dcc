# MIT License (see LICENSE)
"""
The particle system: the world container and simulation controller.

The ParticleSystem class manages:
- The ordered lists of particles and forces.
- Global fields (uniform gravity and linear drag).
- The integrator that advances it (chosen by name).

A tick (ParticleSystem.tick or integrator.step) runs:
    1. clear_forces(): zero every particle's accumulator.
    2. apply_forces(): global fields, then every enabled force in insertion
       order. RK4 repeats 1-2 for each of its four stages.
    3. The integrator updates free particles.

Structure:
    - User creates a ParticleSystem.
    - User adds particles and forces (make_particle(), make_spring(), ...).
    - User calls system.tick(dt) in a loop and reads particle positions.

Membership changes apply to subsequent force evaluations. Removing a particle
marks it dead; forces that still reference it turn themselves off the next
time they are applied. The system is not thread-safe: one caller drives it.
"""
from __future__ import annotations
import logging
import numbers
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import ContextManager

import numpy as np

from .constants import DEFAULT_DT, DEFAULT_INTEGRATOR, DEFAULT_MASS, DEFAULT_MIN_DISTANCE
from .particle import Particle
from .profiler import Profiler
from .util import f64
from .vector import Vector3D
from .core.forces import (
    Force,
    Spring,
    Attraction,
    Drag,
    apply_gravity,
    apply_linear_drag,
)
from .core.integrators import Integrator, make_integrator

logger = logging.getLogger(__name__)


@dataclass
class ParticleSystem:
    """
    A mutable collection of particles and the forces acting on them.

    Attributes:
        gravity: Uniform gravitational acceleration applied to free particles
                 as F = m g (default: none).
        drag: Global linear drag coefficient applied to free particles as
              F = -drag v (default: 0).
        integrator: Integration scheme ("euler", "modified_euler", "rk4").
        profiler: Optional Profiler instance for timing statistics.
    """
    gravity: tuple[float, ...] | np.ndarray = (0.0, 0.0, 0.0)
    drag: float = 0.0
    integrator: str = DEFAULT_INTEGRATOR
    profiler: Profiler | None = None

    # Internal state
    particles: list[Particle] = field(default_factory=list)
    forces: list[Force] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        """Convert configuration and bind the integrator."""
        self._g = f64(self.gravity)
        self.drag = float(self.drag)
        self._members: dict[int, Particle] = {}
        self._next_id = 1
        self._integrator = make_integrator(self.integrator, self)

        # Particles passed to the constructor are adopted
        initial, self.particles = self.particles, []
        for p in initial:
            self.add_particle(p)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_integrator(self, name: str) -> None:
        """
        Switch to a different integration scheme.

        Raises:
            ValueError: If name is unknown. The current integrator is kept.
        """
        self._integrator = make_integrator(name, self)
        self.integrator = name
        logger.debug("Using %s integrator", name)

    def get_integrator(self) -> Integrator:
        return self._integrator

    def set_gravity(self, x: float | tuple[float, ...], y: float = 0.0, z: float = 0.0) -> None:
        """Set the uniform gravity vector, from components or a sequence."""
        if isinstance(x, numbers.Real):
            self.gravity = (float(x), float(y), float(z))
        else:
            self.gravity = x
        self._g = f64(self.gravity)

    def get_gravity(self) -> Vector3D:
        return Vector3D.of(self._g)

    def set_drag(self, c: float) -> None:
        self.drag = float(c)

    # -------------------------------------------------------------------------
    # Particles
    # -------------------------------------------------------------------------

    def make_particle(
        self,
        mass: float = DEFAULT_MASS,
        position: tuple[float, ...] | np.ndarray | Vector3D = (0.0, 0.0, 0.0),
        velocity: tuple[float, ...] | np.ndarray | Vector3D = (0.0, 0.0, 0.0),
        fixed: bool = False,
    ) -> Particle:
        """
        Create a particle and add it to the system.

        Raises:
            ValueError: If mass is not positive.
        """
        p = Particle(mass=mass, position=position, velocity=velocity, fixed=fixed)
        self.add_particle(p)
        return p

    def add_particle(self, particle: Particle) -> int:
        """
        Add an existing particle to the system.

        Assigns a fresh ID, never reused within this system.

        Returns:
            The assigned particle ID.

        Raises:
            TypeError: If particle is not a Particle.
            ValueError: If the particle already belongs to this or another system.
        """
        if not isinstance(particle, Particle):
            raise TypeError(f"Expected a Particle, got {type(particle).__name__}")
        if self.contains(particle):
            raise ValueError(f"Particle {particle.id} is already in this system")
        if particle.alive:
            raise ValueError(f"Particle {particle.id} belongs to another particle system")
        particle.id = self._next_id
        self._next_id += 1
        particle.alive = True
        self.particles.append(particle)
        self._members[particle.id] = particle
        logger.debug("Added particle %d", particle.id)
        return particle.id

    def remove_particle(self, particle: Particle | int) -> Particle:
        """
        Remove a particle, given the particle itself or its index.

        Forces attached to it stay in the system and switch themselves off
        on their next application.

        Returns:
            The removed particle.

        Raises:
            ValueError: If the particle is not in this system.
            IndexError: If an index is out of range.
        """
        if isinstance(particle, int):
            particle = self.particles[particle]
        if not self.contains(particle):
            raise ValueError("Particle is not part of this system")
        self.particles.remove(particle)
        del self._members[particle.id]
        particle.alive = False
        logger.debug("Removed particle %d", particle.id)
        return particle

    def contains(self, particle: Particle) -> bool:
        """True if particle currently belongs to this system."""
        return self._members.get(particle.id) is particle

    def get_particle(self, i: int) -> Particle:
        return self.particles[i]

    def get_particles(self) -> list[Particle]:
        """
        The live, ordered list of particles.

        This is the system's own list, not a copy: it reflects later
        additions and removals. Do not mutate membership while iterating.
        """
        return self.particles

    def num_particles(self) -> int:
        return len(self.particles)

    # -------------------------------------------------------------------------
    # Forces
    # -------------------------------------------------------------------------

    def _require_member(self, particle: Particle, role: str) -> None:
        if not isinstance(particle, Particle):
            raise TypeError(f"{role} must be a Particle, got {type(particle).__name__}")
        if not self.contains(particle):
            raise ValueError(f"{role} is not part of this system")

    def make_spring(
        self,
        a: Particle,
        b: Particle,
        strength: float,
        damping: float = 0.0,
        rest_length: float = 0.0,
    ) -> Spring:
        """
        Connect two particles of this system with a damped spring.

        Raises:
            TypeError: If an endpoint is not a Particle.
            ValueError: If an endpoint is not in this system or rest_length < 0.
        """
        self._require_member(a, "one_end")
        self._require_member(b, "other_end")
        return self.add_force(Spring(a, b, strength, damping, rest_length))

    def make_attraction(
        self,
        a: Particle,
        b: Particle | tuple[float, ...] | np.ndarray | Vector3D,
        strength: float,
        min_distance: float = DEFAULT_MIN_DISTANCE,
    ) -> Attraction:
        """
        Attract (strength > 0) or repel (strength < 0) a particle toward
        another particle of this system or a fixed point.

        Raises:
            TypeError: If an endpoint is missing or of the wrong type.
            ValueError: If a particle endpoint is not in this system or
                        min_distance <= 0.
        """
        self._require_member(a, "one_end")
        if isinstance(b, Particle):
            self._require_member(b, "other_end")
        return self.add_force(Attraction(a, b, strength, min_distance))

    def make_drag(self, particle: Particle, damping: float) -> Drag:
        """Attach linear drag to a single particle of this system."""
        self._require_member(particle, "particle")
        return self.add_force(Drag(particle, damping))

    def add_force(self, force: Force) -> Force:
        """
        Register a force (built-in or custom Force subclass).

        Every particle the force targets must belong to this system.

        Returns:
            The force, for chaining.

        Raises:
            TypeError: If force is not a Force.
            ValueError: If one of its particles is not in this system.
        """
        if not isinstance(force, Force):
            raise TypeError(f"Expected a Force, got {type(force).__name__}")
        for p in force.particles:
            self._require_member(p, "force endpoint")
        self.forces.append(force)
        logger.debug("Added %r", force)
        return force

    def remove_force(self, force: Force | int) -> Force:
        """
        Remove a force, given the force itself or its index.

        Raises:
            ValueError: If the force is not in this system.
            IndexError: If an index is out of range.
        """
        if isinstance(force, int):
            force = self.forces[force]
        try:
            self.forces.remove(force)
        except ValueError:
            raise ValueError("Force is not part of this system") from None
        logger.debug("Removed %r", force)
        return force

    def get_force(self, i: int) -> Force:
        return self.forces[i]

    def num_forces(self) -> int:
        return len(self.forces)

    def clear(self) -> None:
        """Remove every particle and force."""
        for p in self.particles:
            p.alive = False
        self.particles.clear()
        self._members.clear()
        self.forces.clear()
        logger.debug("Cleared particle system")

    # -------------------------------------------------------------------------
    # Force accumulation
    # -------------------------------------------------------------------------

    def _section(self, name: str) -> ContextManager:
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def clear_forces(self) -> None:
        """Zero the force accumulator of every particle."""
        with self._section("clear_forces"):
            for p in self.particles:
                p.clear_force()

    def apply_forces(self) -> None:
        """
        Accumulate all forces into the particles.

        Global gravity and drag act on free particles; then every enabled
        force is applied in insertion order. Safe to call repeatedly within
        one step against modified particle state.
        """
        with self._section("apply_forces"):
            has_gravity = bool(np.any(self._g))
            if has_gravity or self.drag != 0.0:
                for p in self.particles:
                    if not p.is_free():
                        continue
                    if has_gravity:
                        apply_gravity(p, self._g)
                    apply_linear_drag(p, self.drag)

            for f in tuple(self.forces):
                if f.is_on():
                    f.apply()

    # -------------------------------------------------------------------------
    # Time stepping
    # -------------------------------------------------------------------------

    def tick(self, dt: float = DEFAULT_DT) -> None:
        """Advance the simulation by dt using the configured integrator."""
        dt = float(dt)
        with self._section("step"):
            self._integrator.step(dt)
        self.time += dt
