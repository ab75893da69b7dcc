# MIT License (see LICENSE)
"""
Force generators for particle simulation.

Two kinds of force live here:

- Global helpers (apply_gravity, apply_linear_drag) used by ParticleSystem
  for system-wide fields acting on every free particle.
- Force objects (Spring, Attraction, Drag, or user subclasses of Force)
  attached to specific particles and stored in ParticleSystem.forces.

All forces add into particle.force in-place and are designed to be called
during the force accumulation phase of a step, after the accumulators have
been cleared. Contributions are computed from positions and velocities only,
never from other accumulated forces, so the order in which forces are applied
does not change the result. An integrator may evaluate forces several times
per step (RK4 does so four times) against temporarily perturbed state.

Key concepts:
- A force that is off contributes nothing.
- A force whose endpoint is not part of a system turns itself off the
  next time it is applied instead of touching the dead particle.
- Forces never remove themselves from the system.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod

import numpy as np

from ..constants import DEFAULT_MIN_DISTANCE
from ..particle import Particle
from ..util import f64, norm
from ..vector import Vector3D

logger = logging.getLogger(__name__)


# =============================================================================
# Global fields
# =============================================================================

def apply_gravity(particle: Particle, g: np.ndarray) -> None:
    """
    Apply a uniform gravitational field to a particle.

    Implements F = m * g.

    Args:
        particle: Target particle.
        g: Gravitational acceleration vector [gx, gy, gz].
    """
    particle.force.add(particle.mass * g)


def apply_linear_drag(particle: Particle, c: float) -> None:
    """
    Apply linear drag force proportional to velocity.

    Implements F = -c * v. Has no effect if c == 0.
    """
    if c != 0.0:
        particle.force.add(particle.velocity.multiply_by(-c))


# =============================================================================
# Force objects
# =============================================================================

def _require_particle(p: object, role: str) -> Particle:
    if not isinstance(p, Particle):
        raise TypeError(f"{role} must be a Particle, got {type(p).__name__}")
    return p


class Force(ABC):
    """
    Base class for forces attached to particles.

    Subclasses list their targets in `particles` and implement _apply(),
    which reads current particle state and calls apply_force() on the
    targets. Callers use apply(), which handles the on/off flag and the
    dangling-endpoint check.
    """

    def __init__(self) -> None:
        self._on = True

    @property
    @abstractmethod
    def particles(self) -> tuple[Particle, ...]:
        """Particles this force reads and pushes."""
        ...

    @abstractmethod
    def _apply(self) -> None:
        ...

    def is_on(self) -> bool:
        return self._on

    def is_off(self) -> bool:
        return not self._on

    def turn_on(self) -> None:
        self._on = True

    def turn_off(self) -> None:
        self._on = False

    def is_dangling(self) -> bool:
        """True if any endpoint is not (or no longer) part of a system."""
        return any(not p.alive for p in self.particles)

    def apply(self) -> None:
        """
        Add this force's contribution to its particles' accumulators.

        Does nothing when off. If an endpoint is not in a system the force
        turns itself off and contributes nothing.
        """
        if not self._on:
            return
        if self.is_dangling():
            self._on = False
            logger.info("%s disabled: an endpoint is not part of a system", self)
            return
        self._apply()


class Spring(Force):
    """
    Damped spring between two particles.

    For separation Δp = p_a - p_b with length d and unit direction û:
        r = -k (d - L) - damping * ((v_a - v_b) · û)
    The force r û is added to one_end and -r û to other_end, so a stretched
    spring pulls the ends together and a compressed one pushes them apart.
    Coincident ends have no direction and receive no force.

    Args:
        one_end, other_end: Endpoints.
        strength: Spring constant k.
        damping: Damping along the spring axis.
        rest_length: Length L at which the spring exerts no force (>= 0).
    """

    def __init__(
        self,
        one_end: Particle,
        other_end: Particle,
        strength: float,
        damping: float = 0.0,
        rest_length: float = 0.0,
    ) -> None:
        super().__init__()
        self.a = _require_particle(one_end, "one_end")
        self.b = _require_particle(other_end, "other_end")
        self.strength = float(strength)
        self.damping = float(damping)
        self.set_rest_length(rest_length)

    @property
    def particles(self) -> tuple[Particle, ...]:
        return (self.a, self.b)

    def get_one_end(self) -> Particle:
        return self.a

    def get_the_other_end(self) -> Particle:
        return self.b

    def current_length(self) -> float:
        return self.a.position.distance_to(self.b.position)

    def set_strength(self, k: float) -> None:
        self.strength = float(k)

    def set_damping(self, d: float) -> None:
        self.damping = float(d)

    def set_rest_length(self, length: float) -> None:
        length = float(length)
        if length < 0.0:
            raise ValueError(f"Spring rest length must be non-negative, got {length}")
        self.rest_length = length

    def _apply(self) -> None:
        a2b = np.asarray(self.a.position) - np.asarray(self.b.position)
        d = norm(a2b)
        if d == 0.0:
            return
        u = a2b / d

        spring_force = -(d - self.rest_length) * self.strength
        rel_v = np.asarray(self.a.velocity) - np.asarray(self.b.velocity)
        damping_force = -self.damping * float(np.dot(u, rel_v))

        f = (spring_force + damping_force) * u
        self.a.apply_force(f)
        self.b.apply_force(-f)

    def __repr__(self) -> str:
        return (
            f"Spring({self.a.id}->{self.b.id}, k={self.strength}, "
            f"damping={self.damping}, rest={self.rest_length})"
        )


class Attraction(Force):
    """
    Inverse-square attraction (or repulsion) between two points.

    The magnitude is strength / max(d, min_distance)² and the force on
    one_end points toward the other end. Positive strength attracts,
    negative strength repels. The min_distance floor keeps the force
    finite as the ends approach each other.

    The other end may be a Particle, which receives the equal and opposite
    force, or a fixed point in space given as a 2- or 3-component sequence.

    Args:
        one_end: Particle pushed by the force.
        other_end: Particle or fixed point.
        strength: Signed strength.
        min_distance: Separation floor (> 0).
    """

    def __init__(
        self,
        one_end: Particle,
        other_end: "Particle | Vector3D | np.ndarray | tuple[float, ...]",
        strength: float,
        min_distance: float = DEFAULT_MIN_DISTANCE,
    ) -> None:
        super().__init__()
        self.a = _require_particle(one_end, "one_end")
        if other_end is None:
            raise TypeError("other_end must be a Particle or a point, got None")
        if isinstance(other_end, Particle):
            self.b: Particle | None = other_end
            self.point: np.ndarray | None = None
        else:
            self.b = None
            self.point = f64(other_end)
        self.strength = float(strength)
        self.set_min_distance(min_distance)

    @property
    def particles(self) -> tuple[Particle, ...]:
        if self.b is None:
            return (self.a,)
        return (self.a, self.b)

    def get_one_end(self) -> Particle:
        return self.a

    def get_the_other_end(self) -> Particle | None:
        return self.b

    def target_position(self) -> np.ndarray:
        """Current position of the other end."""
        if self.b is not None:
            return np.asarray(self.b.position)
        return self.point

    def set_strength(self, s: float) -> None:
        self.strength = float(s)

    def get_min_distance(self) -> float:
        return self.min_distance

    def set_min_distance(self, d: float) -> None:
        d = float(d)
        if d <= 0.0:
            raise ValueError(f"Attraction min_distance must be positive, got {d}")
        self.min_distance = d

    def _apply(self) -> None:
        a2b = self.target_position() - np.asarray(self.a.position)
        d = norm(a2b)
        if d == 0.0:
            return
        clamped = max(d, self.min_distance)
        f = (self.strength / (clamped * clamped)) * (a2b / d)
        self.a.apply_force(f)
        if self.b is not None:
            self.b.apply_force(-f)

    def __repr__(self) -> str:
        other = self.b.id if self.b is not None else tuple(self.point)
        return f"Attraction({self.a.id}->{other}, strength={self.strength})"


class Drag(Force):
    """
    Linear drag on a single particle: F = -damping * v.

    Opposes motion and does not depend on position.
    """

    def __init__(self, particle: Particle, damping: float) -> None:
        super().__init__()
        self.particle = _require_particle(particle, "particle")
        self.damping = float(damping)

    @property
    def particles(self) -> tuple[Particle, ...]:
        return (self.particle,)

    def set_damping(self, d: float) -> None:
        self.damping = float(d)

    def _apply(self) -> None:
        apply_linear_drag(self.particle, self.damping)

    def __repr__(self) -> str:
        return f"Drag({self.particle.id}, damping={self.damping})"
