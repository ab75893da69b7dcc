# MIT License (see LICENSE)
"""
Numerical integrators for particle systems.

Each integrator is bound to one ParticleSystem and advances it by a time
step dt. All of them solve the point-mass equations of motion:
    dx/dt = v,         dv/dt = F/m

Every step starts by clearing the force accumulators and re-applying all
forces, then updates free particles only. Fixed particles keep their position
and velocity. Every particle's age advances by dt.

Available integrators:
- ForwardEulerIntegrator: explicit first order. Fastest, least stable.
- ModifiedEulerIntegrator: second-order position update under constant
  acceleration (exact for uniform gravity).
- RungeKuttaIntegrator: classical 4th-order Runge-Kutta with forces
  re-evaluated at each stage. Slower but much more accurate and stable.

dt is not validated: negative or large steps are the caller's business.
A particle with zero mass surfaces as ZeroDivisionError.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..particle import Particle
    from ..system import ParticleSystem


class Integrator(ABC):
    """
    Base class binding an integration scheme to a ParticleSystem.

    Args:
        system: The particle system this integrator advances.
    """

    def __init__(self, system: "ParticleSystem") -> None:
        self.system = system

    @abstractmethod
    def step(self, dt: float) -> "Integrator":
        """Advance the bound system by dt. Returns self."""
        ...

    def _evaluate_forces(self) -> None:
        """Recompute every particle's accumulator from current state."""
        self.system.clear_forces()
        self.system.apply_forces()

    def _advance_age(self, particles: list["Particle"], dt: float) -> None:
        for p in particles:
            p.age += dt


class ForwardEulerIntegrator(Integrator):
    """
    Explicit (forward) Euler integration.

    For each free particle:
        x(t+dt) = x(t) + v(t) dt
        v(t+dt) = v(t) + F(t)/m dt

    The position update uses the velocity from before this step. Compared to
    the Runge-Kutta integrator this one is faster but can be less stable; it
    steadily gains energy on oscillating systems.
    """

    def step(self, dt: float) -> "ForwardEulerIntegrator":
        self._evaluate_forces()

        particles = list(self.system.get_particles())
        for p in particles:
            if p.is_free():
                p.position.add(p.velocity.multiply_by(dt))
                p.velocity.add(p.force.multiply_by(dt / p.mass))
        self._advance_age(particles, dt)
        return self


class ModifiedEulerIntegrator(Integrator):
    """
    Euler integration with a second-order position term.

        a = F/m
        x(t+dt) = x(t) + v(t) dt + 0.5 a dt²
        v(t+dt) = v(t) + a dt

    Exact when the acceleration is constant over the step.
    """

    def step(self, dt: float) -> "ModifiedEulerIntegrator":
        self._evaluate_forces()

        half_dt2 = 0.5 * dt * dt
        particles = list(self.system.get_particles())
        for p in particles:
            if p.is_free():
                a = np.asarray(p.force) * (1.0 / p.mass)
                p.position.add(np.asarray(p.velocity) * dt + a * half_dt2)
                p.velocity.add(a * dt)
        self._advance_age(particles, dt)
        return self


class RungeKuttaIntegrator(Integrator):
    """
    Classical 4th-order Runge-Kutta integration.

    Forces are evaluated four times per step: at the start, twice at the
    midpoint and once at the end, each time against a hypothetical state the
    integrator writes into the free particles. Derivatives are combined with
    weights (1, 2, 2, 1)/6 for O(dt⁵) local error. The original state is kept
    aside and the final state is written from it, so intermediate stages
    leave no trace.
    """

    def step(self, dt: float) -> "RungeKuttaIntegrator":
        particles = list(self.system.get_particles())
        free = [p for p in particles if p.is_free()]

        # Save initial state
        x0 = [np.array(p.position) for p in free]
        v0 = [np.array(p.velocity) for p in free]

        def stage() -> list[tuple[np.ndarray, np.ndarray]]:
            """Evaluate (dx, dv) over dt at the state currently in the particles."""
            self._evaluate_forces()
            return [
                (np.array(p.velocity) * dt, np.asarray(p.force) * (dt / p.mass))
                for p in free
            ]

        def move_to(k: list[tuple[np.ndarray, np.ndarray]], frac: float) -> None:
            for p, x, v, (dx, dv) in zip(free, x0, v0, k):
                p.position.set(*(x + frac * dx))
                p.velocity.set(*(v + frac * dv))

        # RK4 stages
        k1 = stage()
        move_to(k1, 0.5)
        k2 = stage()
        move_to(k2, 0.5)
        k3 = stage()
        move_to(k3, 1.0)
        k4 = stage()

        # Weighted combination
        for p, x, v, s1, s2, s3, s4 in zip(free, x0, v0, k1, k2, k3, k4):
            p.position.set(*(x + (s1[0] + 2.0 * s2[0] + 2.0 * s3[0] + s4[0]) / 6.0))
            p.velocity.set(*(v + (s1[1] + 2.0 * s2[1] + 2.0 * s3[1] + s4[1]) / 6.0))

        self._advance_age(particles, dt)
        return self


INTEGRATORS: dict[str, type[Integrator]] = {
    "euler": ForwardEulerIntegrator,
    "modified_euler": ModifiedEulerIntegrator,
    "rk4": RungeKuttaIntegrator,
}


def make_integrator(name: str, system: "ParticleSystem") -> Integrator:
    """
    Create the integrator registered under name, bound to system.

    Args:
        name: One of "euler", "modified_euler", "rk4".
        system: System the integrator will advance.

    Raises:
        ValueError: If name is not a known integrator.
    """
    try:
        cls = INTEGRATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown integrator: {name!r} (expected one of {sorted(INTEGRATORS)})"
        ) from None
    return cls(system)
