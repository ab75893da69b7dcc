# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and comparing integrators.
In a closed system of springs with no damping or drag, total energy and
momentum should remain constant (within integration error).
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..particle import Particle
from .forces import Force, Spring


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total kinetic energy T = Σ 0.5 * m * v² over free particles.
    """
    ke = 0.0
    for p in particles:
        if p.is_fixed():
            continue
        ke += 0.5 * p.mass * p.velocity.length_squared()
    return ke


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Total linear momentum P = Σ m * v over free particles.

    Returns:
        Momentum vector [Px, Py, Pz].
    """
    total = np.zeros(3, dtype=np.float64)
    for p in particles:
        if p.is_fixed():
            continue
        total += p.mass * np.asarray(p.velocity)
    return total


def spring_potential_energy(forces: Iterable[Force]) -> float:
    """
    Elastic energy stored in enabled springs: Σ 0.5 * k * (d - L)².

    Forces that are not springs, or are switched off, are ignored.
    """
    pe = 0.0
    for f in forces:
        if isinstance(f, Spring) and f.is_on():
            stretch = f.current_length() - f.rest_length
            pe += 0.5 * f.strength * stretch * stretch
    return pe
