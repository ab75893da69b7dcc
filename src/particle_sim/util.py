# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Low-level helpers operating on 3D vectors stored as numpy arrays of
shape (3,). Two-component inputs are accepted everywhere and treated as
lying in the z = 0 plane.
"""
from __future__ import annotations
import math

import numpy as np

from .constants import UNIT_EPS


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array of shape (3,).

    Accepts 2- or 3-component inputs (tuples, lists, arrays or anything
    implementing __array__). Always returns a fresh array so callers never
    alias the input.

    Raises:
        ValueError: If the input does not have 2 or 3 components.
    """
    a = np.array(x, dtype=np.float64).reshape(-1)
    if a.shape[0] == 3:
        return a
    if a.shape[0] == 2:
        return np.array([a[0], a[1], 0.0], dtype=np.float64)
    raise ValueError(f"Expected 2 or 3 components, got {a.shape[0]}")


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 3D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return math.sqrt(norm2(v))


def unit(v: np.ndarray, eps: float = UNIT_EPS) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.

    Returns zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(3, dtype=np.float64)
    return v / n
