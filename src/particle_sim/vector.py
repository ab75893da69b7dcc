# MIT License (see LICENSE)
"""
Three-component vector type used for particle state.

Vector3D wraps a float64 numpy array of shape (3,). Most operations are
pure and return a new vector, but a small set of accumulators (add,
subtract, scale_by, clear, set) mutate the receiver and return it so that
per-particle force and velocity updates do not allocate in hot loops:

    particle.force.add(contribution)                 # in place
    step = particle.velocity.multiply_by(dt)         # new vector

Arithmetic is strictly component-wise; nothing is normalized implicitly.
NaN and infinity propagate following IEEE semantics, so callers dividing
by a length must guard against zero themselves.
"""
from __future__ import annotations
from typing import Iterator

import numpy as np

from .util import f64, norm, norm2, unit


class Vector3D:
    """
    Mutable 3D vector with in-place accumulation and pure arithmetic.

    Args:
        x, y, z: Components. z defaults to 0 for 2D use.
    """

    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._v = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def of(cls, value: "Vector3D | np.ndarray | tuple[float, ...] | list[float]") -> "Vector3D":
        """
        Build a new, independent vector from a Vector3D or array-like.

        Two-component inputs are placed in the z = 0 plane.
        """
        out = cls.__new__(cls)
        out._v = f64(value)
        return out

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    @property
    def x(self) -> float:
        return float(self._v[0])

    @x.setter
    def x(self, value: float) -> None:
        self._v[0] = value

    @property
    def y(self) -> float:
        return float(self._v[1])

    @y.setter
    def y(self, value: float) -> None:
        self._v[1] = value

    @property
    def z(self) -> float:
        return float(self._v[2])

    @z.setter
    def z(self, value: float) -> None:
        self._v[2] = value

    # -------------------------------------------------------------------------
    # In-place accumulation
    # -------------------------------------------------------------------------

    def set(self, x: "float | Vector3D", y: float = 0.0, z: float = 0.0) -> "Vector3D":
        """Overwrite all components, either from scalars or another vector."""
        if isinstance(x, Vector3D):
            self._v[:] = x._v
        else:
            self._v[0] = x
            self._v[1] = y
            self._v[2] = z
        return self

    def add(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> "Vector3D":
        """Add other into this vector in place and return self."""
        self._v += _raw(other)
        return self

    def subtract(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> "Vector3D":
        """Subtract other from this vector in place and return self."""
        self._v -= _raw(other)
        return self

    def scale_by(self, s: float) -> "Vector3D":
        """Multiply this vector by a scalar in place and return self."""
        self._v *= s
        return self

    def clear(self) -> "Vector3D":
        """Zero all components in place and return self."""
        self._v[:] = 0.0
        return self

    # -------------------------------------------------------------------------
    # Pure arithmetic
    # -------------------------------------------------------------------------

    def multiply_by(self, s: float) -> "Vector3D":
        """Return a new vector equal to this one scaled by s."""
        return _wrap(self._v * s)

    def plus(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> "Vector3D":
        """Return a new vector equal to self + other."""
        return _wrap(self._v + _raw(other))

    def minus(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> "Vector3D":
        """Return the difference self - other as a new vector."""
        return _wrap(self._v - _raw(other))

    def dot(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> float:
        """Scalar (dot) product."""
        return float(np.dot(self._v, _raw(other)))

    def cross(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> "Vector3D":
        """Vector (cross) product self × other as a new vector."""
        return _wrap(np.cross(self._v, _raw(other)))

    def length(self) -> float:
        """Euclidean length."""
        return norm(self._v)

    def length_squared(self) -> float:
        """Squared length. Avoids sqrt."""
        return norm2(self._v)

    def distance_to(self, other: "Vector3D | np.ndarray | tuple[float, ...]") -> float:
        """Euclidean distance between the points self and other."""
        return norm(self._v - _raw(other))

    def normalized(self) -> "Vector3D":
        """Unit vector in the same direction, or the zero vector if too short."""
        return _wrap(unit(self._v))

    def is_zero(self) -> bool:
        return not bool(np.any(self._v))

    def copy(self) -> "Vector3D":
        return _wrap(self._v.copy())

    def to_tuple(self) -> tuple[float, float, float]:
        return (float(self._v[0]), float(self._v[1]), float(self._v[2]))

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is not None and np.dtype(dtype) != self._v.dtype:
            return self._v.astype(dtype)
        return self._v.copy() if copy else self._v

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_tuple())

    def __len__(self) -> int:
        return 3

    def __getitem__(self, i: int) -> float:
        return float(self._v[i])

    def __add__(self, other) -> "Vector3D":
        return self.plus(other)

    def __sub__(self, other) -> "Vector3D":
        return self.minus(other)

    def __mul__(self, s: float) -> "Vector3D":
        return self.multiply_by(s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Vector3D":
        return _wrap(self._v / s)

    def __neg__(self) -> "Vector3D":
        return _wrap(-self._v)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vector3D):
            return bool(np.array_equal(self._v, other._v))
        if isinstance(other, (tuple, list, np.ndarray)):
            try:
                return bool(np.array_equal(self._v, f64(other)))
            except ValueError:
                return False
        return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Vector3D({self.x!r}, {self.y!r}, {self.z!r})"


def _raw(value) -> np.ndarray:
    """Underlying array of a Vector3D, or a converted array-like."""
    if isinstance(value, Vector3D):
        return value._v
    return f64(value)


def _wrap(arr: np.ndarray) -> Vector3D:
    """Wrap an existing (3,) float64 array without copying."""
    out = Vector3D.__new__(Vector3D)
    out._v = arr
    return out
