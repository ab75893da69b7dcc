# MIT License (see LICENSE)
"""
Rectangular clip region for presentation layers.

A ClipRegion decides which particles a renderer should draw. It never
influences the simulation: particles outside the region keep moving as
usual, they are just not drawn.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np


@dataclass
class ClipRegion:
    """
    Axis-aligned rectangle in the x/y plane.

    Attributes:
        x, y: Top-left corner.
        width, height: Extents (>= 0).
        enabled: When False, contains() still answers geometrically but
                 renderers draw everything.
    """
    x: float
    y: float
    width: float
    height: float
    enabled: bool = True

    def __post_init__(self) -> None:
        self.set_rect(self.x, self.y, self.width, self.height)

    def set_rect(self, x: float, y: float, width: float, height: float) -> None:
        """
        Move and resize the region.

        Raises:
            ValueError: If width or height is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Clip size must be non-negative, got {width}x{height}")
        self.x, self.y = float(x), float(y)
        self.width, self.height = float(width), float(height)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies inside the rectangle (left/top edges inclusive)."""
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )

    def contains_point(self, p: Sequence[float] | np.ndarray) -> bool:
        """contains() for a 2- or 3-component point; z is ignored."""
        return self.contains(float(p[0]), float(p[1]))

    def accepts(self, p: Sequence[float] | np.ndarray) -> bool:
        """True if a renderer using this region should draw p."""
        return not self.enabled or self.contains_point(p)
