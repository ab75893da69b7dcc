# MIT License (see LICENSE)
"""
Renderer adapters for particle system visualization.

This module provides an abstract base class for rendering and concrete
text and buffering implementations. The engine has no rendering
dependency; renderers only read particle state and must not modify it.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..particle import Particle
from .clip import ClipRegion

if TYPE_CHECKING:
    from ..system import ParticleSystem


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods for a concrete backend
    (matplotlib, pygame, a web frontend, ...). With a clip region set,
    render_system() only draws particles inside it.

    Usage:
        renderer = MyRenderer(clip=ClipRegion(0, 0, 800, 600))
        system.tick(0.1)
        renderer.render_system(system)
    """

    def __init__(self, clip: ClipRegion | None = None) -> None:
        self.clip = clip

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        ...

    @abstractmethod
    def draw_particle(self, particle: Particle) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_system(self, system: "ParticleSystem") -> int:
        """
        Draw every visible particle of a system as one frame.

        Returns:
            Number of particles drawn.
        """
        drawn = 0
        self.begin_frame(system.time)
        for p in system.get_particles():
            if self.clip is None or self.clip.accepts(p.position):
                self.draw_particle(p)
                drawn += 1
        self.end_frame()
        return drawn


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === Frame t=0.2000 ===
        [1] m=1.00 @ (0.20, 0.00, 0.00) v=(1.00, 0.00, 0.00)
        [2] m=1.00 @ (5.00, 5.00, 0.00) fixed
    """

    def __init__(
        self,
        output: TextIO | None = None,
        verbose: bool = True,
        clip: ClipRegion | None = None,
    ) -> None:
        super().__init__(clip)
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_particle(self, particle: Particle) -> None:
        x, y, z = particle.position
        line = f"[{particle.id}] m={particle.mass:.2f} @ ({x:.2f}, {y:.2f}, {z:.2f})"
        if particle.is_fixed():
            line += " fixed"
        elif self.verbose:
            vx, vy, vz = particle.velocity
            line += f" v=({vx:.2f}, {vy:.2f}, {vz:.2f})"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records particle state per frame.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            system.tick(0.1)
            renderer.render_system(system)

        for frame in renderer.frames:
            print(frame["time"], len(frame["particles"]))
    """

    def __init__(self, clip: ClipRegion | None = None) -> None:
        super().__init__(clip)
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {"time": time, "particles": []}

    def draw_particle(self, particle: Particle) -> None:
        if self._current_frame is None:
            return
        self._current_frame["particles"].append({
            "id": particle.id,
            "position": list(particle.position.to_tuple()),
            "velocity": list(particle.velocity.to_tuple()),
            "fixed": particle.is_fixed(),
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
