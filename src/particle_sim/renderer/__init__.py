# MIT License (see LICENSE)
"""
Presentation helpers that read particle positions.

    - ClipRegion: Rectangle deciding which particles get drawn.
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text/console output for debugging.
    - BufferedRenderer: Records frames for playback or export.

The simulation has no rendering dependency; these adapters are optional.
"""
from .clip import ClipRegion
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    BufferedRenderer,
)

__all__ = [
    "ClipRegion",
    "RendererAdapter",
    "DebugRenderer",
    "BufferedRenderer",
]
