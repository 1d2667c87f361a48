from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal

import numpy as np

from isoplot.errors import ConfigError
from isoplot.vector import Vec2
from isoplot.viewport import Rect

# Cells smaller than this many pixels are resolved directly.
LEAF_PX: float = 10.0

# Half-diagonal of a square cell per unit side.
SIN_45: float = math.sin(math.pi / 4)

DEFAULT_COLOR: Any = "green"
DEFAULT_FRAME_COLOR: Any = (1.0, 127 / 255, 0.0, 0.25)


@dataclass(frozen=True, slots=True)
class IsolineConfig:
    leaf_px: float = LEAF_PX
    # Safe for |grad f| <= 1; steeper fields need a factor of at least their gradient.
    prune_factor: float = SIN_45
    max_depth: int = 32
    max_cells: int = 4_000_000
    timeout: float | None = None
    resolve_saddles: bool = False

    def __post_init__(self) -> None:
        if not self.leaf_px > 0:
            msg = f"leaf_px must be positive, got {self.leaf_px}"
            raise ConfigError(msg)
        if not self.prune_factor > 0:
            msg = f"prune_factor must be positive, got {self.prune_factor}"
            raise ConfigError(msg)
        if self.max_depth < 0:
            msg = f"max_depth must be non-negative, got {self.max_depth}"
            raise ConfigError(msg)
        if self.max_cells <= 0:
            msg = f"max_cells must be positive, got {self.max_cells}"
            raise ConfigError(msg)
        if self.timeout is not None and not self.timeout > 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ConfigError(msg)


Termination = Literal["complete", "max_depth", "max_cells", "timeout"]


@dataclass(frozen=True, slots=True)
class IsolineResult:
    """Outcome of one trace.

    ``paths`` are world-space polylines, one per resolved leaf cell (two for a
    split saddle cell). ``rects`` holds the surface rectangles of all
    non-pruned cells when diagnostics were requested.
    """

    paths: tuple[tuple[Vec2, ...], ...]
    rects: tuple[Rect, ...] = ()
    cells_visited: int = 0
    leaf_cells: int = 0
    depth_reached: int = 0
    truncated: bool = False
    termination: Termination = "complete"

    @property
    def points(self) -> list[Vec2]:
        return [p for path in self.paths for p in path]

    @property
    def crossing_count(self) -> int:
        return sum(len(path) for path in self.paths)

    def segments(self, xp: Any = np) -> Any:
        """Line segments of all paths as an (N, 2, 2) array."""
        segs = [
            [a.to_tuple(), b.to_tuple()]
            for path in self.paths
            for a, b in zip(path[:-1], path[1:])
        ]
        if not segs:
            return xp.zeros((0, 2, 2), dtype=xp.float64)
        return xp.asarray(segs, dtype=xp.float64)
