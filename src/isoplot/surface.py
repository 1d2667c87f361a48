from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from isoplot.vector import Vec2
from isoplot.viewport import Viewport


@dataclass(frozen=True, slots=True)
class Stroke:
    """One stroked path: its color and surface-space subpaths."""

    color: Any
    subpaths: tuple[tuple[Vec2, ...], ...]


@dataclass(slots=True)
class RecordingSurface:
    """In-memory path surface.

    Keeps the issued commands in order and, for each ``stroke_path``, a
    snapshot of the current path. Useful for headless runs and tests.
    """

    viewport: Viewport
    commands: list[tuple[str, Any]] = field(default_factory=list)
    strokes: list[Stroke] = field(default_factory=list)
    _subpaths: list[list[Vec2]] = field(default_factory=list, init=False, repr=False)

    def map_to_surface(self, point: Vec2) -> Vec2:
        return self.viewport.map_to_surface(point)

    def begin_path(self) -> None:
        self.commands.append(("begin_path", None))
        self._subpaths = []

    def move_to(self, point: Vec2) -> None:
        self.commands.append(("move_to", point))
        self._subpaths.append([point])

    def line_to(self, point: Vec2) -> None:
        self.commands.append(("line_to", point))
        if not self._subpaths:
            self._subpaths.append([point])
            return
        self._subpaths[-1].append(point)

    def close_path(self) -> None:
        self.commands.append(("close_path", None))
        if self._subpaths and len(self._subpaths[-1]) > 1:
            current = self._subpaths[-1]
            current.append(current[0])

    def stroke_path(self, color: Any) -> None:
        self.commands.append(("stroke_path", color))
        self.strokes.append(Stroke(color=color, subpaths=tuple(tuple(sp) for sp in self._subpaths)))
