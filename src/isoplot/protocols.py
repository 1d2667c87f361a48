from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from isoplot.vector import Vec2
    from isoplot.viewport import Viewport


class ScalarField(Protocol):
    """Scalar field f(x, y) whose zero set is traced.

    Pruning is only sound for fields that change at most at unit rate per
    unit distance near the zero set (true signed distance fields do).
    """

    def __call__(self, x: float, y: float) -> float:
        ...


class Drawable2D(Protocol):
    """2D debug drawable contract."""

    def polyline(self, num: int = 600) -> Any:
        """Return a (N,2) polyline suitable for plotting."""
        ...


class PathSurface(Protocol):
    """Path-drawing surface consumed by the isoline tracer.

    ``move_to`` and ``line_to`` take surface coordinates; use
    ``map_to_surface`` to convert world points first.
    """

    viewport: Viewport

    def map_to_surface(self, point: Vec2) -> Vec2:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, point: Vec2) -> None:
        ...

    def line_to(self, point: Vec2) -> None:
        ...

    def close_path(self) -> None:
        ...

    def stroke_path(self, color: Any) -> None:
        ...
