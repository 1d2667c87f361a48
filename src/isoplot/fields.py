from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from isoplot.vector import Vec2

FieldFn = Callable[[Any, Any], Any]


@dataclass(frozen=True, slots=True)
class CircleSDF:
    """Signed distance to a circle; negative inside.

    Works on floats and on numpy arrays of coordinates alike.
    """

    center: Vec2
    radius: float

    def __call__(self, x: Any, y: Any) -> Any:
        return np.hypot(x - self.center.x, y - self.center.y) - self.radius

    def polyline(self, num: int = 600) -> np.ndarray:
        theta = np.linspace(0.0, 2.0 * np.pi, num, dtype=np.float64)
        return np.stack(
            [self.center.x + np.cos(theta) * self.radius, self.center.y + np.sin(theta) * self.radius],
            axis=-1,
        )


@dataclass(frozen=True, slots=True)
class BoxSDF:
    """Signed distance to an axis-aligned box given by center and half extents."""

    center: Vec2
    half_size: Vec2

    def __call__(self, x: Any, y: Any) -> Any:
        qx = np.abs(x - self.center.x) - self.half_size.x
        qy = np.abs(y - self.center.y) - self.half_size.y
        outside = np.hypot(np.maximum(qx, 0.0), np.maximum(qy, 0.0))
        inside = np.minimum(np.maximum(qx, qy), 0.0)
        return outside + inside

    def polyline(self, num: int = 5) -> np.ndarray:
        cx, cy = self.center
        hx, hy = self.half_size
        return np.array(
            [
                [cx - hx, cy - hy],
                [cx + hx, cy - hy],
                [cx + hx, cy + hy],
                [cx - hx, cy + hy],
                [cx - hx, cy - hy],
            ],
            dtype=np.float64,
        )


@dataclass(frozen=True, slots=True)
class HalfPlaneSDF:
    """Signed distance to the line through ``point`` with unit ``normal``.

    Positive on the side the normal points to.
    """

    point: Vec2
    normal: Vec2

    def __call__(self, x: Any, y: Any) -> Any:
        n = self.normal.normalize()
        return (x - self.point.x) * n.x + (y - self.point.y) * n.y


def union(a: FieldFn, b: FieldFn) -> FieldFn:
    """Union of two shapes: pointwise minimum."""

    def field(x: Any, y: Any) -> Any:
        return np.minimum(a(x, y), b(x, y))

    return field


def intersection(a: FieldFn, b: FieldFn) -> FieldFn:
    """Intersection of two shapes: pointwise maximum."""

    def field(x: Any, y: Any) -> Any:
        return np.maximum(a(x, y), b(x, y))

    return field


def difference(a: FieldFn, b: FieldFn) -> FieldFn:
    """``a`` with ``b`` cut out."""

    def field(x: Any, y: Any) -> Any:
        return np.maximum(a(x, y), -b(x, y))

    return field
