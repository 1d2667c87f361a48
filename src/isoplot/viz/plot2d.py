from __future__ import annotations

import math
import os
from typing import TYPE_CHECKING, Any

import matplotlib as mpl

# IMPORTANT: set backend before importing pyplot
# - If running inside PyCharm scientific mode, their custom backend can break.
# - Prefer a stable GUI backend if available; fallback to Agg.
_BACKEND = os.environ.get("ISOPLOT_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    # Try stable interactive backends first; fallback to Agg.
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.collections import LineCollection  # noqa: E402
from matplotlib.patches import Arc, PathPatch, Polygon, Rectangle, Wedge  # noqa: E402
from matplotlib.path import Path  # noqa: E402

from isoplot.vector import Vec2  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Callable

    from isoplot.protocols import Drawable2D
    from isoplot.viewport import Viewport

ARROW_PX = 15.0
ARROW_SPREAD = 0.2


class Plotter2D:
    """Matplotlib plotting surface.

    The axes use surface pixel coordinates (origin top-left, y down), so the
    path primitives take the same points a canvas would. World geometry goes
    through ``viewport.map_to_surface``.
    """

    def __init__(self, viewport: Viewport, dpi: int = 100) -> None:
        """Initialize the plotter."""
        self.viewport = viewport
        width, height = viewport.surface_size
        fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
        fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        self.fig = fig
        self.ax = ax
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect("equal", "box")
        ax.set_axis_off()

        self.stroke: Any = "black"
        self.fill: Any = "black"
        self._subpaths: list[list[tuple[float, float]]] = []

    # Path primitives

    def map_to_surface(self, point: Vec2) -> Vec2:
        return self.viewport.map_to_surface(point)

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, point: Vec2) -> None:
        self._subpaths.append([(point.x, point.y)])

    def line_to(self, point: Vec2) -> None:
        if not self._subpaths:
            self._subpaths.append([(point.x, point.y)])
            return
        self._subpaths[-1].append((point.x, point.y))

    def close_path(self) -> None:
        if self._subpaths and len(self._subpaths[-1]) > 1:
            self._subpaths[-1].append(self._subpaths[-1][0])

    def stroke_path(self, color: Any = None, linewidth: float = 1.0) -> None:
        lines = [np.asarray(sp, dtype=np.float64) for sp in self._subpaths if len(sp) > 1]
        if not lines:
            return
        self.ax.add_collection(LineCollection(lines, colors=[color or self.stroke], linewidths=linewidth))

    def fill_path(self, color: Any = None) -> None:
        for sp in self._subpaths:
            if len(sp) > 2:
                self.ax.add_patch(Polygon(sp, closed=True, facecolor=color or self.fill, edgecolor="none"))

    # World-space helpers

    def _px(self, point: Any) -> tuple[float, float]:
        return self.map_to_surface(Vec2.of(point)).to_tuple()

    def _world_arrow_size(self) -> float:
        return ARROW_PX / self.viewport.scale_x

    def clear(self, color: Any = None) -> None:
        width, height = self.viewport.surface_size
        self.ax.add_patch(Rectangle((0, 0), width, height, facecolor=color or self.fill, edgecolor="none"))

    def text(self, string: str, point: Any, color: Any = None, fontsize: float = 10) -> None:
        x, y = self._px(point)
        self.ax.text(x, y, string, color=color or self.stroke, fontsize=fontsize)

    def point(self, at: Any, label: str | None = None, color: Any = None) -> None:
        x, y = self._px(at)
        self.ax.scatter([x], [y], s=20, color=color or self.fill)
        if label:
            self.ax.text(x - 4, y - 7, label, color=color or self.fill)

    def segment(self, a: Any, b: Any, label: str | None = None, label_pos: float = 0.5) -> None:
        a = Vec2.of(a)
        b = Vec2.of(b)
        self.begin_path()
        self.move_to(self.map_to_surface(a))
        self.line_to(self.map_to_surface(b))
        self.stroke_path()

        if label:
            direction = a - b
            shift = direction.normalize().rotate(
                math.copysign(1.0, math.cos(direction.angle_from_x_axis())) * math.pi / 2,
            ).scale(0.025)
            self.text(label, b + direction.scale(label_pos) + shift)

    def vector(self, origin: Any, direction: Any, label: str | None = None, label_pos: float = 0.5) -> None:
        """Arrow from ``origin`` along ``direction`` (world units)."""
        origin = Vec2.of(origin)
        direction = Vec2.of(direction)
        end = origin + direction
        angle = direction.angle_from_x_axis()
        size = self._world_arrow_size()

        left = end - Vec2(math.cos(angle + ARROW_SPREAD), math.sin(angle + ARROW_SPREAD)).scale(size)
        right = end - Vec2(math.cos(angle - ARROW_SPREAD), math.sin(angle - ARROW_SPREAD)).scale(size)

        self.begin_path()
        self.move_to(self.map_to_surface(origin))
        self.line_to(self.map_to_surface(end))
        self.stroke_path()

        self.begin_path()
        for p in (end, left, right):
            self.line_to(self.map_to_surface(p))
        self.fill_path(self.stroke)

        if label:
            shift = direction.normalize().rotate(math.copysign(1.0, math.cos(angle)) * math.pi / 2).scale(0.05)
            self.text(label, origin + shift + direction.scale(label_pos))

    def arc(self, center: Any, radius: float, start_angle: float = 0.0, end_angle: float = 2 * math.pi) -> None:
        """Circular arc; angles in radians, counter-clockwise in world space."""
        x, y = self._px(center)
        d = 2.0 * radius * self.viewport.scale_x
        # Surface y points down, so world angles flip sign.
        self.ax.add_patch(
            Arc(
                (x, y),
                d,
                d,
                theta1=-math.degrees(end_angle),
                theta2=-math.degrees(start_angle),
                edgecolor=self.stroke,
            ),
        )

    def sector(self, center: Any, radius: float, start_angle: float = 0.0, end_angle: float = 2 * math.pi) -> None:
        """Filled circular sector, angles as in :meth:`arc`."""
        x, y = self._px(center)
        r = radius * self.viewport.scale_x
        self.ax.add_patch(
            Wedge(
                (x, y),
                r,
                -math.degrees(end_angle),
                -math.degrees(start_angle),
                facecolor=self.fill,
                edgecolor="none",
            ),
        )

    def grid(self, step: float = 0.2) -> None:
        domain = self.viewport.domain
        for x in np.arange(domain.x_min, domain.x_max, step):
            self.segment((x, domain.y_min), (x, domain.y_max))
        for y in np.arange(domain.y_min, domain.y_max, step):
            self.segment((domain.x_min, y), (domain.x_max, y))

    def axes(self, size: float) -> None:
        self.vector(Vec2(-size, 0.0), Vec2(size * 2, 0.0))
        self.vector(Vec2(0.0, -size), Vec2(0.0, size * 2))

    def graph_layout(self, axes_size: float | None = None, grid_size: float = 0.2) -> None:
        self.fill = "ivory"
        self.clear()
        self.stroke = "bisque"
        self.grid(grid_size)
        if axes_size:
            self.stroke = "cadetblue"
            self.axes(axes_size)

    def plot(self, fn: Callable[[float], float], start: float, stop: float, step: float) -> None:
        """Graph of y = fn(x) sampled every ``step``."""
        xs = np.arange(start, stop + step * 0.5, step)
        self.begin_path()
        self.move_to(self.map_to_surface(Vec2(float(xs[0]), float(fn(xs[0])))))
        for x in xs[1:]:
            self.line_to(self.map_to_surface(Vec2(float(x), float(fn(x)))))
        self.stroke_path()

    def plot_bezier(self, fn: Callable[[float], float], start: float, stop: float, step: float) -> None:
        """Graph of y = fn(x) smoothed with quadratic curves.

        Each sample is a control point; the curve passes through the
        midpoints between consecutive samples.
        """
        xs = np.arange(start + step, stop + step * 0.5, step)
        vertices = [self._px((start, fn(start)))]
        codes = [Path.MOVETO]
        for x in xs:
            x = float(x)
            y = float(fn(x))
            mid = Vec2(x + x + step, y + float(fn(x + step))) / 2
            vertices.append(self._px((x, y)))
            vertices.append(self._px(mid))
            codes.extend((Path.CURVE3, Path.CURVE3))
        if len(vertices) < 3:
            return
        self.ax.add_patch(PathPatch(Path(vertices, codes), facecolor="none", edgecolor=self.stroke))

    def draw_drawable(self, drawable: Drawable2D, linewidth: float = 2.0) -> None:
        pts = np.asarray(drawable.polyline())
        self.begin_path()
        self.move_to(self.map_to_surface(Vec2.of(pts[0])))
        for p in pts[1:]:
            self.line_to(self.map_to_surface(Vec2.of(p)))
        self.stroke_path(linewidth=linewidth)

    def show(self) -> None:
        plt.show()

    def save(self, path: str, dpi: int | None = None) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.fig.savefig(path, dpi=dpi or self.fig.dpi)

    def close(self) -> None:
        plt.close(self.fig)
