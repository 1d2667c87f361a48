from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from isoplot.isoline.config import (
    DEFAULT_COLOR,
    DEFAULT_FRAME_COLOR,
    IsolineConfig,
    IsolineResult,
    Termination,
)
from isoplot.math_utils import sign
from isoplot.vector import Vec2
from isoplot.viewport import Domain, Rect

if TYPE_CHECKING:
    from isoplot.protocols import PathSurface, ScalarField
    from isoplot.viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _TraceState:
    """Accumulator threaded through one top-level trace."""

    paths: list[tuple[Vec2, ...]] = field(default_factory=list)
    rects: list[Rect] | None = None
    cells_visited: int = 0
    leaf_cells: int = 0
    depth_reached: int = 0
    termination: Termination = "complete"
    aborted: bool = False
    deadline: float | None = None


class IsolineTracer:
    """Adaptive quadtree tracer of the zero set of a scalar field.

    Each call splits a square domain into four sub-cells. A sub-cell whose
    center value exceeds its half-diagonal (times ``prune_factor``) cannot
    hold the zero set of a 1-Lipschitz field and is skipped. Surviving cells
    are subdivided until their size on the surface drops below ``leaf_px``,
    where sign changes along the cell edges give the crossing points.
    """

    def __init__(self, viewport: Viewport, config: IsolineConfig | None = None) -> None:
        """Initialise the tracer."""
        self.viewport = viewport
        self.cfg = config if config is not None else IsolineConfig()

    def trace(self, fn: ScalarField, domain: Domain | None = None, *, debug_frame: bool = False) -> IsolineResult:
        """Trace ``fn`` over ``domain`` (defaults to the viewport's region).

        The domain must be square. With ``debug_frame`` the surface rectangle
        of every non-pruned cell is collected into ``IsolineResult.rects``.
        """
        domain = domain if domain is not None else self.viewport.domain
        domain.require_square()

        state = _TraceState(rects=[] if debug_frame else None)
        if self.cfg.timeout is not None:
            state.deadline = time.monotonic() + self.cfg.timeout

        logger.debug("Tracing isoline over %s (leaf_px=%s)", domain, self.cfg.leaf_px)
        self._trace_cell(fn, domain, 0, state)

        result = IsolineResult(
            paths=tuple(state.paths),
            rects=tuple(state.rects) if state.rects is not None else (),
            cells_visited=state.cells_visited,
            leaf_cells=state.leaf_cells,
            depth_reached=state.depth_reached,
            truncated=state.termination != "complete",
            termination=state.termination,
        )

        if result.truncated:
            logger.warning(
                "Isoline trace truncated (%s) after %d cells; result is partial",
                result.termination,
                result.cells_visited,
            )
        else:
            logger.debug(
                "Isoline traced: %d paths, %d cells, depth %d",
                len(result.paths),
                result.cells_visited,
                result.depth_reached,
            )
        return result

    def _budget_exhausted(self, state: _TraceState) -> bool:
        if state.aborted:
            return True
        if state.cells_visited >= self.cfg.max_cells:
            state.termination = "max_cells"
            state.aborted = True
        elif state.deadline is not None and time.monotonic() > state.deadline:
            state.termination = "timeout"
            state.aborted = True
        return state.aborted

    def _trace_cell(self, fn: ScalarField, domain: Domain, level: int, state: _TraceState) -> None:
        s = domain.width * 0.5
        s_px = self.viewport.length_to_surface(s)
        bound = s * self.cfg.prune_factor
        state.depth_reached = max(state.depth_reached, level)

        for cell in domain.quadrants():
            if self._budget_exhausted(state):
                return
            state.cells_visited += 1

            center = cell.center
            if abs(fn(center.x, center.y)) > bound:
                continue

            if state.rects is not None:
                top_left = self.viewport.map_to_surface(Vec2(cell.x_min, cell.y_max))
                state.rects.append(Rect(top_left.x, top_left.y, s_px, s * self.viewport.scale_y))

            if s_px < self.cfg.leaf_px:
                self._resolve_leaf(fn, cell, state)
            elif level >= self.cfg.max_depth:
                # Too deep to refine further; resolve at the current size.
                if state.termination == "complete":
                    state.termination = "max_depth"
                self._resolve_leaf(fn, cell, state)
            else:
                self._trace_cell(fn, cell, level + 1, state)

    def _resolve_leaf(self, fn: ScalarField, cell: Domain, state: _TraceState) -> None:
        state.leaf_cells += 1
        x0, x1, y0, y1 = cell.x_min, cell.x_max, cell.y_min, cell.y_max
        xm = (x0 + x1) * 0.5
        ym = (y0 + y1) * 0.5

        v0 = fn(x0, y0)
        v1 = fn(x1, y0)
        v2 = fn(x1, y1)
        v3 = fn(x0, y1)

        # Edge midpoints where the sign flips, bottom, right, top, left.
        points: list[Vec2] = []
        if sign(v0) != sign(v1):
            points.append(Vec2(xm, y0))
        if sign(v1) != sign(v2):
            points.append(Vec2(x1, ym))
        if sign(v2) != sign(v3):
            points.append(Vec2(xm, y1))
        if sign(v3) != sign(v0):
            points.append(Vec2(x0, ym))

        if len(points) < 2:
            return

        if len(points) == 4 and self.cfg.resolve_saddles:
            bottom, right, top, left = points
            if sign(fn(xm, ym)) == sign(v0):
                # Center joins the lower-left corner; cut off the other two.
                state.paths.append((bottom, right))
                state.paths.append((top, left))
            else:
                state.paths.append((left, bottom))
                state.paths.append((right, top))
            return

        state.paths.append(tuple(points))

    @staticmethod
    def render(
            surface: PathSurface,
            result: IsolineResult,
            color: Any = DEFAULT_COLOR,
            frame_color: Any = DEFAULT_FRAME_COLOR,
    ) -> None:
        """Stroke the traced paths, then the diagnostic rects if any."""
        surface.begin_path()
        for path in result.paths:
            surface.move_to(surface.map_to_surface(path[0]))
            for p in path[1:]:
                surface.line_to(surface.map_to_surface(p))
        surface.stroke_path(color)

        if not result.rects:
            return

        surface.begin_path()
        for rect in result.rects:
            first, *rest = rect.corners()
            surface.move_to(first)
            for corner in rest:
                surface.line_to(corner)
            surface.close_path()
        surface.stroke_path(frame_color)


def sdf_isoline(
        surface: PathSurface,
        fn: ScalarField,
        domain: Domain | None = None,
        *,
        color: Any = DEFAULT_COLOR,
        debug_frame: bool = False,
        frame_color: Any = DEFAULT_FRAME_COLOR,
        config: IsolineConfig | None = None,
) -> IsolineResult:
    """Trace the zero set of ``fn`` and draw it on ``surface``.

    The surface's viewport sets the leaf resolution. With ``debug_frame`` the
    visited cells are drawn as an outline overlay in ``frame_color``.
    """
    tracer = IsolineTracer(surface.viewport, config)
    result = tracer.trace(fn, domain, debug_frame=debug_frame)
    tracer.render(surface, result, color=color, frame_color=frame_color)
    return result
