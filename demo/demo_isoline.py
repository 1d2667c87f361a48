from __future__ import annotations

import logging
import math

from isoplot.fields import BoxSDF, CircleSDF, difference, union
from isoplot.geometry import ray2sphere, segment2segment
from isoplot.isoline import IsolineConfig, sdf_isoline
from isoplot.log import setup_logging
from isoplot.vector import Vec2
from isoplot.viewport import Viewport
from isoplot.viz.plot2d import Plotter2D

# ============================================================
# TOP-LEVEL PARAMETERS (extract everything tweakable here)
# ============================================================

# Surface
SURFACE_SIZE = (700, 700)
VIEW_ORIGIN = [-2.0, -2.0]
VIEW_SIZE = [4.0, 4.0]

# Layout
AXES_SIZE = 1.9
GRID_SIZE = 0.25

# Shape: box with a circular hole, plus a disc
BOX_CENTER = [-0.4, -0.2]
BOX_HALF = [0.9, 0.6]
HOLE_CENTER = [-0.4, -0.2]
HOLE_RADIUS = 0.35
DISC_CENTER = [0.9, 0.8]
DISC_RADIUS = 0.55

# Tracer
LEAF_PX = 10.0
DEBUG_FRAME = True

# Ray
RAY_ORIGIN = [-1.8, 1.6]
RAY_ANGLE_DEG = -15.0

# Output (None shows a window)
SAVE_PATH: str | None = None

logger = logging.getLogger("isoplot.demo")


def main() -> None:
    setup_logging()

    viewport = Viewport(origin=Vec2.of(VIEW_ORIGIN), size=Vec2.of(VIEW_SIZE), surface_size=SURFACE_SIZE)
    plotter = Plotter2D(viewport)
    plotter.graph_layout(axes_size=AXES_SIZE, grid_size=GRID_SIZE)

    disc = CircleSDF(center=Vec2.of(DISC_CENTER), radius=DISC_RADIUS)
    shape = union(
        difference(
            BoxSDF(center=Vec2.of(BOX_CENTER), half_size=Vec2.of(BOX_HALF)),
            CircleSDF(center=Vec2.of(HOLE_CENTER), radius=HOLE_RADIUS),
        ),
        disc,
    )

    result = sdf_isoline(
        plotter,
        shape,
        color="green",
        debug_frame=DEBUG_FRAME,
        config=IsolineConfig(leaf_px=LEAF_PX),
    )
    logger.info("Traced %d crossing points in %d cells", result.crossing_count, result.cells_visited)

    origin = Vec2.of(RAY_ORIGIN)
    direction = Vec2(1.0, 0.0).rotate(math.radians(RAY_ANGLE_DEG))
    plotter.stroke = "crimson"
    t = ray2sphere(origin, direction, disc.center, disc.radius)
    if t is None:
        plotter.vector(origin, direction.scale(3.0), label="miss")
    else:
        hit = origin + direction.scale(t)
        plotter.vector(origin, hit - origin, label="ray")
        plotter.fill = "crimson"
        plotter.point(hit, label=f"t={t:.2f}")

    a1, a2 = Vec2(-1.8, -1.8), Vec2(1.8, 1.0)
    b1, b2 = Vec2(-1.5, 1.2), Vec2(1.2, -1.6)
    plotter.stroke = "slateblue"
    plotter.segment(a1, a2, label="a")
    plotter.segment(b1, b2, label="b")
    cross = segment2segment(a1, a2, b1, b2)
    if cross is not None:
        plotter.fill = "slateblue"
        plotter.point(cross, label="a x b")

    if SAVE_PATH:
        plotter.save(SAVE_PATH)
    else:
        plotter.show()


if __name__ == "__main__":
    main()
