from __future__ import annotations

import os

# Headless matplotlib for every test that imports the plotter.
os.environ["ISOPLOT_MPL_BACKEND"] = "Agg"

import pytest  # noqa: E402

from isoplot.vector import Vec2  # noqa: E402
from isoplot.viewport import Viewport  # noqa: E402


@pytest.fixture()
def viewport() -> Viewport:
    """4x4 world units centred on the origin, 100 px per unit."""
    return Viewport(origin=Vec2(-2.0, -2.0), size=Vec2(4.0, 4.0), surface_size=(400, 400))
