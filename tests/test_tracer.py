"""Tests for the adaptive isoline tracer."""

import math

import numpy as np
import pytest

import isoplot.isoline.tracer as tracer_module
from isoplot.errors import ConfigError, DomainError
from isoplot.fields import CircleSDF
from isoplot.isoline import IsolineConfig, IsolineTracer, sdf_isoline
from isoplot.surface import RecordingSurface
from isoplot.vector import Vec2
from isoplot.viewport import Domain


def unit_circle_poly(x, y):
    return x * x + y * y - 1.0


unit_circle_sdf = CircleSDF(center=Vec2(0.0, 0.0), radius=1.0)


def max_angular_gap(result) -> float:
    """Largest angle between consecutive crossing points around the origin."""
    angles = np.sort([p.angle_from_x_axis() for p in result.points])
    gaps = np.diff(np.concatenate([angles, [angles[0] + 2 * math.pi]]))
    return float(gaps.max())


class FakeClock:
    def __init__(self, step: float) -> None:
        self.now = 0.0
        self.step = step

    def monotonic(self) -> float:
        self.now += self.step
        return self.now


class TestConfig:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"leaf_px": 0.0},
            {"prune_factor": -1.0},
            {"max_depth": -1},
            {"max_cells": 0},
            {"timeout": 0.0},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ConfigError):
            IsolineConfig(**kwargs)

    def test_defaults(self):
        cfg = IsolineConfig()
        assert cfg.leaf_px == 10.0
        assert cfg.prune_factor == pytest.approx(math.sin(math.pi / 4))
        assert cfg.resolve_saddles is False


class TestTrace:
    def test_polynomial_circle_points_lie_near_zero_set(self, viewport):
        result = IsolineTracer(viewport).trace(unit_circle_poly)

        assert result.paths
        assert not result.truncated
        assert result.termination == "complete"
        # Leaf cells are 0.0625 wide; crossings sit on edge midpoints.
        for p in result.points:
            assert abs(unit_circle_poly(p.x, p.y)) < 0.1

    def test_polynomial_circle_closed_loop_with_widened_pruning(self, viewport):
        # |grad f| is about 2 on the unit circle, so the bound must grow with it.
        cfg = IsolineConfig(prune_factor=2.0)
        result = IsolineTracer(viewport, cfg).trace(unit_circle_poly)

        radii = np.array([p.magnitude() for p in result.points])
        assert np.all(np.abs(radii - 1.0) < 0.05)
        assert max_angular_gap(result) < 0.2

    def test_polynomial_circle_loses_arcs_with_default_pruning(self, viewport):
        default = IsolineTracer(viewport).trace(unit_circle_poly)
        widened = IsolineTracer(viewport, IsolineConfig(prune_factor=2.0)).trace(unit_circle_poly)

        assert max_angular_gap(default) > 0.5
        assert default.crossing_count < widened.crossing_count

    def test_sdf_circle_forms_closed_loop(self, viewport):
        result = IsolineTracer(viewport).trace(unit_circle_sdf)

        radii = np.array([p.magnitude() for p in result.points])
        assert np.all(np.abs(radii - 1.0) < 0.05)

        assert max_angular_gap(result) < 0.2

    def test_constant_field_emits_nothing(self, viewport):
        result = IsolineTracer(viewport).trace(lambda x, y: 5.0)

        assert result.paths == ()
        assert result.leaf_cells == 0
        assert result.cells_visited == 4

    def test_finer_resolution_does_not_lose_crossings(self, viewport):
        counts = [
            IsolineTracer(viewport, IsolineConfig(leaf_px=leaf_px)).trace(unit_circle_sdf).crossing_count
            for leaf_px in (80.0, 40.0, 20.0, 10.0, 5.0)
        ]
        assert counts == sorted(counts)
        assert counts[0] > 0

    def test_leaf_paths_have_at_least_two_points(self, viewport):
        result = IsolineTracer(viewport).trace(unit_circle_sdf)
        assert all(len(path) >= 2 for path in result.paths)

    def test_explicit_domain_restricts_output(self, viewport):
        domain = Domain(0.0, 2.0, 0.0, 2.0)
        result = IsolineTracer(viewport).trace(unit_circle_sdf, domain)

        assert result.paths
        assert all(domain.contains(p) for p in result.points)

    def test_non_square_domain_raises(self, viewport):
        with pytest.raises(DomainError):
            IsolineTracer(viewport).trace(unit_circle_sdf, Domain(-2.0, 2.0, -1.0, 1.0))

    def test_segments_array(self, viewport):
        result = IsolineTracer(viewport).trace(unit_circle_sdf)
        segs = result.segments()

        assert segs.shape == (sum(len(p) - 1 for p in result.paths), 2, 2)

    def test_segments_empty(self, viewport):
        result = IsolineTracer(viewport).trace(lambda x, y: 1.0)
        assert result.segments().shape == (0, 2, 2)


class TestDiagnostics:
    def test_rects_only_when_requested(self, viewport):
        tracer = IsolineTracer(viewport)
        assert tracer.trace(unit_circle_sdf).rects == ()

        result = tracer.trace(unit_circle_sdf, debug_frame=True)
        assert result.rects
        assert len(result.rects) <= result.cells_visited
        assert min(r.width for r in result.rects) == pytest.approx(6.25)
        assert max(r.width for r in result.rects) == pytest.approx(200.0)

    def test_rect_position_is_top_left_on_surface(self, viewport):
        result = IsolineTracer(viewport).trace(unit_circle_sdf, debug_frame=True)
        # The first surviving top-level cell is the lower-left quadrant.
        first = result.rects[0]
        assert (first.x, first.y) == pytest.approx((0.0, 200.0))


class TestBudgets:
    def test_max_depth_truncates_but_resolves(self, viewport):
        result = IsolineTracer(viewport, IsolineConfig(max_depth=2)).trace(unit_circle_sdf)

        assert result.truncated
        assert result.termination == "max_depth"
        assert result.depth_reached == 2
        assert result.paths

    def test_max_cells_aborts(self, viewport):
        result = IsolineTracer(viewport, IsolineConfig(max_cells=10)).trace(unit_circle_sdf)

        assert result.truncated
        assert result.termination == "max_cells"
        assert result.cells_visited == 10

    def test_timeout_aborts(self, viewport, monkeypatch):
        monkeypatch.setattr(tracer_module, "time", FakeClock(step=0.01))
        result = IsolineTracer(viewport, IsolineConfig(timeout=0.05)).trace(unit_circle_sdf)

        assert result.truncated
        assert result.termination == "timeout"
        assert result.cells_visited < 10

    def test_truncation_is_logged(self, viewport, caplog):
        with caplog.at_level("WARNING", logger="isoplot.isoline.tracer"):
            IsolineTracer(viewport, IsolineConfig(max_cells=3)).trace(unit_circle_sdf)
        assert "truncated" in caplog.text


class TestSaddle:
    # Shifted so the origin sits inside a leaf cell, not on its corners.
    DOMAIN = Domain(-1.97, 2.03, -1.97, 2.03)

    @staticmethod
    def _near_origin(result):
        return [path for path in result.paths if all(p.magnitude() < 0.05 for p in path)]

    def test_default_connects_in_discovery_order(self, viewport):
        result = IsolineTracer(viewport).trace(lambda x, y: x * y, self.DOMAIN)
        near = self._near_origin(result)

        assert len(near) == 1
        assert len(near[0]) == 4

    def test_resolved_saddle_gives_two_paths(self, viewport):
        cfg = IsolineConfig(resolve_saddles=True)
        result = IsolineTracer(viewport, cfg).trace(lambda x, y: x * y, self.DOMAIN)
        near = self._near_origin(result)

        assert len(near) == 2
        assert all(len(path) == 2 for path in near)
        # Center is positive like the lower-left corner: the cut-off corners
        # are lower-right and upper-left.
        quadrants = sorted((path[0].x + path[1].x > 0, path[0].y + path[1].y > 0) for path in near)
        assert quadrants == [(False, True), (True, False)]


class TestRender:
    def test_isoline_pass_only(self, viewport):
        surface = RecordingSurface(viewport)
        result = sdf_isoline(surface, unit_circle_sdf, color="blue")

        assert surface.commands[0] == ("begin_path", None)
        assert [s.color for s in surface.strokes] == ["blue"]
        assert len(surface.strokes[0].subpaths) == len(result.paths)

    def test_points_are_mapped_to_surface(self, viewport):
        surface = RecordingSurface(viewport)
        result = sdf_isoline(surface, unit_circle_sdf)

        first_world = result.paths[0][0]
        assert surface.strokes[0].subpaths[0][0] == viewport.map_to_surface(first_world)

    def test_debug_frame_adds_second_pass(self, viewport):
        surface = RecordingSurface(viewport)
        result = sdf_isoline(surface, unit_circle_sdf, debug_frame=True, frame_color="orange")

        assert [s.color for s in surface.strokes] == ["green", "orange"]
        frames = surface.strokes[1].subpaths
        assert len(frames) == len(result.rects)
        assert all(len(sp) == 5 and sp[0] == sp[-1] for sp in frames)

    def test_empty_trace_still_strokes_once(self, viewport):
        surface = RecordingSurface(viewport)
        sdf_isoline(surface, lambda x, y: 3.0, debug_frame=True)

        assert len(surface.strokes) == 1
        assert surface.strokes[0].subpaths == ()


class TestRecordingSurface:
    def test_internal_path_state_is_not_a_constructor_argument(self, viewport):
        with pytest.raises(TypeError):
            RecordingSurface(viewport, _subpaths=[])  # type: ignore[call-arg]
        assert "_subpaths" not in repr(RecordingSurface(viewport))
