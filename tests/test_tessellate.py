import math

import pytest

from vanpoint.config import PerspectiveConfig, ProjectionMode
from vanpoint.geom import collinear_deviation, dist, iscollinear
from vanpoint.mapping import AxisMapping, MappingKind
from vanpoint.projector import Projector
from vanpoint.tessellate import (
    DEFAULT_MAX_STEPS,
    ground_grid,
    step_count,
    tessellate,
    tessellate_polygon,
)

ZERO = (300.0, 400.0)
VX = (650.0, 350.0)
VZ = (50.0, 350.0)


def _projector(kind=MappingKind.RATIONAL, mode=None):
    c = PerspectiveConfig(zero=ZERO, vanishing_x=VX, vanishing_z=VZ,
                          x=AxisMapping(0.25, kind), z=AxisMapping(0.25, kind))
    return Projector(c, mode=mode)


def _three_point(kind=MappingKind.RATIONAL, y_kind=MappingKind.RATIONAL):
    c = PerspectiveConfig(zero=ZERO, vanishing_x=VX, vanishing_z=VZ, vanishing_y=(300.0, 50.0),
                          x=AxisMapping(0.25, kind), z=AxisMapping(0.25, kind),
                          y=AxisMapping(0.125, y_kind))
    return Projector(c)


class TestStepCount:
    def test_counts(self):
        assert DEFAULT_MAX_STEPS == 10
        assert step_count((0, 0, 0), (20, 5, 0)) == 10
        assert step_count((0, 0, 0), (3.7, 0, 0)) == 3
        assert step_count((0, 0, 0), (0.5, 0, 0)) == 1
        assert step_count((1, 1, 1), (1, 1, 1)) == 1
        assert step_count((0, 0, 0), (20, 5, 0), max_steps=3) == 3
        assert step_count((0, 0, 0), (20, 5, 0), max_steps=0) == 1


class TestTessellate:
    def test_point_count_and_endpoints(self):
        proj = _projector()
        p1 = (0, 0, 0)
        p2 = (20, 5, 0)
        pts = tessellate(proj, p1, p2, max_steps=10)
        length = math.sqrt(20 ** 2 + 5 ** 2)
        assert len(pts) == min(10, math.floor(length)) + 1
        assert pts[0] == proj.project(p1)
        assert pts[-1] == proj.project(p2)

    def test_order(self):
        proj = _projector()
        pts = tessellate(proj, (0, 0, 0), (8, 0, 0))
        xs = [p[0] for p in pts]
        assert xs == sorted(xs)
        assert list(reversed(tessellate(proj, (8, 0, 0), (0, 0, 0)))) == pts

    def test_max_steps(self):
        pts = tessellate(_projector(), (0, 0, 0), (20, 5, 0), max_steps=3)
        assert len(pts) == 4

    def test_zero_length(self):
        proj = _projector()
        pts = tessellate(proj, (2, 1, 2), (2, 1, 2))
        assert len(pts) == 2
        assert pts[0] == pts[1]

    def test_bad_arguments(self):
        proj = _projector()
        with pytest.raises(ValueError):
            tessellate(proj, (0, 0), (1, 1))
        with pytest.raises(ValueError):
            tessellate(proj, (0, 0, 0), (1, 1, 1), on_degenerate="retry")


class TestStraightness:
    ## the mapping kind only reparameterizes each axis, so axis-aligned
    ## segments stay straight under both kinds; diagonals tell them apart
    @pytest.mark.parametrize("kind", [MappingKind.RATIONAL, MappingKind.EXPONENTIAL])
    @pytest.mark.parametrize("p1,p2", [
        ((0, 0, 2), (15, 0, 2)),
        ((3, 0, -2), (3, 0, 12)),
        ((-3, 0, 1), (9, 0, 1)),
    ])
    def test_axis_aligned_ground_segments(self, kind, p1, p2):
        pts = tessellate(_projector(kind, ProjectionMode.GROUND), p1, p2)
        assert len(pts) > 3
        assert iscollinear(pts, 1e-6)

    @pytest.mark.parametrize("kind", [MappingKind.RATIONAL, MappingKind.EXPONENTIAL])
    def test_vertical_segment(self, kind):
        pts = tessellate(_projector(kind), (4, 0, 1), (4, 9, 1))
        assert iscollinear(pts, 1e-6)

    def test_rational_keeps_diagonals_straight(self):
        pts = tessellate(_projector(MappingKind.RATIONAL, ProjectionMode.GROUND),
                         (0, 0, 1), (12, 0, 5))
        assert len(pts) == 11
        assert iscollinear(pts, 1e-6)

    def test_exponential_bends_diagonals(self):
        pts = tessellate(_projector(MappingKind.EXPONENTIAL, ProjectionMode.GROUND),
                         (0, 0, 1), (12, 0, 5))
        assert len(pts) == 11
        assert not iscollinear(pts, 1e-6)
        assert collinear_deviation(pts) > 1.0

    @pytest.mark.parametrize("kind", [MappingKind.RATIONAL, MappingKind.EXPONENTIAL])
    @pytest.mark.parametrize("p1,p2", [
        ((2, 0, 1), (2, 12, 1)),
        ((0, 3, 1), (12, 3, 1)),
        ((1, 2, 0), (1, 2, 10)),
    ])
    def test_three_point_axis_aligned(self, kind, p1, p2):
        pts = tessellate(_three_point(kind, kind), p1, p2)
        assert len(pts) == 11
        assert iscollinear(pts, 1e-6)

    def test_three_point_rational_diagonal(self):
        pts = tessellate(_three_point(), (0, 1, 0), (10, 6, 4))
        assert len(pts) == 11
        assert iscollinear(pts, 1e-6)

    def test_three_point_exponential_diagonal(self):
        pts = tessellate(_three_point(MappingKind.EXPONENTIAL), (0, 1, 0), (10, 6, 4))
        assert len(pts) == 11
        assert collinear_deviation(pts) > 1.0


class TestDegenerate:
    ## the sample at x=-4 sits on the rational singularity
    P1 = (-6, 0, 0)
    P2 = (-2, 0, 0)

    def test_skip(self):
        pts = tessellate(_projector(), self.P1, self.P2)
        assert len(pts) == 4
        assert all(p is not None for p in pts)

    def test_abort(self):
        assert tessellate(_projector(), self.P1, self.P2, on_degenerate="abort") is None

    def test_fallback(self):
        pts = tessellate(_projector(), self.P1, self.P2, fallback=(0.0, 0.0))
        assert len(pts) == 5
        assert pts[2] == (0.0, 0.0)

    def test_fallback_wins_over_abort(self):
        pts = tessellate(_projector(), self.P1, self.P2, on_degenerate="abort",
                         fallback=ZERO)
        assert len(pts) == 5


class TestPolygon:
    SQUARE = [(0, 0, 0), (2, 0, 0), (2, 0, 2), (0, 0, 2)]

    def test_closed(self):
        proj = _projector()
        path = tessellate_polygon(proj, self.SQUARE)
        assert len(path) == 9
        assert path[0] == path[-1] == ZERO
        assert all(a != b for a, b in zip(path, path[1:]))
        assert proj.project((2, 0, 2)) in path

    def test_open(self):
        path = tessellate_polygon(_projector(), self.SQUARE, closed=False)
        assert len(path) == 7
        assert path[-1] == _projector().project((0, 0, 2))

    def test_abort(self):
        tri = [(0, 0, 0), (-6, 0, 0), (-2, 0, 0)]
        assert tessellate_polygon(_projector(), tri, on_degenerate="abort") is None

    def test_too_few_vertices(self):
        with pytest.raises(ValueError):
            tessellate_polygon(_projector(), [(0, 0, 0)])


class TestGrid:
    def test_grid(self):
        lines = ground_grid(_projector(), extent=2, spacing=1, origin=(2, 0, 2))
        assert len(lines) == 10
        assert all(len(line) == 5 for line in lines)
        ## rational mapping keeps every grid line straight
        assert all(iscollinear(line, 1e-6) for line in lines)

    def test_offset_origin(self):
        lines = ground_grid(_projector(), extent=1, spacing=0.5, origin=(5, 0, 5))
        assert len(lines) == 10

    def test_even_ratios(self):
        proj = _projector()
        lines = ground_grid(proj, extent=2, spacing=1, origin=(2, 0, 2), even_ratios=True)
        assert len(lines) == 10
        ## constant-x lines start on z=0, which is the segment zero -> vanishing_x
        starts = [line[0] for line in lines[:5]]
        assert starts[0] == pytest.approx(ZERO)
        gaps = [dist(a, b) for a, b in zip(starts, starts[1:])]
        assert gaps == pytest.approx([gaps[0]] * 4)
        assert starts[-1] == pytest.approx(proj.project((4, 0, 0)))
        assert all(iscollinear(line, 1e-6) for line in lines)

    def test_world_spacing_shrinks_on_screen(self):
        lines = ground_grid(_projector(), extent=2, spacing=1, origin=(2, 0, 2))
        starts = [line[0] for line in lines[:5]]
        gaps = [dist(a, b) for a, b in zip(starts, starts[1:])]
        assert all(a > b for a, b in zip(gaps, gaps[1:]))

    def test_bad_spacing(self):
        with pytest.raises(ValueError):
            ground_grid(_projector(), extent=2, spacing=0)
