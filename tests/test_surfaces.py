"""Tests for the implicit surface family."""

import math

import pytest

from implicit_geodesics.intersect import project_vertical
from implicit_geodesics.points import Point3
from implicit_geodesics.surfaces import (
    SurfaceKind, SurfaceParams, dist, field_expression, height_expression,
    WORMHOLE_MIN_SCALE,
)


class TestFieldValues:
    """Closed forms of the field."""

    def test_plane_zero_on_surface(self, plane):
        """Plane z = s (x + y) / 2 passes through the scenario origin."""
        assert abs(dist(Point3(0.0, -0.9, -0.1125), plane)) < 1e-12

    def test_plane_sign(self, plane):
        """Points above a graph surface are negative."""
        assert dist(Point3(0.0, 0.0, 0.5), plane) < 0
        assert dist(Point3(0.0, 0.0, -0.5), plane) > 0

    def test_sinusoidal_quadratic(self, ripples):
        """F = sin(4 pi y) x^2 - z / s."""
        p = Point3(0.5, 0.125, 0.1)
        expected = math.sin(4 * math.pi * 0.125) * 0.25 - 0.1 / 0.25
        assert dist(p, ripples) == pytest.approx(expected, abs=1e-12)

    def test_wormhole_formula(self, wormhole):
        """F = x^2 + y^2 - (z / s)^2 - 0.1."""
        p = Point3(0.6, -0.3, 0.2)
        expected = 0.36 + 0.09 - (0.2 / 0.25) ** 2 - 0.1
        assert dist(p, wormhole) == pytest.approx(expected, abs=1e-12)

    def test_every_kind_has_expression(self):
        for kind in SurfaceKind:
            assert field_expression(kind) is not None
            assert kind.label

    def test_height_only_for_graphs(self):
        assert height_expression(SurfaceKind.WORMHOLE) is None
        assert height_expression(SurfaceKind.PLANE) is not None


class TestDegenerateScale:
    """Zero scale and the wormhole floor."""

    @pytest.mark.parametrize("kind", [k for k in SurfaceKind if k is not SurfaceKind.WORMHOLE])
    def test_zero_scale_is_flat(self, kind):
        params = SurfaceParams(kind, 0.0)
        assert params.is_degenerate
        p = Point3(0.3, -0.7, 0.42)
        assert dist(p, params) == 0.42

    def test_zero_scale_projects_to_plane(self):
        params = SurfaceParams(SurfaceKind.SINUSOIDAL_LINEAR, 0.0)
        p = project_vertical(Point3(0.4, 0.4, 1.0), params)
        assert p is not None
        assert abs(p.z) < 1e-7

    @pytest.mark.parametrize("scale, expected", [
        (0.001, WORMHOLE_MIN_SCALE),
        (-0.001, -WORMHOLE_MIN_SCALE),
        (0.0, WORMHOLE_MIN_SCALE),
        (0.5, 0.5),
        (-0.3, -0.3),
    ])
    def test_wormhole_floor(self, scale, expected):
        params = SurfaceParams(SurfaceKind.WORMHOLE, scale)
        assert params.effective_scale == expected
        assert not params.is_degenerate

    def test_floor_used_by_field(self):
        """Solved field values match the floored-scale formula, not the literal input."""
        params = SurfaceParams(SurfaceKind.WORMHOLE, 0.001)
        p = Point3(1.0, 0.0, 0.01)
        assert dist(p, params) == pytest.approx(1.0 - (0.01 / 0.02) ** 2 - 0.1, abs=1e-12)

        solved = project_vertical(Point3(1.0, 0.0, 0.05), params)
        assert solved is not None
        assert solved.z == pytest.approx(0.02 * math.sqrt(0.9), abs=1e-6)
        assert abs(solved.z - 0.001 * math.sqrt(0.9)) > 1e-3

    def test_two_sheets(self):
        assert SurfaceKind.WORMHOLE.has_two_sheets
        assert not SurfaceKind.PLANE.has_two_sheets
