"""Tests for the symbolic reference geodesics."""

import numpy as np
import pytest
import sympy as sp

from implicit_geodesics.charts import (
    gaussian_curvature, monge_chart, reference_geodesic, reference_point,
)
from implicit_geodesics.intersect import project_vertical
from implicit_geodesics.points import Point3
from implicit_geodesics.rays import trace_ray
from implicit_geodesics.surfaces import SurfaceKind, SurfaceParams, dist


class TestMongeChart:
    """Induced geometry of graph surfaces."""

    def test_plane_has_flat_connection(self, plane):
        chart = monge_chart(plane)
        t = sp.Symbol('t')
        eqs, funcs = chart.connection.geodesic_equations(t)
        for eq, f in zip(eqs, funcs):
            assert sp.simplify(eq - sp.diff(f, t, 2)) == 0

    def test_metric_at_origin(self, bowl):
        g = monge_chart(bowl).metric_at((0.0, 0.0))
        assert np.allclose(g, np.eye(2))

    @pytest.mark.parametrize("kind, expected", [
        (SurfaceKind.PLANE, 0.0),
        (SurfaceKind.POSITIVE_CURVATURE, 0.0625),
        (SurfaceKind.NEGATIVE_CURVATURE, -0.0625),
    ])
    def test_gaussian_curvature_at_origin(self, kind, expected):
        assert gaussian_curvature(SurfaceParams(kind, 0.25), 0.0, 0.0) == pytest.approx(expected, abs=1e-9)

    def test_wormhole_unsupported(self, wormhole):
        with pytest.raises(NotImplementedError):
            monge_chart(wormhole)


class TestReferenceGeodesic:
    """ODE geodesics against the traced paths."""

    def test_stays_on_surface(self, ripples):
        pts = reference_geodesic(ripples, (0.1, -0.5), 20.0, length=1.0, num=50)
        for p in pts:
            assert abs(dist(Point3(*p), ripples)) < 1e-9

    def test_stops_at_domain_edge(self, plane):
        pts = reference_geodesic(plane, (0.0, -0.9), 0.0, length=4.0, num=400)
        assert np.all(np.abs(pts[:, :2]) <= 1.0 + 1e-9)
        assert pts[-1, 1] > 0.9

    def test_plane_is_straight(self, plane):
        pts = reference_geodesic(plane, (0.0, -0.9), 0.0, length=1.0, num=20)
        assert np.allclose(pts[:, 0], 0.0, atol=1e-9)

    def test_tracer_agrees_with_ode(self, bowl):
        origin = (0.1, -0.8)
        result = trace_ray(project_vertical(Point3(origin[0], origin[1], 1.0), bowl), 30.0, bowl)
        k = 60
        arclength = sum(b.sub(a).norm() for a, b in zip(result.vertices[:k], result.vertices[1:k + 1]))
        expected = reference_point(bowl, origin, 30.0, arclength)
        assert result.vertices[k].sub(expected).norm() < 1e-2
