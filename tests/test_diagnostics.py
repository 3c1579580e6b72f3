"""Tests for the geodesic path check."""

import pytest

from implicit_geodesics.diagnostics import check_path, geodesic_residuals
from implicit_geodesics.intersect import project_vertical
from implicit_geodesics.paths import TraceResult
from implicit_geodesics.points import Point3
from implicit_geodesics.rays import trace_ray
from implicit_geodesics.surfaces import SurfaceKind, SurfaceParams


class TestGeodesicResiduals:
    """Tangential curvature of traced paths."""

    def test_plane_path_is_geodesic(self, plane):
        result = trace_ray(project_vertical(Point3(0.1, -0.5, 1.0), plane), 30.0, plane)
        residuals = geodesic_residuals(result.vertices, plane)
        assert residuals.shape == (len(result) - 2,)
        assert residuals.max() < 1e-6

    def test_bent_polyline_flagged(self):
        flat = SurfaceParams(SurfaceKind.PLANE, 0.0)
        corner = [Point3(0.0, 0.0, 0.0), Point3(0.1, 0.0, 0.0), Point3(0.1, 0.1, 0.0)]
        residuals = geodesic_residuals(corner, flat)
        assert residuals[0] == pytest.approx(2 ** 0.5)

    def test_curved_surface_small_residuals(self, bowl):
        result = trace_ray(project_vertical(Point3(0.2, -0.6, 1.0), bowl), 20.0, bowl)
        check = check_path(result, bowl)
        assert check.max_residual < 1e-3
        assert check.max_surface_error < 1e-6

    def test_short_paths(self, plane):
        check = check_path(TraceResult(vertices=[Point3(0.0, 0.0, 0.0)]), plane)
        assert check.residuals.size == 0
        assert check.max_residual == 0.0
        empty = check_path(TraceResult(), plane)
        assert empty.max_surface_error == 0.0
