"""Tests for the Tracer aggregate."""

import numpy as np
import pytest

from implicit_geodesics.config import TracerConfig
from implicit_geodesics.surfaces import SurfaceKind
from implicit_geodesics.tracer import Tracer


@pytest.fixture
def tracer():
    return Tracer(TracerConfig(surface=SurfaceKind.POSITIVE_CURVATURE, grid_size=3,
                               fan_count=3, fan_width=30.0))


class TestTracer:
    """Recompute decisions and outputs."""

    def test_initial_outputs(self, tracer):
        assert len(tracer.grid) == 8
        assert len(tracer.forward) == 3
        assert len(tracer.backward) == 3
        assert tracer.origin_ok

    def test_same_config_recomputes_nothing(self, tracer):
        grid, fan = tracer.grid, tracer.fan
        assert tracer.update(tracer.config.replace()) == (False, False)
        assert tracer.grid is grid
        assert tracer.fan is fan

    def test_ray_change_only_repaths(self, tracer):
        grid = tracer.grid
        assert tracer.update(tracer.config.replace(heading=45.0)) == (False, True)
        assert tracer.grid is grid
        assert tracer.fan.headings == pytest.approx([30.0, 45.0, 60.0])

    def test_grid_change_only_regrids(self, tracer):
        fan = tracer.fan
        assert tracer.update(tracer.config.replace(grid_size=5)) == (True, False)
        assert tracer.fan is fan
        assert len(tracer.grid) == 12

    def test_surface_change_recomputes_both(self, tracer):
        assert tracer.update(tracer.config.replace(surface=SurfaceKind.PLANE)) == (True, True)
        assert tracer.config.surface is SurfaceKind.PLANE

    def test_origin_flag(self, tracer):
        tracer.update(tracer.config.replace(surface=SurfaceKind.WORMHOLE, ray_origin=(0.0, 0.0)))
        assert not tracer.origin_ok
        assert tracer.forward == [] and tracer.backward == []
        assert len(tracer.grid) == 16
        assert tracer.grid_mesh().num_vertices > 0

    def test_update_origin(self, tracer):
        tracer.update_origin(0.0, 0.1, 10.0)
        assert tracer.config.ray_origin == pytest.approx((0.0, -0.8))
        assert tracer.config.heading == pytest.approx(10.0)
        assert tracer.fan.headings[1] == pytest.approx(10.0)

    def test_meshes(self, tracer):
        for mesh in (tracer.grid_mesh(), tracer.forward_mesh(), tracer.backward_mesh()):
            assert mesh.vertices.dtype == np.float32
            assert mesh.indices.dtype == np.uint32
            assert mesh.vertices.shape[1] == 3
            assert mesh.indices.shape[1] == 2
            assert mesh.num_segments > 0

    def test_check_paths(self, tracer):
        checks = tracer.check_paths()
        assert len(checks) == 6
        assert all(c.max_surface_error < 1e-6 for c in checks)

    def test_repr(self, tracer):
        assert "Positive curvature" in repr(tracer)
