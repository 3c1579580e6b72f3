"""Tests for the reference grid."""

import numpy as np
import pytest

from implicit_geodesics.grid import LOWER_SEED, UPPER_SEED, build_grid, grid_line, grid_mesh
from implicit_geodesics.points import X_AXIS, Y_AXIS
from implicit_geodesics.surfaces import SurfaceKind, SurfaceParams


class TestBuildGrid:
    """Grid lines over single and double sheeted surfaces."""

    def test_line_count(self, plane):
        lines = build_grid(plane, 4)
        assert len(lines) == 2 * 5
        assert sum(1 for l in lines if l.axis == X_AXIS) == 5
        assert sum(1 for l in lines if l.axis == Y_AXIS) == 5

    def test_plane_lines_cross_domain(self, plane):
        for line in build_grid(plane, 4):
            trace = line.trace
            assert not trace.failed
            first, last = trace.vertices[0], trace.last
            if line.axis == X_AXIS:
                assert first.y == pytest.approx(-1.0)
                assert last.y == pytest.approx(1.0, abs=1e-6)
                assert all(p.x == first.x for p in trace.vertices)
            else:
                assert first.x == pytest.approx(-1.0)
                assert last.x == pytest.approx(1.0, abs=1e-6)
                assert all(p.y == first.y for p in trace.vertices)

    def test_line_coordinates(self, ripples):
        coords = sorted({l.trace.vertices[0].x for l in build_grid(ripples, 4) if l.axis == X_AXIS})
        assert coords == pytest.approx([-1.0, -0.5, 0.0, 0.5, 1.0])

    def test_wormhole_has_two_sheets(self, wormhole):
        lines = build_grid(wormhole, 3)
        assert len(lines) == 2 * 2 * 4
        upper = [l for l in lines if l.sheet_seed == UPPER_SEED]
        lower = [l for l in lines if l.sheet_seed == LOWER_SEED]
        assert len(upper) == len(lower) == 8
        assert all(l.trace.vertices[0].z > 0 for l in upper)
        assert all(l.trace.vertices[0].z < 0 for l in lower)

    def test_single_line(self, bowl):
        line = grid_line(bowl, Y_AXIS, 0.25)
        assert line.axis == Y_AXIS
        assert line.trace.vertices[0].y == 0.25

    def test_invalid_size(self, plane):
        with pytest.raises(ValueError):
            build_grid(plane, 0)


class TestGridMesh:
    """Merged grid buffers."""

    def test_offsets(self, bowl):
        lines = build_grid(bowl, 3)
        mesh = grid_mesh(lines)
        total = sum(len(l.trace) for l in lines)
        assert mesh.num_vertices == total
        assert mesh.num_segments == total - len(lines)
        assert mesh.indices.dtype == np.uint32
        assert int(mesh.indices.max()) == total - 1
        # No segment bridges two grid lines.
        assert np.all(mesh.indices[:, 1] - mesh.indices[:, 0] == 1)
        first_len = len(lines[0].trace)
        assert not np.any(mesh.indices[:, 0] == first_len - 1)
