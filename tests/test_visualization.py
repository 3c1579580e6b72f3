"""Smoke tests for the matplotlib rendering."""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from implicit_geodesics.config import TracerConfig
from implicit_geodesics.surfaces import SurfaceKind
from implicit_geodesics.tracer import Tracer
from implicit_geodesics.visualization import TracePlotter


def small_tracer(**overrides):
    cfg = TracerConfig(grid_size=3, fan_count=2, fan_width=20.0, step=0.05)
    return Tracer(cfg.replace(**overrides))


class TestTracePlotter:
    """Drawing the grid and ray bundles."""

    def test_plot_returns_axes(self):
        ax = TracePlotter(small_tracer()).plot()
        assert len(ax.collections) >= 3
        assert ax.get_title() == "Geodesics on Sin x Quad"
        plt.close(ax.figure)

    def test_origin_missing_in_title(self):
        tracer = small_tracer(surface=SurfaceKind.WORMHOLE, ray_origin=(0.0, 0.0))
        ax = TracePlotter(tracer).plot()
        assert ax.get_title().endswith("(origin not on surface)")
        plt.close(ax.figure)

    def test_plot_reference_adds_line(self):
        plotter = TracePlotter(small_tracer(surface=SurfaceKind.NEGATIVE_CURVATURE))
        ax = plotter.plot()
        plotter.plot_reference(ax, length=1.0, num=20)
        assert len(ax.lines) == 1
        plt.close(ax.figure)

    def test_save_writes_file(self, tmp_path):
        out = tmp_path / "geodesics.png"
        TracePlotter(small_tracer()).save(str(out), dpi=50)
        assert out.exists()
        assert out.stat().st_size > 0
