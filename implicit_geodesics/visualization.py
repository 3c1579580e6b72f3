"""
Visualization Module for traced geodesics

Matplotlib rendering of a Tracer's output: the reference grid and the
forward and backward ray bundles are drawn as 3D line collections built
straight from the LineMesh buffers, optionally with an ODE reference
geodesic overlaid for comparison.
"""

import logging
import os

import numpy as np
import matplotlib

logger = logging.getLogger(__name__)

# Backend Configuration
# --------------------
# Without a display only the non-interactive Agg backend can work.
if os.environ.get('DISPLAY', '') == '' and os.name != 'nt':
    logger.debug('No display found. Using non-interactive Agg backend')
    matplotlib.use('Agg')

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import art3d
from typing import Optional, Tuple

from .charts import reference_geodesic
from .mesh import LineMesh
from .tracer import Tracer


class TracePlotter:
    """
    Draws a Tracer's grid and ray bundles.

    Usage:
        tracer = Tracer(TracerConfig(fan_count=5, fan_width=40))
        TracePlotter(tracer).save("geodesics.png")
    """
    def __init__(self, tracer: Tracer):
        self.tracer = tracer

    @staticmethod
    def _add_mesh(ax, mesh: LineMesh, color: str, linewidth: float, alpha: float):
        if mesh.num_segments == 0:
            return None
        lines = art3d.Line3DCollection(mesh.segment_points(), colors=color,
                                       linewidths=linewidth, alpha=alpha)
        ax.add_collection3d(lines)
        return lines

    def plot(self, ax=None, grid_color: str = 'gray', forward_color: str = 'red',
             backward_color: str = 'blue', grid_alpha: float = 0.4):
        """Plot into `ax` (a new 3D axes if None) and return it."""
        if ax is None:
            fig = plt.figure(figsize=(10, 10))
            ax = fig.add_subplot(111, projection='3d')

        meshes = [
            (self.tracer.grid_mesh(), grid_color, 0.5, grid_alpha),
            (self.tracer.forward_mesh(), forward_color, 1.5, 1.0),
            (self.tracer.backward_mesh(), backward_color, 1.5, 1.0),
        ]
        for mesh, color, lw, alpha in meshes:
            self._add_mesh(ax, mesh, color, lw, alpha)

        fan = self.tracer.fan
        if fan.origin_ok and fan.origin is not None:
            ax.scatter([fan.origin.x], [fan.origin.y], [fan.origin.z], color='black', s=30)

        zs = np.concatenate([m.vertices[:, 2] for m, *_ in meshes if m.num_vertices] or [np.zeros(1)])
        zlo, zhi = float(zs.min()), float(zs.max())
        pad = max(0.05, 0.1 * (zhi - zlo))
        ax.set_xlim(-1.0, 1.0)
        ax.set_ylim(-1.0, 1.0)
        ax.set_zlim(zlo - pad, zhi + pad)
        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_zlabel('z')
        title = f"Geodesics on {self.tracer.config.surface.label}"
        if not fan.origin_ok:
            title += " (origin not on surface)"
        ax.set_title(title)
        return ax

    def plot_reference(self, ax, heading: Optional[float] = None, length: float = 4.0,
                       color: str = 'green', num: int = 400):
        """Overlay the ODE reference geodesic from the current ray origin."""
        cfg = self.tracer.config
        heading = cfg.heading if heading is None else heading
        pts = reference_geodesic(cfg.surface_params, cfg.ray_origin, heading, length, num)
        ax.plot(pts[:, 0], pts[:, 1], pts[:, 2], color=color, linestyle='--', linewidth=1.5)
        return ax

    def save(self, filename: str, dpi: int = 150, view: Tuple[float, float] = (30.0, -60.0)) -> None:
        ax = self.plot()
        ax.view_init(elev=view[0], azim=view[1])
        ax.figure.savefig(filename, dpi=dpi)
        plt.close(ax.figure)
        logger.info("Saved plot to %s", filename)

# End of visualization.py
