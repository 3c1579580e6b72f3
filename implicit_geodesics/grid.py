"""
Reference grid drawn over the surface.

Grid lines are constrained paths: lines of constant x start on the
y = -1 edge and are held in their x plane, lines of constant y start on
the x = -1 edge. Surfaces with two sheets get a second grid seeded from
below.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List

from .intersect import project_vertical
from .mesh import LineMesh, merge_meshes
from .paths import MAX_STEPS, NO_INTERSECTION, STEP, TraceResult, plot_path_constrained
from .points import Point3, X_AXIS, Y_AXIS
from .surfaces import SurfaceParams

logger = logging.getLogger(__name__)

# Heights the vertical projection starts from; lower is only used for two-sheeted surfaces.
UPPER_SEED = 1.0
LOWER_SEED = -1.0


@dataclass
class GridLine:
    """
    Attributes:
        trace: the constrained path
        axis: constraint axis; the line keeps this coordinate constant
        sheet_seed: height the initial vertical projection started from
    """
    trace: TraceResult
    axis: Point3
    sheet_seed: float = UPPER_SEED


def _seed_points(axis: Point3, coord: float, offset: float, seed_z: float):
    if axis == X_AXIS:
        return Point3(coord, -1.0, seed_z), Point3(coord, -1.0 - offset, seed_z)
    return Point3(-1.0, coord, seed_z), Point3(-1.0 - offset, coord, seed_z)


def grid_line(params: SurfaceParams, axis: Point3, coord: float,
              seed_z: float = UPPER_SEED, step_length: float = STEP,
              max_steps: int = MAX_STEPS) -> GridLine:
    """Trace the single grid line where the `axis` coordinate equals `coord`."""
    start, previous = _seed_points(axis, coord, step_length, seed_z)
    start = project_vertical(start, params)
    previous = project_vertical(previous, params)
    if start is None or previous is None:
        logger.debug("Grid line at %s=%g has no seed on the surface", 'xy'[axis != X_AXIS], coord)
        return GridLine(TraceResult(failed=True, failure=NO_INTERSECTION), axis, seed_z)
    trace = plot_path_constrained(start, previous, axis, params, step_length, max_steps)
    return GridLine(trace, axis, seed_z)


def build_grid(params: SurfaceParams, grid_size: int, step_length: float = STEP,
               max_steps: int = MAX_STEPS) -> List[GridLine]:
    """
    Build grid_size + 1 lines per axis, per sheet.

    A line that cannot be started or is truncated is still returned
    (possibly empty) so one bad line never aborts the rest.
    """
    if grid_size < 1:
        raise ValueError(f"Grid size must be at least 1, got {grid_size}.")
    seeds = [UPPER_SEED, LOWER_SEED] if params.function.has_two_sheets else [UPPER_SEED]
    lines: List[GridLine] = []
    for seed_z in seeds:
        for axis in (X_AXIS, Y_AXIS):
            for idx in range(grid_size + 1):
                coord = idx / grid_size * 2.0 - 1.0
                lines.append(grid_line(params, axis, coord, seed_z, step_length, max_steps))
    failed = sum(1 for line in lines if line.trace.failed)
    logger.info("Built %d grid lines for %s (%d truncated)",
                len(lines), params.function.label, failed)
    return lines


def grid_mesh(lines: List[GridLine]) -> LineMesh:
    return merge_meshes(line.trace.to_mesh() for line in lines)
