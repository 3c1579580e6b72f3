"""
Local geodesic checks on traced paths.

A geodesic's curvature vector is purely normal to the surface, so the
component of the discrete second difference tangent to the surface
should vanish. Large residuals point at solver trouble.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .differentiation import normal_at
from .paths import TraceResult
from .points import Point3
from .surfaces import SurfaceParams, dist

logger = logging.getLogger(__name__)


@dataclass
class PathCheck:
    residuals: np.ndarray
    max_residual: float
    mean_residual: float
    max_surface_error: float


def geodesic_residuals(vertices: Sequence[Point3], params: SurfaceParams) -> np.ndarray:
    """Tangential part of normalize(c - b) - normalize(b - a) at each interior vertex b."""
    out = []
    for a, b, c in zip(vertices, vertices[1:], vertices[2:]):
        dd = c.sub(b).normalize().sub(b.sub(a).normalize())
        n = normal_at(b, params).normalize()
        tangential = dd.sub(n.scale(dd.dot(n)))
        out.append(tangential.norm())
    return np.array(out, dtype=float)


def check_path(result: TraceResult, params: SurfaceParams) -> PathCheck:
    residuals = geodesic_residuals(result.vertices, params)
    errors = np.array([abs(dist(p, params)) for p in result.vertices], dtype=float)
    check = PathCheck(
        residuals=residuals,
        max_residual=float(residuals.max()) if residuals.size else 0.0,
        mean_residual=float(residuals.mean()) if residuals.size else 0.0,
        max_surface_error=float(errors.max()) if errors.size else 0.0,
    )
    logger.debug("Path check: %d vertices, max residual %.7f, mean %.7f, max |F| %.2e",
                 len(result), check.max_residual, check.mean_residual, check.max_surface_error)
    return check
