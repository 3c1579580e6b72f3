"""
Newton-Raphson line/surface intersection.
"""
from __future__ import annotations
import logging
import math
from typing import Optional

from .differentiation import directional_derivative
from .points import Point3, Z_AXIS
from .surfaces import SurfaceParams, dist

logger = logging.getLogger(__name__)

# Convergence threshold on |F|, also the derivative step along the line.
TOLERANCE = 1e-7
# Locally the surface is near-planar at step scale, so 1-2 iterations is typical.
MAX_ITER = 10


def intersect_line(point: Point3, direction: Point3, params: SurfaceParams,
                   max_iter: int = MAX_ITER) -> Optional[Point3]:
    """
    Solve dist(point + lam * direction) = 0 for lam, starting at lam = 0.

    Returns the intersection, or None if Newton-Raphson does not reach
    |F| < TOLERANCE within `max_iter` iterations. A vanishing or
    non-finite derivative (line tangent to the surface) also gives None.
    """
    lam = 0.0
    guess = point
    value = dist(guess, params)
    for i in range(max_iter):
        if not math.isfinite(value):
            break
        if abs(value) < TOLERANCE:
            logger.debug("intersect_line solved in %d iterations", i)
            return guess
        deriv = directional_derivative(guess, direction, params, TOLERANCE)
        if deriv == 0.0 or not math.isfinite(deriv):
            logger.debug("intersect_line hit a stationary point at lambda=%g", lam)
            return None
        lam -= value / deriv
        guess = point.add(direction.scale(lam))
        value = dist(guess, params)
    if abs(value) < TOLERANCE:
        logger.debug("intersect_line solved in %d iterations", max_iter)
        return guess
    logger.debug("intersect_line failed to converge from %s", point)
    return None


def project_vertical(point: Point3, params: SurfaceParams) -> Optional[Point3]:
    """
    Snap `point` onto the surface along the z axis.

    The search starts at point.z, so the sheet nearest that height wins.
    """
    return intersect_line(point, Z_AXIS, params)
