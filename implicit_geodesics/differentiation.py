from __future__ import annotations

from .points import Point3
from .surfaces import SurfaceParams, dist

# Finite difference step.
EPSILON = 1e-7


def normal_at(point: Point3, params: SurfaceParams) -> Point3:
    """
    Forward-difference gradient of the field at `point`.

    The surface is a level set, so the gradient is its normal. The result
    is left unnormalized; callers normalize.
    """
    base = dist(point, params)
    return Point3(
        (dist(Point3(point.x + EPSILON, point.y, point.z), params) - base) / EPSILON,
        (dist(Point3(point.x, point.y + EPSILON, point.z), params) - base) / EPSILON,
        (dist(Point3(point.x, point.y, point.z + EPSILON), params) - base) / EPSILON,
    )


def directional_derivative(point: Point3, direction: Point3, params: SurfaceParams,
                           eps: float = EPSILON) -> float:
    """(F(p + eps d) - F(p)) / eps"""
    return (dist(point.add(direction.scale(eps)), params) - dist(point, params)) / eps
