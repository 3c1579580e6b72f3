"""
Implicit surface family F(x, y, z) = 0.

Every surface is written as a sympy expression in the normalized
coordinates (x, y, w) with w = z / z_scale, and lambdified once per kind
into a plain float function. The same expressions are reused by the
symbolic reference chart in charts.py.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Callable, Optional

import sympy as sp
from sympy import Expr, lambdify

from .points import Point3

# Normalized coordinates of the field expressions.
x, y, w = sp.symbols('x y w', real=True)

# Below this |z_scale| the field collapses to the plane F = z.
DEGENERATE_SCALE = 1e-9
# Smallest |z_scale| the wormhole accepts; keeps its two sheets apart.
WORMHOLE_MIN_SCALE = 0.02
# Squared throat radius of the wormhole.
WORMHOLE_THROAT = sp.Rational(1, 10)


class SurfaceKind(Enum):
    PLANE = 'plane'
    POSITIVE_CURVATURE = 'positive_curvature'
    NEGATIVE_CURVATURE = 'negative_curvature'
    SINUSOIDAL_LINEAR = 'sinusoidal_linear'
    SINUSOIDAL_QUADRATIC = 'sinusoidal_quadratic'
    WORMHOLE = 'wormhole'

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def has_two_sheets(self) -> bool:
        return self is SurfaceKind.WORMHOLE


_LABELS = {
    SurfaceKind.PLANE: "Plane",
    SurfaceKind.POSITIVE_CURVATURE: "Positive curvature",
    SurfaceKind.NEGATIVE_CURVATURE: "Negative curvature",
    SurfaceKind.SINUSOIDAL_LINEAR: "Sin x Linear",
    SurfaceKind.SINUSOIDAL_QUADRATIC: "Sin x Quad",
    SurfaceKind.WORMHOLE: "Wormhole",
}

# Height functions w = h(x, y) for the surfaces that are graphs over the plane.
_HEIGHTS = {
    SurfaceKind.PLANE: (x + y) / 2,
    SurfaceKind.POSITIVE_CURVATURE: -(x**2 + y**2) / 2,
    SurfaceKind.NEGATIVE_CURVATURE: (x**2 - y**2) / 2,
    SurfaceKind.SINUSOIDAL_LINEAR: sp.sin(4 * sp.pi * y) * x,
    SurfaceKind.SINUSOIDAL_QUADRATIC: sp.sin(4 * sp.pi * y) * x**2,
}


def height_expression(kind: SurfaceKind) -> Optional[Expr]:
    """Symbolic height h(x, y) in normalized units, or None if the surface is not a graph."""
    return _HEIGHTS.get(kind)


def field_expression(kind: SurfaceKind) -> Expr:
    """
    Symbolic field F(x, y, w) whose zero set is the surface.

    Graph surfaces use F = h(x, y) - w; the wormhole is the one-sheeted
    hyperboloid x^2 + y^2 - w^2 - 1/10.
    """
    if kind is SurfaceKind.WORMHOLE:
        return x**2 + y**2 - w**2 - WORMHOLE_THROAT
    return _HEIGHTS[kind] - w


@lru_cache(maxsize=None)
def field_function(kind: SurfaceKind) -> Callable[[float, float, float], float]:
    """Numeric F(x, y, w), lambdified with the math module for scalar speed."""
    return lambdify((x, y, w), field_expression(kind), 'math')


@dataclass(frozen=True)
class SurfaceParams:
    """
    Selected surface and its vertical scale.

    Attributes:
        function: which member of the surface family to evaluate
        z_scale: vertical scale; z = z_scale * w in normalized coordinates
    """
    function: SurfaceKind = SurfaceKind.SINUSOIDAL_QUADRATIC
    z_scale: float = 0.25

    @property
    def effective_scale(self) -> float:
        s = float(self.z_scale)
        if self.function is SurfaceKind.WORMHOLE and abs(s) < WORMHOLE_MIN_SCALE:
            return math.copysign(WORMHOLE_MIN_SCALE, s)
        return s

    @property
    def is_degenerate(self) -> bool:
        return abs(self.effective_scale) < DEGENERATE_SCALE


def dist(point: Point3, params: SurfaceParams) -> float:
    """
    Signed implicit field value at `point`; the surface is exactly its zero set.

    Not a true distance. A degenerate scale falls back to the flat field F = z.
    """
    s = params.effective_scale
    if abs(s) < DEGENERATE_SCALE:
        return point.z
    return field_function(params.function)(point.x, point.y, point.z / s)


__all__ = [
    'SurfaceKind', 'SurfaceParams', 'dist',
    'field_expression', 'height_expression', 'field_function',
    'DEGENERATE_SCALE', 'WORMHOLE_MIN_SCALE',
]
