# charts.py: symbolic Monge-patch charts and reference geodesics by ODE integration
from __future__ import annotations
import math
from sympy import Expr, Symbol, sympify, lambdify, Matrix
from typing import List, Tuple

import numpy as np

from .Riemannian_metric import RiemannianMetric
from .connections import LeviCivitaConnection
from .points import Point3
from .rays import heading_direction
from .surfaces import SurfaceParams, height_expression, x, y

# -------------------------- Domain Definitions --------------------------
class BoxDomain:
    """
    Axis-aligned box domain: each coordinate x_i in [min_i, max_i].
    Geodesic integration stops where a coordinate reaches one of the bounds.
    """
    def __init__(self, bounds: List[Tuple[float, float]]):
        self.bounds = bounds

UNIT_SQUARE = BoxDomain([(-1.0, 1.0), (-1.0, 1.0)])

# ------------------------ Embedding Definitions ------------------------
class Embedding:
    """
    Symbolic map from coords -> R^m, auto-lambdified.
    """
    def __init__(self, coords: List[Symbol], map_exprs: List[Expr]):
        self.coords = coords
        self.map_exprs = [sympify(expr) for expr in map_exprs]
        self._func = lambdify(coords, self.map_exprs, 'numpy')
    def evaluate(self, point: Tuple[float, ...]) -> Tuple[float, ...]:
        arr = np.array(self._func(*point), dtype=float)
        return tuple(arr.flatten())

# -------------------------- Chart Definition --------------------------
class Chart:
    """
    Coordinate chart: holds coords, domain and embedding, and computes the
    induced metric, Levi-Civita connection and numeric Christoffel symbols
    used to integrate geodesics.
    """
    def __init__(
        self,
        name: str,
        coords: List[Symbol],
        domain: BoxDomain,
        embedding: Embedding,
        simplify_exprs: bool = True
    ):
        self.name = name
        self.coords = coords
        self.dim = len(coords)
        self.domain = domain
        self.embedding = embedding
        self._compute_intrinsics(simplify_exprs)

    def _compute_intrinsics(self, simplify_exprs: bool):
        """
        Induced metric g = J^T J, Levi-Civita connection, lambdified Christoffel symbols.
        """
        J = Matrix(self.embedding.map_exprs).jacobian(self.coords)
        self.metric = RiemannianMetric(self.coords, J.T * J, simplify_exprs)
        self.connection = LeviCivitaConnection(self.metric, self)
        self.Gamma = self.connection.Gamma
        self._gamma_funcs = self.connection.christoffel_functions()
        self._metric_func = self.metric.lambdify_matrix()

    def metric_at(self, pt: Tuple[float, ...]) -> np.ndarray:
        return np.array(self._metric_func(*pt), dtype=float)

    # ------------------ Geodesics ------------------
    def geodesic_rhs(self, t: float, Y: List[float]) -> List[float]:
        """
        First-order form of d^2 u^i/dt^2 + Gamma^i_{jk} du^j du^k = 0.
        """
        dim = self.dim
        u = list(Y[:dim])
        du = list(Y[dim:])
        d2 = [0.0]*dim
        for i in range(dim):
            for j in range(dim):
                for k in range(dim):
                    d2[i] -= self._gamma_funcs[i][j][k](*u) * du[j] * du[k]
        return list(du) + d2

    def geodesic(self, start: Tuple[float, ...], velocity: Tuple[float, ...],
                 t_span: Tuple[float, float], num: int = 200, stop_at_boundary: bool = True):
        """
        Integrate a geodesic with RK45; returns (t values, chart coords of shape (len(t), dim)).

        With stop_at_boundary the integration ends where the curve reaches the domain bounds.
        """
        from scipy.integrate import solve_ivp
        events = []
        if stop_at_boundary:
            for i, (lo, hi) in enumerate(self.domain.bounds):
                for edge in (lo, hi):
                    event = (lambda t, Y, i=i, edge=edge: Y[i] - edge)
                    event.terminal = True
                    events.append(event)
        sol = solve_ivp(
            self.geodesic_rhs,
            t_span,
            list(start) + list(velocity),
            t_eval=np.linspace(t_span[0], t_span[1], num),
            events=events or None,
            method='RK45',
            rtol=1e-9,
            atol=1e-12,
        )
        return sol.t, sol.y[:self.dim].T

    def unit_velocity(self, pt: Tuple[float, ...], direction: Tuple[float, ...]) -> np.ndarray:
        """Scale a coordinate direction to unit speed under the metric at pt."""
        v = np.array(direction, dtype=float)
        speed = math.sqrt(float(v.dot(self.metric_at(pt).dot(v))))
        if speed == 0.0:
            raise ValueError("Direction must be non-zero.")
        return v / speed

    def embed(self, coords_array: np.ndarray) -> np.ndarray:
        return np.array([self.embedding.evaluate(tuple(c)) for c in coords_array], dtype=float).reshape(-1, 3)

# ---------------------- Surface Charts ----------------------
def monge_chart(params: SurfaceParams) -> Chart:
    """
    Chart (x, y) -> (x, y, z_scale * h(x, y)) of a graph surface over the unit square.
    """
    h = height_expression(params.function)
    if h is None:
        raise NotImplementedError(f"{params.function.label} has no height-function chart.")
    z = 0 if params.is_degenerate else params.effective_scale * h
    return Chart(params.function.label, [x, y], UNIT_SQUARE, Embedding([x, y], [x, y, z]),
                 simplify_exprs=False)

def reference_geodesic(params: SurfaceParams, origin: Tuple[float, float], heading: float,
                       length: float = 4.0, num: int = 400) -> np.ndarray:
    """
    Unit-speed ODE geodesic from `origin` along `heading` (degrees), as an (n, 3) array.

    Sampled at `num` evenly spaced arclengths up to `length`, truncated at the domain edge.
    """
    chart = monge_chart(params)
    d = heading_direction(heading)
    v0 = chart.unit_velocity(origin, (d.x, d.y))
    _, coords = chart.geodesic(origin, tuple(v0), (0.0, length), num)
    return chart.embed(coords)

def reference_point(params: SurfaceParams, origin: Tuple[float, float], heading: float,
                    arclength: float) -> Point3:
    """Point reached after `arclength` along the ODE geodesic."""
    chart = monge_chart(params)
    d = heading_direction(heading)
    v0 = chart.unit_velocity(origin, (d.x, d.y))
    _, coords = chart.geodesic(origin, tuple(v0), (0.0, arclength), 2, stop_at_boundary=False)
    return Point3(*chart.embedding.evaluate(tuple(coords[-1])))

def gaussian_curvature(params: SurfaceParams, px: float, py: float) -> float:
    """K = R / 2 at (px, py) from the chart's scalar curvature."""
    chart = monge_chart(params)
    R = lambdify(chart.coords, chart.metric.scalar_curvature(), 'math')
    return float(R(px, py)) / 2.0

# ---------------------- Module Export ----------------------
__all__ = [
    'BoxDomain', 'Embedding', 'Chart',
    'monge_chart', 'reference_geodesic', 'reference_point', 'gaussian_curvature',
]

# EOF charts.py
