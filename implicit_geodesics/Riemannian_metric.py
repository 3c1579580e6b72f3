import sympy as sp
from itertools import product
from sympy import Matrix, Expr, simplify
from typing import List, Dict, Any, Callable
from sympy.utilities.lambdify import lambdify


class RiemannianMetric:
    """
    Induced metric of a surface chart and the curvature quantities derived from it.

    Every derived tensor is computed lazily and memoized, since charts with
    trigonometric embeddings make the symbolic work expensive.

    Attributes:
        coords: chart coordinates as sympy Symbols
        g: metric (0,2)-tensor as a sympy Matrix
        invg: inverse metric
    """
    def __init__(self, coords: List[sp.Symbol], metric_matrix: Matrix, simplify_exprs: bool = True):
        self.dim = len(coords)
        if metric_matrix.shape != (self.dim, self.dim):
            raise ValueError(f"Metric must be {self.dim}x{self.dim} to match coords {coords}.")
        self.coords = coords
        # simplify() on sin(4*pi*y) surfaces can take minutes; charts opt out.
        self._simplify = simplify if simplify_exprs else (lambda e: e)
        self.g = self._simplify(metric_matrix)
        self.invg = self._simplify(self.g.inv())
        self._cache: Dict[str, Any] = {}

    def get_cached(self, key: str, compute_fn: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = compute_fn()
        return self._cache[key]

    def _d(self, expr: Expr, idx: int) -> Expr:
        return sp.diff(expr, self.coords[idx])

    # ---------- Christoffel symbols ----------
    def christoffel_first_kind(self) -> List[List[List[Expr]]]:
        """Γ_{lij} = (∂_i g_{lj} + ∂_j g_{li} - ∂_l g_{ij}) / 2, indexed [l][i][j]."""
        return self.get_cached('Gamma_lower', self._compute_first_kind)

    def _compute_first_kind(self) -> List[List[List[Expr]]]:
        n, g = self.dim, self.g
        lower = [[[sp.S.Zero] * n for _ in range(n)] for _ in range(n)]
        for l, i, j in product(range(n), repeat=3):
            lower[l][i][j] = (self._d(g[l, j], i) + self._d(g[l, i], j) - self._d(g[i, j], l)) / 2
        return lower

    def christoffel_symbols(self) -> List[List[List[Expr]]]:
        """Second kind, Gamma[k][i][j] = Γ^k_{ij} = g^{kl} Γ_{lij}."""
        return self.get_cached('Gamma', self._compute_christoffel)

    def _compute_christoffel(self) -> List[List[List[Expr]]]:
        n = self.dim
        lower = self.christoffel_first_kind()
        Gamma = [[[sp.S.Zero] * n for _ in range(n)] for _ in range(n)]
        for k, i, j in product(range(n), repeat=3):
            Gamma[k][i][j] = self._simplify(sum(self.invg[k, l] * lower[l][i][j] for l in range(n)))
        return Gamma

    # ---------- Curvature ----------
    def riemann_tensor(self) -> List[List[List[List[Expr]]]]:
        """R^i_{jkl} = ∂_k Γ^i_{jl} - ∂_l Γ^i_{jk} + Γ^i_{km} Γ^m_{jl} - Γ^i_{lm} Γ^m_{jk}."""
        return self.get_cached('Riemann', self._compute_riemann)

    def _compute_riemann(self) -> List[List[List[List[Expr]]]]:
        n = self.dim
        G = self.christoffel_symbols()
        R = [[[[sp.S.Zero] * n for _ in range(n)] for _ in range(n)] for _ in range(n)]
        for i, j, k, l in product(range(n), repeat=4):
            # Antisymmetric in (k, l).
            if k == l:
                continue
            if l < k:
                R[i][j][k][l] = -R[i][j][l][k]
                continue
            quad = sum(G[i][k][m] * G[m][j][l] - G[i][l][m] * G[m][j][k] for m in range(n))
            R[i][j][k][l] = self._simplify(self._d(G[i][j][l], k) - self._d(G[i][j][k], l) + quad)
        return R

    def ricci_tensor(self) -> List[List[Expr]]:
        """Ric_{ij} = R^k_{ikj}."""
        return self.get_cached('Ricci', self._compute_ricci)

    def _compute_ricci(self) -> List[List[Expr]]:
        R = self.riemann_tensor()
        n = self.dim
        return [[sum(R[k][i][k][j] for k in range(n)) for j in range(n)] for i in range(n)]

    def scalar_curvature(self) -> Expr:
        """R = g^{ij} Ric_{ij}; twice the Gaussian curvature on a surface."""
        return self.get_cached('Scalar', self._compute_scalar)

    def _compute_scalar(self) -> Expr:
        Ric = self.ricci_tensor()
        return self._simplify(sum(self.invg[i, j] * Ric[i][j]
                                  for i, j in product(range(self.dim), repeat=2)))

    def lambdify_matrix(self) -> Callable:
        """Numeric g(coords) as a numpy array."""
        return lambdify(self.coords, self.g, 'numpy')

    def __repr__(self) -> str:
        return f"<RiemannianMetric dim={self.dim} coords={self.coords}>"

# End of Riemannian_metric.py
