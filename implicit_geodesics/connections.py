import sympy as sp
from sympy import Expr, Function, Symbol, lambdify
from typing import Callable, List, Tuple


class Connection:
    """
    Abstract base class for affine connections.
    """
    def __init__(self, chart):
        self.chart = chart
        self.coords = chart.coords
        self.dim = len(self.coords)

    @property
    def Gamma(self) -> List[List[List[Expr]]]:
        raise NotImplementedError("Connection.Gamma must be implemented")

    def christoffel_functions(self) -> List[List[List[Callable[..., float]]]]:
        """
        Numeric Γ^i_{jk} evaluators, one per component, taking chart coordinates.
        """
        return [
            [
                [lambdify(self.coords, self.Gamma[i][j][k], 'math') for k in range(self.dim)]
                for j in range(self.dim)
            ]
            for i in range(self.dim)
        ]

    def geodesic_equations(self, t: Symbol = None) -> Tuple[List[Expr], List[Function]]:
        """
        Returns the geodesic ODEs x''^i + Γ^i_{jk} x'^j x'^k (each = 0) and the functions [X0(t), X1(t), ...].
        """
        if t is None:
            t = sp.Symbol('t')
        funcs = [sp.Function(f'X{i}')(t) for i in range(self.dim)]
        subs = {self.coords[i]: funcs[i] for i in range(self.dim)}
        eqs: List[Expr] = []
        for i in range(self.dim):
            d2 = sp.diff(funcs[i], t, 2)
            term = sum(sp.sympify(self.Gamma[i][j][k]).subs(subs) * sp.diff(funcs[j], t) * sp.diff(funcs[k], t)
                       for j in range(self.dim) for k in range(self.dim))
            eqs.append(d2 + term)
        return eqs, funcs


class LeviCivitaConnection(Connection):
    """
    Torsion-free, metric-compatible connection of a RiemannianMetric.
    """
    def __init__(self, metric, chart):
        super().__init__(chart)
        self.metric = metric

    @property
    def Gamma(self) -> List[List[List[Expr]]]:
        return self.metric.christoffel_symbols()

# End of connections.py
