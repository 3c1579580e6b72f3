"""implicit_geodesics/ # root package
├── __init__.py # imports and version info
├── points.py # Point3 value type
├── surfaces.py # SurfaceKind, SurfaceParams, implicit field dist()
├── differentiation.py # finite-difference normal and directional derivative
├── intersect.py # Newton-Raphson line/surface intersection
├── paths.py # stepper, free-running and constrained path tracers
├── grid.py # constrained reference grid
├── rays.py # Ray, fans of rays, origin updates
├── mesh.py # LineMesh output buffers
├── config.py # TracerConfig
├── tracer.py # Tracer aggregate
├── diagnostics.py # geodesic path checks
├── charts.py # Monge charts and reference ODE geodesics
├── Riemannian_metric.py # induced metric, Christoffel symbols, curvature
├── connections.py # Levi-Civita connection
├── visualization.py # matplotlib rendering
└── logging_config.py # logging setup"""

# implicit_geodesics/__init__.py
"""
implicit_geodesics: geodesic paths on implicit surfaces F(x, y, z) = 0.

Modules:
  surfaces        - analytic surface family and its implicit field
  intersect       - line/surface intersection and vertical projection
  paths           - extrapolate-and-reproject path tracers
  grid, rays      - reference grid and fans of geodesic rays
  tracer, config  - Tracer aggregate and its configuration
  charts          - symbolic reference geodesics by ODE integration
  visualization   - matplotlib rendering (imported separately)

Usage:
  from implicit_geodesics import Tracer, TracerConfig, SurfaceKind
"""
__version__ = "0.1.0"

# core imports
from .points import Point3
from .surfaces import SurfaceKind, SurfaceParams, dist
from .differentiation import normal_at, directional_derivative
from .intersect import intersect_line, project_vertical
from .paths import TraceResult, step, plot_path, plot_path_constrained
from .grid import GridLine, build_grid
from .rays import Ray, FanResult, fan_headings, trace_fan, normalize_heading
from .mesh import LineMesh, merge_meshes
from .config import TracerConfig
from .tracer import Tracer
from .diagnostics import PathCheck, check_path, geodesic_residuals
from .logging_config import setup_logging

# package-level shortcuts
__all__ = [
    "Point3",
    "SurfaceKind", "SurfaceParams", "dist",
    "normal_at", "directional_derivative",
    "intersect_line", "project_vertical",
    "TraceResult", "step", "plot_path", "plot_path_constrained",
    "GridLine", "build_grid",
    "Ray", "FanResult", "fan_headings", "trace_fan", "normalize_heading",
    "LineMesh", "merge_meshes",
    "TracerConfig", "Tracer",
    "PathCheck", "check_path", "geodesic_residuals",
    "setup_logging",
]
