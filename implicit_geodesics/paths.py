"""
Path tracing over implicit surfaces by extrapolate-and-reproject.

Each step moves a fixed arclength along the previous displacement, then
snaps back onto the surface along the local normal with the same
Newton-Raphson solver used everywhere else. A stepper that fails at full
length retries with halved displacements, which covers regions where the
normal at the current point is a poor guide to the normal one step ahead.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .differentiation import normal_at
from .intersect import intersect_line, project_vertical
from .mesh import LineMesh
from .points import Point3
from .surfaces import SurfaceParams

logger = logging.getLogger(__name__)

# Arclength of one path step.
STEP = 0.01
# Attempts per step, halving the displacement after each failure.
MAX_ATTEMPTS = 8
# Vertex cap per path; closed geodesics inside the domain never reach the edge.
MAX_STEPS = 10000
# Half-width of the visible square domain.
DOMAIN_EXTENT = 1.0

NO_INTERSECTION = "no intersection"
DEGENERATE_NORMAL = "degenerate normal"
STALLED = "stalled"
STEP_LIMIT = "step limit"
BOUNDARY_PROJECTION = "boundary projection"
OUTSIDE_DOMAIN = "start outside domain"


@dataclass
class TraceResult:
    """
    One open polyline on the surface.

    Attributes:
        vertices: points in trace order
        segments: index pairs (i, i + 1) joining consecutive vertices
        failed: True if the path stopped before reaching the domain edge
        failure: short reason for the truncation, None on success
    """
    vertices: List[Point3] = field(default_factory=list)
    segments: List[Tuple[int, int]] = field(default_factory=list)
    failed: bool = False
    failure: Optional[str] = None

    def __len__(self) -> int:
        return len(self.vertices)

    @property
    def last(self) -> Optional[Point3]:
        return self.vertices[-1] if self.vertices else None

    def to_mesh(self) -> LineMesh:
        return LineMesh.from_polyline(self.vertices, self.segments)


def _in_domain(p: Point3) -> bool:
    return abs(p.x) <= DOMAIN_EXTENT and abs(p.y) <= DOMAIN_EXTENT


def _polyline(vertices: List[Point3], failure: Optional[str]) -> TraceResult:
    segments = [(i, i + 1) for i in range(len(vertices) - 1)]
    return TraceResult(vertices, segments, failure is not None, failure)


# ---------------------- Stepper ----------------------
def step(point: Point3, delta: Point3, normal: Point3, params: SurfaceParams,
         max_attempts: int = MAX_ATTEMPTS) -> Optional[Point3]:
    """
    Advance `point` by `delta` and reproject onto the surface along `normal`.

    On failure the displacement is halved and the solve retried, up to
    `max_attempts` solves in total. Returns None if all of them fail.
    """
    for attempt in range(max_attempts):
        new_p = intersect_line(point.add(delta), normal, params)
        if new_p is not None:
            if attempt:
                logger.debug("step succeeded after %d halvings", attempt)
            return new_p
        delta = delta.scale(0.5)
    return None


# ---------------------- Tracers ----------------------
def _clip_to_boundary(p: Point3, prev: Point3, params: SurfaceParams) -> Optional[Point3]:
    """
    Pull `p` back along the last displacement to the domain edge and reproject.
    """
    delta = p.sub(prev)
    fract = 0.0
    for coord, d in ((p.x, delta.x), (p.y, delta.y)):
        if d != 0.0:
            fract = max(fract, (abs(coord) - DOMAIN_EXTENT) / abs(d))
    return project_vertical(p.sub(delta.scale(fract)), params)


def _trace(start: Point3, previous: Point3, params: SurfaceParams,
           constraint_axis: Optional[Point3], step_length: float,
           max_steps: int) -> TraceResult:
    vertices: List[Point3] = []
    p, prev = start, previous
    if not _in_domain(p):
        return _polyline(vertices, OUTSIDE_DOMAIN)

    failure = None
    while _in_domain(p):
        if len(vertices) >= max_steps:
            failure = STEP_LIMIT
            break
        vertices.append(p)

        displacement = p.sub(prev)
        if displacement.norm() == 0.0:
            failure = STALLED
            break
        delta = displacement.normalize().scale(step_length)

        normal = normal_at(p, params)
        if constraint_axis is not None:
            normal = normal.sub(constraint_axis.scale(normal.dot(constraint_axis)))
        length = normal.norm()
        if length == 0.0 or not math.isfinite(length):
            failure = DEGENERATE_NORMAL
            break

        new_p = step(p, delta, normal.scale(1.0 / length), params)
        if new_p is None:
            failure = NO_INTERSECTION
            break
        prev, p = p, new_p

    if failure is None:
        boundary = _clip_to_boundary(p, prev, params)
        if boundary is None:
            failure = BOUNDARY_PROJECTION
        else:
            vertices.append(boundary)

    if failure is not None:
        logger.warning("Path from %s truncated after %d vertices: %s",
                       start, len(vertices), failure)
    return _polyline(vertices, failure)


def plot_path(start: Point3, previous: Point3, params: SurfaceParams,
              step_length: float = STEP, max_steps: int = MAX_STEPS) -> TraceResult:
    """
    Trace a free-running path from `start` to the edge of the unit square.

    The initial heading is start - previous. Both points should lie on
    the surface.
    """
    return _trace(start, previous, params, None, step_length, max_steps)


def plot_path_constrained(start: Point3, previous: Point3, constraint_axis: Point3,
                          params: SurfaceParams, step_length: float = STEP,
                          max_steps: int = MAX_STEPS) -> TraceResult:
    """
    Trace a path that stays in the plane through `start` orthogonal to `constraint_axis`.

    The reprojection normal has its component along `constraint_axis`
    removed, so neither the step nor the snap-back leaves the plane
    provided start - previous is already in it.
    """
    if abs(constraint_axis.norm() - 1.0) > 1e-9:
        raise ValueError(f"Constraint axis must be unit length, got {constraint_axis}.")
    return _trace(start, previous, params, constraint_axis, step_length, max_steps)


__all__ = [
    'TraceResult', 'step', 'plot_path', 'plot_path_constrained',
    'STEP', 'MAX_ATTEMPTS', 'MAX_STEPS',
]
