"""
Fans of geodesic rays from a single origin.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .intersect import project_vertical
from .mesh import LineMesh, merge_meshes
from .paths import MAX_STEPS, STEP, TraceResult, plot_path
from .points import Point3
from .surfaces import SurfaceParams

logger = logging.getLogger(__name__)

# Height the origin's vertical projection starts from.
ORIGIN_SEED = 1.0


def normalize_heading(degrees: float) -> float:
    """Wrap an angle in degrees into (-180, 180]."""
    wrapped = math.fmod(degrees + 180.0, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    wrapped -= 180.0
    return 180.0 if wrapped == -180.0 else wrapped


def heading_direction(degrees: float) -> Point3:
    """Unit direction in the xy plane; heading 0 points along +y, 90 along +x."""
    rad = math.radians(degrees)
    return Point3(math.sin(rad), math.cos(rad), 0.0)


def _clamp(v: float) -> float:
    return min(1.0, max(-1.0, v))


@dataclass(frozen=True)
class Ray:
    """
    Attributes:
        origin: (x, y) start of the ray, projected onto the surface before tracing
        heading_degrees: direction in (-180, 180]
    """
    origin: Tuple[float, float] = (0.0, -0.9)
    heading_degrees: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'origin', (float(self.origin[0]), float(self.origin[1])))
        object.__setattr__(self, 'heading_degrees', normalize_heading(float(self.heading_degrees)))

    def update_origin(self, dx: float, dy: float, dheading: float) -> Ray:
        """
        Move by a local (strafe dx, forward dy) displacement and turn by `dheading`.

        The displacement is rotated into the absolute frame by the current
        heading and the new origin is clamped to the unit square.
        """
        theta = math.radians(self.heading_degrees)
        adx = dx * math.cos(theta) + dy * math.sin(theta)
        ady = -dx * math.sin(theta) + dy * math.cos(theta)
        x0, y0 = self.origin
        return Ray((_clamp(x0 + adx), _clamp(y0 + ady)),
                   self.heading_degrees + dheading)


def fan_headings(center: float, width: float, count: int) -> List[float]:
    """Evenly spaced headings over [center - width/2, center + width/2]; one ray uses center."""
    if count < 1:
        raise ValueError(f"Fan needs at least one ray, got {count}.")
    if count == 1:
        return [center]
    first = center - width / 2.0
    spacing = width / (count - 1)
    return [first + i * spacing for i in range(count)]


@dataclass
class FanResult:
    """
    Attributes:
        forward: one path per fan heading
        backward: one path per fan heading rotated by 180 degrees
        origin_ok: False if the origin could not be projected onto the surface
        headings: forward headings, in fan order
        origin: projected origin, None when origin_ok is False
    """
    forward: List[TraceResult] = field(default_factory=list)
    backward: List[TraceResult] = field(default_factory=list)
    origin_ok: bool = True
    headings: List[float] = field(default_factory=list)
    origin: Optional[Point3] = None

    def forward_mesh(self) -> LineMesh:
        return merge_meshes(t.to_mesh() for t in self.forward)

    def backward_mesh(self) -> LineMesh:
        return merge_meshes(t.to_mesh() for t in self.backward)


def trace_ray(origin: Point3, heading: float, params: SurfaceParams,
              step_length: float = STEP, max_steps: int = MAX_STEPS) -> TraceResult:
    """Trace from an on-surface origin; the predecessor is one step back, projected."""
    delta = heading_direction(heading).scale(step_length)
    behind = origin.sub(delta)
    previous = project_vertical(behind, params)
    if previous is None:
        # The heading is still well defined from the unprojected point.
        previous = behind
    return plot_path(origin, previous, params, step_length, max_steps)


def trace_fan(ray: Ray, fan_width: float, fan_count: int, params: SurfaceParams,
              step_length: float = STEP, max_steps: int = MAX_STEPS) -> FanResult:
    """
    Trace every fan heading forwards and backwards from the ray origin.

    If the origin has no vertical projection onto the surface nothing is
    traced and origin_ok is False.
    """
    headings = fan_headings(ray.heading_degrees, fan_width, fan_count)
    origin = project_vertical(Point3.from_xy(ray.origin, ORIGIN_SEED), params)
    if origin is None:
        logger.warning("Ray origin %s is not on the %s surface", ray.origin, params.function.label)
        return FanResult(origin_ok=False, headings=headings)
    forward = [trace_ray(origin, h, params, step_length, max_steps) for h in headings]
    backward = [trace_ray(origin, h + 180.0, params, step_length, max_steps) for h in headings]
    return FanResult(forward, backward, True, headings, origin)
