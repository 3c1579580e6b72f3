"""
config.py
=========

Explicit configuration for a Tracer. Every input the interactive control
surface can change lives here; a Tracer compares the old and new config
to decide which outputs must be recomputed.
"""
from __future__ import annotations
import json
from dataclasses import asdict, dataclass, fields, replace as dc_replace
from typing import Any, Dict, Tuple, Type

import numpy as np

from .paths import MAX_STEPS, STEP
from .rays import Ray, normalize_heading
from .surfaces import SurfaceKind, SurfaceParams

GRID_SIZE_RANGE = (2, 100)
FAN_COUNT_RANGE = (1, 100)


# ---------------------- Validation helpers ----------------------
def _check_scalar(val: Any, name: str, dtype: Type) -> Any:
    """Strictly validate a scalar; ints must really be ints, bools are rejected."""
    if isinstance(val, (bool, np.bool_)) or isinstance(val, complex):
        raise TypeError(f"Config Error ['{name}']: Expected {dtype.__name__}, got {type(val).__name__} '{val}'")
    if dtype is int and not isinstance(val, (int, np.integer)):
        raise TypeError(f"Config Error ['{name}']: Expected strict integer, got {type(val).__name__} '{val}'")
    try:
        out = dtype(val)
    except (ValueError, TypeError):
        raise TypeError(f"Config Error ['{name}']: Cannot convert {type(val).__name__} to {dtype.__name__}")
    if dtype is float and not np.isfinite(out):
        raise ValueError(f"Config Error ['{name}']: Expected a finite value, got {out}")
    return out


def _check_range(val, lo, hi, name: str) -> None:
    if not lo <= val <= hi:
        raise ValueError(f"Config Error ['{name}']: {val} outside [{lo}, {hi}]")


def _coerce_surface(val: Any) -> SurfaceKind:
    if isinstance(val, SurfaceKind):
        return val
    if isinstance(val, str):
        try:
            return SurfaceKind(val)
        except ValueError:
            pass
        try:
            return SurfaceKind[val.upper()]
        except KeyError:
            pass
    raise ValueError(f"Config Error ['surface']: Unknown surface '{val}'")


# ---------------------- Tracer configuration ----------------------
@dataclass(frozen=True)
class TracerConfig:
    """
    Inputs of one full recompute (grid plus both ray bundles).

    Attributes:
        surface: surface family member
        z_scale: vertical scale of the surface
        grid_size: grid lines per axis minus one
        ray_origin: (x, y) of the ray fan origin, inside the unit square
        heading: fan centre heading in degrees, normalized to (-180, 180]
        fan_width: angular spread of the fan in degrees
        fan_count: number of rays per direction
        step: arclength of one path step
        max_steps: vertex cap per path
    """
    surface: SurfaceKind = SurfaceKind.SINUSOIDAL_QUADRATIC
    z_scale: float = 0.25
    grid_size: int = 30
    ray_origin: Tuple[float, float] = (0.0, -0.9)
    heading: float = 0.0
    fan_width: float = 0.0
    fan_count: int = 1
    step: float = STEP
    max_steps: int = MAX_STEPS

    def __post_init__(self):
        self.validate()

    def validate(self) -> TracerConfig:
        """Check and normalize every field in place; raises TypeError / ValueError."""
        def set_(name, value):
            object.__setattr__(self, name, value)

        set_('surface', _coerce_surface(self.surface))
        set_('z_scale', _check_scalar(self.z_scale, 'z_scale', float))

        set_('grid_size', _check_scalar(self.grid_size, 'grid_size', int))
        _check_range(self.grid_size, *GRID_SIZE_RANGE, 'grid_size')

        origin = self.ray_origin
        if not hasattr(origin, '__iter__') or isinstance(origin, (str, bytes)):
            raise TypeError(f"Config Error ['ray_origin']: Expected a sequence, got {type(origin).__name__}")
        origin = tuple(origin)
        if len(origin) != 2:
            raise ValueError(f"Config Error ['ray_origin']: Expected 2 elements, got {len(origin)}")
        origin = tuple(_check_scalar(v, f'ray_origin[{i}]', float) for i, v in enumerate(origin))
        for i, v in enumerate(origin):
            _check_range(v, -1.0, 1.0, f'ray_origin[{i}]')
        set_('ray_origin', origin)

        set_('heading', normalize_heading(_check_scalar(self.heading, 'heading', float)))
        set_('fan_width', _check_scalar(self.fan_width, 'fan_width', float))
        if self.fan_width < 0:
            raise ValueError(f"Config Error ['fan_width']: must be >= 0, got {self.fan_width}")
        set_('fan_count', _check_scalar(self.fan_count, 'fan_count', int))
        _check_range(self.fan_count, *FAN_COUNT_RANGE, 'fan_count')

        set_('step', _check_scalar(self.step, 'step', float))
        if self.step <= 0:
            raise ValueError(f"Config Error ['step']: must be > 0, got {self.step}")
        set_('max_steps', _check_scalar(self.max_steps, 'max_steps', int))
        if self.max_steps <= 0:
            raise ValueError(f"Config Error ['max_steps']: must be > 0, got {self.max_steps}")
        return self

    def replace(self, **changes) -> TracerConfig:
        return dc_replace(self, **changes)

    @property
    def surface_params(self) -> SurfaceParams:
        return SurfaceParams(self.surface, self.z_scale)

    @property
    def ray(self) -> Ray:
        return Ray(self.ray_origin, self.heading)

    def grid_key(self) -> tuple:
        """Fields the grid depends on."""
        return (self.surface, self.z_scale, self.grid_size, self.step, self.max_steps)

    def ray_key(self) -> tuple:
        """Fields the ray bundles depend on."""
        return (self.surface, self.z_scale, self.ray_origin, self.heading,
                self.fan_width, self.fan_count, self.step, self.max_steps)

    # ---------- Serialization ----------
    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out['surface'] = self.surface.value
        out['ray_origin'] = list(self.ray_origin)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TracerConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Config Error: Unknown fields {sorted(unknown)}")
        return cls(**data)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> TracerConfig:
        return cls.from_dict(json.loads(text))
