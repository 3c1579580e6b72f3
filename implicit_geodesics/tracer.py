"""
Tracer: owner of the current configuration and the geometry built from it.

Recomputes are wholesale and synchronous. Each output is built in full
before it replaces the previous one, so a renderer reading the tracer
never sees a half-built grid or bundle.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .config import TracerConfig
from .diagnostics import PathCheck, check_path
from .grid import GridLine, build_grid, grid_mesh
from .mesh import LineMesh
from .paths import TraceResult
from .rays import FanResult, trace_fan

logger = logging.getLogger(__name__)


class Tracer:
    """
    Grid and geodesic ray bundles for one TracerConfig.

    Attributes:
        config: the configuration the current outputs were built from
        grid: grid lines, both sheets for two-sheeted surfaces
        fan: forward and backward ray bundles plus the origin flag
    """
    def __init__(self, config: Optional[TracerConfig] = None):
        self.config = config if config is not None else TracerConfig()
        self.grid: List[GridLine] = []
        self.fan = FanResult()
        self.regrid()
        self.repath()

    def __repr__(self) -> str:
        return (f"<Tracer surface={self.config.surface.label!r} grid={len(self.grid)} lines "
                f"rays={len(self.fan.forward)}x2 origin_ok={self.origin_ok}>")

    # ---------- Outputs ----------
    @property
    def forward(self) -> List[TraceResult]:
        return self.fan.forward

    @property
    def backward(self) -> List[TraceResult]:
        return self.fan.backward

    @property
    def origin_ok(self) -> bool:
        return self.fan.origin_ok

    def grid_mesh(self) -> LineMesh:
        return grid_mesh(self.grid)

    def forward_mesh(self) -> LineMesh:
        return self.fan.forward_mesh()

    def backward_mesh(self) -> LineMesh:
        return self.fan.backward_mesh()

    # ---------- Recomputation ----------
    def _build_grid(self, cfg: TracerConfig) -> List[GridLine]:
        return build_grid(cfg.surface_params, cfg.grid_size, cfg.step, cfg.max_steps)

    def _build_fan(self, cfg: TracerConfig) -> FanResult:
        fan = trace_fan(cfg.ray, cfg.fan_width, cfg.fan_count,
                        cfg.surface_params, cfg.step, cfg.max_steps)
        logger.info("Traced %d rays each way from %s (origin_ok=%s)",
                    len(fan.headings), cfg.ray_origin, fan.origin_ok)
        return fan

    def regrid(self) -> None:
        self.grid = self._build_grid(self.config)

    def repath(self) -> None:
        self.fan = self._build_fan(self.config)

    def update(self, config: TracerConfig) -> Tuple[bool, bool]:
        """
        Switch to `config`, recomputing only the outputs whose inputs changed.

        Nothing is swapped in until every affected output is rebuilt.
        Returns (regridded, repathed).
        """
        config.validate()
        regrid = self.config.grid_key() != config.grid_key()
        repath = self.config.ray_key() != config.ray_key()
        grid = self._build_grid(config) if regrid else self.grid
        fan = self._build_fan(config) if repath else self.fan
        self.config, self.grid, self.fan = config, grid, fan
        return regrid, repath

    def update_origin(self, dx: float, dy: float, dheading: float) -> None:
        """Move the ray origin in its local frame and turn; see Ray.update_origin."""
        ray = self.config.ray.update_origin(dx, dy, dheading)
        self.update(self.config.replace(ray_origin=ray.origin, heading=ray.heading_degrees))

    # ---------- Diagnostics ----------
    def check_paths(self) -> List[PathCheck]:
        params = self.config.surface_params
        return [check_path(result, params) for result in self.forward + self.backward]
