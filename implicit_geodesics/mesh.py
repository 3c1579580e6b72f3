from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from .points import Point3

# 16-bit indices overflow on dense grids and wide fans.
INDEX_DTYPE = np.uint32
VERTEX_DTYPE = np.float32


@dataclass
class LineMesh:
    """
    Flat line-segment buffers handed to a renderer.

    Attributes:
        vertices: float32 array of shape (N, 3)
        indices: uint32 array of shape (M, 2); each row is one segment
    """
    vertices: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> LineMesh:
        return cls(np.zeros((0, 3), dtype=VERTEX_DTYPE), np.zeros((0, 2), dtype=INDEX_DTYPE))

    @classmethod
    def from_polyline(cls, vertices: Sequence[Point3],
                      segments: Sequence[Tuple[int, int]]) -> LineMesh:
        verts = np.array(vertices, dtype=VERTEX_DTYPE).reshape(-1, 3)
        idx = np.array(segments, dtype=INDEX_DTYPE).reshape(-1, 2)
        return cls(verts, idx)

    @property
    def num_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def num_segments(self) -> int:
        return int(self.indices.shape[0])

    def segment_points(self) -> np.ndarray:
        """Segments as an (M, 2, 3) array of endpoint coordinates."""
        return self.vertices[self.indices.astype(np.intp)]


def merge_meshes(meshes: Iterable[LineMesh]) -> LineMesh:
    """Concatenate meshes into one, offsetting each mesh's indices."""
    verts, idxs = [], []
    offset = 0
    for mesh in meshes:
        verts.append(mesh.vertices)
        idxs.append(mesh.indices.astype(INDEX_DTYPE) + INDEX_DTYPE(offset))
        offset += mesh.num_vertices
    if not verts:
        return LineMesh.empty()
    return LineMesh(np.concatenate(verts).astype(VERTEX_DTYPE, copy=False),
                    np.concatenate(idxs).astype(INDEX_DTYPE, copy=False))
