from __future__ import annotations
import math
from typing import NamedTuple, Tuple


class Point3(NamedTuple):
    """
    Immutable 3D point / vector in double precision.

    Attributes:
        x, y, z: Cartesian components in the embedding space.
    """
    x: float
    y: float
    z: float

    def add(self, other: Point3) -> Point3:
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Point3) -> Point3:
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, m: float) -> Point3:
        return Point3(self.x * m, self.y * m, self.z * m)

    def dot(self, other: Point3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Point3:
        """Unit vector in the same direction; zero or non-finite length is an error."""
        length = self.norm()
        if length == 0.0 or not math.isfinite(length):
            raise ValueError(f"Cannot normalize vector of length {length}.")
        return self.scale(1.0 / length)

    @classmethod
    def from_xy(cls, xy: Tuple[float, float], z: float = 0.0) -> Point3:
        return cls(float(xy[0]), float(xy[1]), float(z))


X_AXIS = Point3(1.0, 0.0, 0.0)
Y_AXIS = Point3(0.0, 1.0, 0.0)
Z_AXIS = Point3(0.0, 0.0, 1.0)

__all__ = ['Point3', 'X_AXIS', 'Y_AXIS', 'Z_AXIS']
