"""
Vector primitives for light directions.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """
    A vector in 3D space. Light directions are unit vectors of this type.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> Vector:
        mag = self.magnitude
        if mag == 0.0: return Vector(0.0, 0.0, 0.0)
        return self / mag

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def angle_to(self, other: Vector) -> float:
        """Returns the angle in radians between this vector and another."""
        return math.atan2(self.cross(other).magnitude, self.dot(other))

    def to_angles(self) -> tuple[float, float]:
        """Inverse of `from_angles`: the (vertical, horizontal) pair of this direction."""
        unit = self.normalize()
        vertical = -math.asin(max(-1.0, min(1.0, unit.y)))
        horizontal = math.atan2(-unit.x, unit.z)
        return vertical, horizontal

    def is_close(self, other: Vector, tol: float = 1e-9) -> bool:
        return (self - other).magnitude <= tol

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Vector:
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    @classmethod
    def from_angles(cls, vertical: float, horizontal: float) -> Vector:
        """
        Convert a (vertical, horizontal) light angle pair to a unit direction.

        Args:
            vertical: Elevation angle in radians, documented domain [-pi/2, 0).
            horizontal: Azimuth angle in radians, documented domain (-3pi/4, pi/4).

        Returns:
            The normalized direction vector.
        """
        cos_v = math.cos(vertical)
        return cls(
            cos_v * -math.sin(horizontal),
            -math.sin(vertical),
            cos_v * math.cos(horizontal),
        ).normalize()


# Free-function forms for callers working with plain vectors
def normalize(v: Vector) -> Vector:
    return v.normalize()


def dot(a: Vector, b: Vector) -> float:
    return a.dot(b)


def cross(a: Vector, b: Vector) -> Vector:
    return a.cross(b)


def subtract(a: Vector, b: Vector) -> Vector:
    return a - b
