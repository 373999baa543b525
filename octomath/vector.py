"""Two-, three- and four-component float vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Vec2:
    """A two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x * other.x, self.y * other.y)

    def __truediv__(self, other: Vec2) -> Vec2:
        """Divide component-wise; a component is 0 where either operand is 0."""
        if not isinstance(other, Vec2):
            return NotImplemented

        def _div(a: float, b: float) -> float:
            return 0.0 if a == 0.0 or b == 0.0 else a / b

        return Vec2(_div(self.x, other.x), _div(self.y, other.y))


@dataclass(frozen=True)
class Vec3:
    """A three-component vector.

    Arithmetic with another ``Vec3`` works component-wise; arithmetic with a
    number applies the number to every component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, scalar: Number) -> Vec3:
        """A vector with every component set to ``scalar``."""
        return cls(scalar, scalar, scalar)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Union[Vec3, Number]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x + other, self.y + other, self.z + other)
        return NotImplemented

    def __radd__(self, other: Number) -> Vec3:
        return self.__add__(other)

    def __sub__(self, other: Union[Vec3, Number]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x - other, self.y - other, self.z - other)
        return NotImplemented

    def __mul__(self, other: Union[Vec3, Number]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Number) -> Vec3:
        return self.__mul__(other)

    def __truediv__(self, other: Union[Vec3, Number]) -> Vec3:
        """Divide by a vector (0 where its component is 0) or by a number."""
        if isinstance(other, Vec3):
            return Vec3(
                self.x / other.x if other.x != 0.0 else 0.0,
                self.y / other.y if other.y != 0.0 else 0.0,
                self.z / other.z if other.z != 0.0 else 0.0,
            )
        if isinstance(other, (int, float)):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_sq())

    def magnitude_sq(self) -> float:
        return self.dot(self)

    def distance(self, other: Vec3) -> float:
        """Length of the difference between the two vectors."""
        return (self - other).magnitude()

    def distance_sq(self, other: Vec3) -> float:
        return (self - other).magnitude_sq()

    def normalize(self) -> Vec3:
        """Unit vector in the same direction; the zero vector stays zero."""
        magnitude = self.magnitude()
        if magnitude == 0.0:
            return Vec3()
        return Vec3(self.x / magnitude, self.y / magnitude, self.z / magnitude)


@dataclass(frozen=True)
class Vec4:
    """A four-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w