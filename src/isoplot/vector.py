from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any, Union

from isoplot.errors import DomainError

Operand = Union["Vec2", float]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Vec2:
    """Immutable 2D vector.

    Every operation returns a new instance; operands are never mutated.
    Arithmetic accepts either another ``Vec2`` (component-wise) or a scalar
    (broadcast to both components).
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        if not (_is_number(self.x) and _is_number(self.y)):
            msg = f"Vector components must be real numbers, got ({self.x!r}, {self.y!r})"
            raise DomainError(msg)
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            msg = f"Vector components must be finite, got ({self.x!r}, {self.y!r})"
            raise DomainError(msg)

    @classmethod
    def of(cls, x: Any, y: Any = None) -> Vec2:
        """Build a vector from two numbers, one number or a 2-sequence.

        ``Vec2.of(3)`` gives ``(3, 3)``, ``Vec2.of([1, 2])`` gives ``(1, 2)``.
        """
        if isinstance(x, Vec2):
            return cls(x.x, x.y)
        if _is_number(x) and _is_number(y):
            return cls(float(x), float(y))
        if _is_number(x) and y is None:
            return cls(float(x), float(x))
        if isinstance(x, Sequence) and not isinstance(x, str) and len(x) == 2 and y is None:
            if _is_number(x[0]) and _is_number(x[1]):
                return cls(float(x[0]), float(x[1]))
        if hasattr(x, "shape") and tuple(x.shape) == (2,) and y is None:
            return cls(float(x[0]), float(x[1]))
        msg = f"Cannot build a vector from {x!r}, {y!r}"
        raise DomainError(msg)

    @classmethod
    def zero(cls) -> Vec2:
        return cls(0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y)[index]

    def __len__(self) -> int:
        return 2

    def __repr__(self) -> str:
        return f"Vec2({self.x!r}, {self.y!r})"

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    # Arithmetic

    def add(self, other: Operand) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x + other.x, self.y + other.y)
        return Vec2(self.x + other, self.y + other)

    def sub(self, other: Operand) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x - other.x, self.y - other.y)
        return Vec2(self.x - other, self.y - other)

    def mul(self, other: Operand) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    def div(self, other: Operand) -> Vec2:
        if isinstance(other, Vec2):
            if other.x == 0 or other.y == 0:
                msg = f"Division by a vector with a zero component: {other!r}"
                raise DomainError(msg)
            return Vec2(self.x / other.x, self.y / other.y)
        if other == 0:
            msg = "Division of a vector by zero"
            raise DomainError(msg)
        return Vec2(self.x / other, self.y / other)

    def scale(self, k: float) -> Vec2:
        return Vec2(self.x * k, self.y * k)

    def negate(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __add__(self, other: Operand) -> Vec2:
        if not isinstance(other, Vec2) and not _is_number(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: float) -> Vec2:
        if not _is_number(other):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Operand) -> Vec2:
        if not isinstance(other, Vec2) and not _is_number(other):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: float) -> Vec2:
        if not _is_number(other):
            return NotImplemented
        return Vec2(other - self.x, other - self.y)

    def __mul__(self, other: Operand) -> Vec2:
        if not isinstance(other, Vec2) and not _is_number(other):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other: float) -> Vec2:
        if not _is_number(other):
            return NotImplemented
        return self.scale(other)

    def __truediv__(self, other: Operand) -> Vec2:
        if not isinstance(other, Vec2) and not _is_number(other):
            return NotImplemented
        return self.div(other)

    def __neg__(self) -> Vec2:
        return self.negate()

    # Metric

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize(self, unit: float = 1.0) -> Vec2:
        """Rescale to length ``unit``.

        Raises DomainError for the zero vector, which has no direction.
        """
        length = self.magnitude()
        if length == 0.0:
            msg = "Cannot normalize a zero-length vector"
            raise DomainError(msg)
        k = unit / length
        return Vec2(self.x * k, self.y * k)

    # Directions

    def angle_from_x_axis(self) -> float:
        """Angle to the +x axis in (-pi, pi]."""
        angle = math.atan2(self.y, self.x)
        # atan2(-0.0, x<0) yields -pi
        if angle == -math.pi:
            return math.pi
        return angle

    def rotate(self, angle: float) -> Vec2:
        """Counter-clockwise rotation by ``angle`` radians."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vec2(self.x * c - self.y * s, self.x * s + self.y * c)

    def reflect(self, normal: Vec2) -> Vec2:
        """Mirror across the line with unit ``normal``."""
        d = self.dot(normal)
        return Vec2(self.x - 2.0 * d * normal.x, self.y - 2.0 * d * normal.y)

    def refract(self, normal: Vec2, eta: float) -> Vec2:
        """Snell refraction of this (normalized) direction through a unit ``normal``.

        ``eta`` is the ratio of refractive indices. Total internal reflection
        gives the zero vector.
        """
        incident = self.normalize()
        d = normal.dot(incident)
        k = 1.0 - eta * eta * (1.0 - d * d)
        if k < 0.0:
            return Vec2.zero()
        nk = eta * d + math.sqrt(k)
        return Vec2(eta * incident.x - nk * normal.x, eta * incident.y - nk * normal.y)

    def polar_to_cartesian(self) -> Vec2:
        """Treat (x, y) as (radius, angle) and convert to cartesian."""
        return Vec2(self.x * math.cos(self.y), self.x * math.sin(self.y))


def vec2(x: Any, y: Any = None) -> Vec2:
    """Shorthand for :meth:`Vec2.of`."""
    return Vec2.of(x, y)
