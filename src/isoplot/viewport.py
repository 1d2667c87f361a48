from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from isoplot.errors import DomainError
from isoplot.vector import Vec2

SQUARE_RTOL: float = 1e-9


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle in surface pixels; (x, y) is the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    def corners(self) -> tuple[Vec2, Vec2, Vec2, Vec2]:
        return (
            Vec2(self.x, self.y),
            Vec2(self.x + self.width, self.y),
            Vec2(self.x + self.width, self.y + self.height),
            Vec2(self.x, self.y + self.height),
        )


@dataclass(frozen=True, slots=True)
class Domain:
    """Axis-aligned world-space region ``[x_min, x_max] x [y_min, y_max]``."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def square(cls, center: Vec2, half_size: float) -> Domain:
        return cls(center.x - half_size, center.x + half_size, center.y - half_size, center.y + half_size)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Vec2:
        return Vec2((self.x_min + self.x_max) * 0.5, (self.y_min + self.y_max) * 0.5)

    @property
    def lower_left(self) -> Vec2:
        return Vec2(self.x_min, self.y_min)

    def is_square(self) -> bool:
        return math.isclose(self.width, self.height, rel_tol=SQUARE_RTOL)

    def contains(self, p: Vec2) -> bool:
        return self.x_min <= p.x <= self.x_max and self.y_min <= p.y <= self.y_max

    def quadrants(self) -> Iterator[Domain]:
        """The 2x2 partition, column by column from the lower-left cell."""
        half = self.width * 0.5
        for i in (0, 1):
            x = self.x_min + i * half
            for j in (0, 1):
                y = self.y_min + j * half
                yield Domain(x, x + half, y, y + half)

    def require_square(self) -> None:
        """Raise DomainError unless the domain is a non-empty square."""
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            msg = f"Domain bounds must be finite: {self}"
            raise DomainError(msg)
        if self.width <= 0 or self.height <= 0:
            msg = f"Domain must have a positive side length: {self}"
            raise DomainError(msg)
        if not self.is_square():
            msg = f"Domain must be square, got {self.width} x {self.height}"
            raise DomainError(msg)


@dataclass(frozen=True, slots=True)
class Viewport:
    """Affine map between world coordinates and a pixel surface.

    Coordinate convention:
    - world y points up, surface y points down
    - the world rectangle ``origin .. origin + size`` fills the whole surface

    Parameters
    ----------
    origin:
        Lower-left world corner of the visible region.
    size:
        World extent (width, height) of the visible region.
    surface_size:
        Surface size in pixels (width, height).

    """

    origin: Vec2
    size: Vec2
    surface_size: tuple[int, int]

    def __post_init__(self) -> None:
        if self.size.x <= 0 or self.size.y <= 0:
            msg = f"Viewport size must be positive, got {self.size!r}"
            raise DomainError(msg)
        if self.surface_size[0] <= 0 or self.surface_size[1] <= 0:
            msg = f"Surface size must be positive, got {self.surface_size!r}"
            raise DomainError(msg)

    @classmethod
    def from_domain(cls, domain: Domain, surface_size: tuple[int, int]) -> Viewport:
        """Viewport showing exactly ``domain``."""
        return cls(origin=domain.lower_left, size=Vec2(domain.width, domain.height), surface_size=surface_size)

    @property
    def domain(self) -> Domain:
        return Domain(
            self.origin.x,
            self.origin.x + self.size.x,
            self.origin.y,
            self.origin.y + self.size.y,
        )

    @property
    def scale_x(self) -> float:
        """Pixels per world unit along x."""
        return self.surface_size[0] / self.size.x

    @property
    def scale_y(self) -> float:
        """Pixels per world unit along y."""
        return self.surface_size[1] / self.size.y

    def length_to_surface(self, length: float) -> float:
        """World length in pixels, measured along x."""
        return length * self.scale_x

    def map_to_surface(self, point: Vec2) -> Vec2:
        return Vec2(
            (point.x - self.origin.x) * self.scale_x,
            (self.origin.y + self.size.y - point.y) * self.scale_y,
        )

    def map_to_world(self, point: Vec2) -> Vec2:
        return Vec2(
            self.origin.x + point.x / self.scale_x,
            self.origin.y + self.size.y - point.y / self.scale_y,
        )
