from __future__ import annotations

import math

from isoplot.errors import DomainError
from isoplot.math_utils import is_in_range, is_near
from isoplot.vector import Vec2

# Absolute containment tolerance for segment intersections, in world units.
SEGMENT_EPS: float = 0.01

UNIT_EPS: float = 1e-6


def line2line(a1: float, b1: float, c1: float, a2: float, b2: float, c2: float) -> Vec2 | None:
    """Intersect two lines given in normal form ``A*x + B*y = C``.

    Returns None when the determinant is exactly zero; parallel and
    coincident lines are not told apart.
    """
    det = a1 * b2 - a2 * b1
    if det == 0:
        return None

    return Vec2(
        (b2 * c1 - b1 * c2) / det,
        (a1 * c2 - a2 * c1) / det,
    )


def segment2segment(a1: Vec2, a2: Vec2, b1: Vec2, b2: Vec2, eps: float = SEGMENT_EPS) -> Vec2 | None:
    """Intersection point of segments ``a1-a2`` and ``b1-b2``, or None."""
    la = a2.y - a1.y
    lb = a1.x - a2.x
    lc = la * a1.x + lb * a1.y
    ma = b2.y - b1.y
    mb = b1.x - b2.x
    mc = ma * b1.x + mb * b1.y

    point = line2line(la, lb, lc, ma, mb, mc)
    if point is None:
        return None

    on_a = is_in_range(point.x, a1.x, a2.x, eps) and is_in_range(point.y, a1.y, a2.y, eps)
    on_b = is_in_range(point.x, b1.x, b2.x, eps) and is_in_range(point.y, b1.y, b2.y, eps)
    if on_a and on_b:
        return point
    return None


def ray2sphere(origin: Vec2, direction: Vec2, center: Vec2, radius: float) -> float | None:
    """Distance along the ray to the nearest non-negative hit, or None.

    Geometric formulation: with ``S = center - origin`` and ``P = d . S``
    the squared half-chord is ``H = r^2 - (|S|^2 - P^2)``, so only one square
    root is taken. ``direction`` must be unit length. A ray starting inside
    the sphere reports the exit distance.
    """
    if radius < 0:
        msg = f"Sphere radius must be non-negative, got {radius}"
        raise DomainError(msg)
    if not is_near(direction.dot(direction), 1.0, UNIT_EPS):
        msg = f"Ray direction must be a unit vector, got {direction!r}"
        raise DomainError(msg)

    s = center - origin
    p = direction.dot(s)
    h2 = radius * radius - (s.dot(s) - p * p)

    if h2 < 0:
        return None

    h = math.sqrt(h2)
    t_far = p + h

    # Sphere lies entirely behind the origin
    if t_far < 0:
        return None

    t_near = p - h
    return t_near if t_near >= 0 else t_far
