from __future__ import annotations


def is_near(value: float, target: float, error: float) -> bool:
    """Return True if ``value`` is within ``error`` of ``target``."""
    return abs(target - value) <= error


def is_in_range(value: float, start: float, stop: float, error: float = 0.0) -> bool:
    """Return True if ``value`` lies between the bounds, widened by ``error``."""
    lo = min(start, stop)
    hi = max(start, stop)
    return lo - error <= value <= hi + error


def sign(x: float) -> int:
    """Sign of x as -1, 0 or 1 (NaN maps to 0)."""
    return int(x > 0) - int(x < 0)
