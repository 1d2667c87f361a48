from __future__ import annotations


class IsoplotError(Exception):
    """Base error of the package."""


class DomainError(IsoplotError, ValueError):
    """Degenerate input: an operation is undefined for the given arguments."""


class ConfigError(IsoplotError, ValueError):
    """Invalid configuration value."""
