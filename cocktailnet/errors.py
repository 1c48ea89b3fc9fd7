"""Errors shared by configuration loading and the networking core."""

from __future__ import annotations

__all__ = ["ConfigurationError"]


class ConfigurationError(RuntimeError):
    """Raised for misconfiguration that no individual request can recover from."""
