"""CLI commands for statdist."""

from . import (
    analyze,
    validate,
    config,
)

__all__ = [
    "analyze",
    "validate",
    "config",
]
