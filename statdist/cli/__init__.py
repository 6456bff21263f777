"""Command line interface for statdist."""

from .app import app
from . import commands  # noqa: F401  (registers the commands on app)

__all__ = ["app"]
