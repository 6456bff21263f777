"""Rule-set presets for common games."""

from . import gba

__all__ = ["gba"]
