"""Core models and errors for statdist."""

from .errors import (
    StatdistError,
    UnsupportedProgressionError,
    PromotionContractError,
    DistributionInvariantError,
)

__all__ = [
    "StatdistError",
    "UnsupportedProgressionError",
    "PromotionContractError",
    "DistributionInvariantError",
]
