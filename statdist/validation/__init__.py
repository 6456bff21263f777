"""Shared validation primitives for statdist.

Modules:
    distributions: Probability mass checks (weight sums, support bounds)
"""

from .distributions import (
    ERROR_BOUND,
    validate_weight_sum,
    validate_pmf,
    validate_support,
    validate_distributed_stats,
    validate_snapshots,
    ensure_pmf,
    ensure_distributed_stats,
)

__all__ = [
    "ERROR_BOUND",
    "validate_weight_sum",
    "validate_pmf",
    "validate_support",
    "validate_distributed_stats",
    "validate_snapshots",
    "ensure_pmf",
    "ensure_distributed_stats",
]
