"""Probability mass validation.

All helpers are free functions over plain mappings. The ``validate_*``
functions return bools; the ``ensure_*`` functions raise
DistributionInvariantError and are what the engine calls when verification
is enabled.
"""

from collections.abc import Iterable, Mapping

from ..core.errors import DistributionInvariantError
from ..core.models import DistributedStat


ERROR_BOUND = 1e-5


def validate_weight_sum(
    weights: Iterable[float],
    error_bound: float = ERROR_BOUND,
) -> bool:
    """Check that weights sum to 1.0 within error_bound."""
    return abs(sum(weights) - 1.0) < error_bound


def validate_pmf(pmf: Mapping[int, float], error_bound: float = ERROR_BOUND) -> bool:
    """Check that a value -> probability map is a distribution."""
    return validate_weight_sum(pmf.values(), error_bound)


def validate_support(pmf: Mapping[int, float], cap: int) -> bool:
    """Check that every value of a pmf lies in [0, cap]."""
    return all(0 <= value <= cap for value in pmf)


def validate_distributed_stats(
    stats: Mapping[object, DistributedStat],
    error_bound: float = ERROR_BOUND,
) -> bool:
    """Check every per-stat pmf of one step."""
    return all(validate_pmf(ds.pmf, error_bound) for ds in stats.values())


def validate_snapshots(
    snapshots: Iterable[Mapping[object, Mapping[int, float]]],
    error_bound: float = ERROR_BOUND,
) -> bool:
    """Check every pmf of every snapshot."""
    return all(
        validate_pmf(pmf, error_bound)
        for snapshot in snapshots
        for pmf in snapshot.values()
    )


def ensure_pmf(
    pmf: Mapping[int, float],
    key: object = None,
    error_bound: float = ERROR_BOUND,
) -> None:
    """Raise DistributionInvariantError if pmf doesn't sum to 1."""
    if not validate_pmf(pmf, error_bound):
        total = sum(pmf.values())
        label = f" for stat {key!r}" if key is not None else ""
        raise DistributionInvariantError(
            f"Probabilities{label} sum to {total:.8f}, expected 1.0 (+/- {error_bound})"
        )


def ensure_distributed_stats(
    stats: Mapping[object, DistributedStat],
    error_bound: float = ERROR_BOUND,
) -> None:
    """Raise DistributionInvariantError if any stat of one step is not a distribution."""
    for key, ds in stats.items():
        ensure_pmf(ds.pmf, key, error_bound)
        if not validate_support(ds.pmf, ds.cap):
            raise DistributionInvariantError(
                f"Stat {key!r} has values outside [0, {ds.cap}]: {sorted(ds.pmf)}"
            )
