"""Pointwise pmf updates shared by the level-up handlers."""

from collections import defaultdict

from ..core.models import DistributedStat


def clamp(value: int, cap: int) -> int:
    """Clamp a stat value to [0, cap]."""
    return min(max(value, 0), cap)


def spread(
    ds: DistributedStat,
    guaranteed: int,
    hit_weight: float,
    miss_weight: float,
    acc: defaultdict[int, float] | None = None,
) -> defaultdict[int, float]:
    """Move each value's mass to value + guaranteed (+1 on a hit).

    Destinations are clamped to the cap, so values that land on the same
    clamped destination merge. Zero weights add nothing, which keeps
    unreachable values out of the support.

    Args:
        ds: The stat's current distribution
        guaranteed: Guaranteed points this level
        hit_weight: Weight of the "one extra point" branch
        miss_weight: Weight of the "no extra point" branch
        acc: Accumulator to add into (a fresh one if None)
    """
    if acc is None:
        acc = defaultdict(float)
    for value, probability in ds.pmf.items():
        if hit_weight > 0.0:
            acc[clamp(value + guaranteed + 1, ds.cap)] += probability * hit_weight
        if miss_weight > 0.0:
            acc[clamp(value + guaranteed, ds.cap)] += probability * miss_weight
    return acc


def with_pmf(ds: DistributedStat, pmf: dict[int, float], **changes) -> DistributedStat:
    """A new DistributedStat with pmf (sorted by value) and optional field changes."""
    return ds.model_copy(update={"pmf": dict(sorted(pmf.items())), **changes})
