"""Promotion handling for the closed-form engine.

A promotion is deterministic, so it maps each point of a stat's support to
exactly one new value. Values that land on the same result merge.
"""

from collections import defaultdict
from collections.abc import Mapping

from ..core.errors import PromotionContractError
from ..core.models import DistributedStat, Promotion
from .pmf import with_pmf


def promote_stat(key, ds: DistributedStat, promotion: Promotion) -> DistributedStat:
    """Apply a promotion to one stat's distribution.

    Raises:
        PromotionContractError: If the transform yields different growths or
            caps for different values, or a value outside [0, cap]
    """
    outcomes = []
    for value, probability in ds.pmf.items():
        promoted = promotion.apply(key, ds.stat_at(value))
        outcomes.append((promoted, probability))

    growth_caps = {(stat.growth, stat.cap) for stat, _ in outcomes}
    if len(growth_caps) > 1:
        raise PromotionContractError(
            f"Promotion '{promotion.name or 'unnamed'}' gives stat {key!r} "
            f"value-dependent growths/caps: {sorted(growth_caps)}"
        )

    acc: defaultdict[int, float] = defaultdict(float)
    for stat, probability in outcomes:
        if not 0 <= stat.value <= stat.cap:
            raise PromotionContractError(
                f"Promotion '{promotion.name or 'unnamed'}' gives stat {key!r} "
                f"value {stat.value} outside [0, {stat.cap}]"
            )
        acc[stat.value] += probability

    if not outcomes:
        return ds
    growth, cap = growth_caps.pop()
    return with_pmf(ds, acc, growth=growth, cap=cap)


def process_promotion(
    state: Mapping[object, DistributedStat],
    promotion: Promotion,
) -> dict[object, DistributedStat]:
    """Apply a promotion to every stat of a step. Base passes through unchanged."""
    return {key: promote_stat(key, ds, promotion) for key, ds in state.items()}
