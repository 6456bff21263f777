"""Level-up handlers for the closed-form engine.

Each stat's growth rate splits into guaranteed points g = rate // 100 and a
probability p = (rate % 100) / 100 of one extra point. The simple update
moves mass p to value + g + 1 and 1 - p to value + g, clamped to the cap.

The blank avoidance policies modify that update using all_zero, the chance
that no stat hits its probabilistic roll this level. A stat with at least one
guaranteed point makes a blank level impossible (all_zero = 0).
"""

import logging
from collections.abc import Iterable, Mapping

from ..core.errors import UnsupportedProgressionError
from ..core.models import (
    AwardFixedStatOnBlank,
    DistributedStat,
    GuaranteedStats,
    LevelUp,
    NoAvoidance,
    RetriesForNoBlank,
    split_growth,
)
from .feasibility import check_progression, stat_change_acceptable
from .guaranteed import guaranteed_count_levelup
from .pmf import spread, with_pmf


logger = logging.getLogger(__name__)


def all_blank_probability(growths: Iterable[int]) -> float:
    """Probability that no stat gains a probabilistic point this level."""
    probability = 1.0
    for growth in growths:
        guaranteed, chance = split_growth(growth)
        probability *= 0.0 if guaranteed >= 1 else 1.0 - chance
    return probability


def _others_blank(all_zero: float, chance: float) -> float:
    """Probability that every other stat rolled blank, given this one did."""
    return min(all_zero / (1.0 - chance), 1.0)


def simple_levelup(ds: DistributedStat, growth: int) -> dict[int, float]:
    """Plain level-up: one independent roll."""
    guaranteed, chance = split_growth(growth)
    return spread(ds, guaranteed, chance, 1.0 - chance)


def retried_levelup(
    ds: DistributedStat,
    growth: int,
    all_zero: float,
    retries: int,
) -> dict[int, float]:
    """Level-up rerolled up to ``retries`` times while the level is blank.

    Attempt i is reached with probability all_zero ** i. On every attempt but
    the last, the "no point" branch excludes the case where all other stats
    were blank too, since that case is the reroll. The last attempt stands
    whatever it rolls.
    """
    guaranteed, chance = split_growth(growth)
    others_blank = _others_blank(all_zero, chance)

    acc = None
    for attempt in range(retries + 1):
        reroll_adjustment = 1.0 if attempt == retries else 1.0 - others_blank
        scaling = all_zero**attempt
        acc = spread(
            ds,
            guaranteed,
            chance * scaling,
            (1.0 - chance) * reroll_adjustment * scaling,
            acc,
        )
    return acc


def fixed_stat_levelup(
    ds: DistributedStat,
    growth: int,
    all_zero: float,
) -> dict[int, float]:
    """Level-up of the fallback stat under AwardFixedStatOnBlank.

    The fallback stat gains its extra point on its own hit or on a blank
    level; its "no point" branch excludes the blank level.
    """
    guaranteed, chance = split_growth(growth)
    others_blank = _others_blank(all_zero, chance)
    return spread(
        ds,
        guaranteed,
        chance + all_zero,
        (1.0 - chance) * (1.0 - others_blank),
    )


def process_levelup(
    state: Mapping[object, DistributedStat],
    level_up: LevelUp,
    max_recursion_depth: int = 25,
) -> dict[object, DistributedStat]:
    """Apply one level-up to every stat of a step.

    Args:
        state: Per-stat distributions before the level
        level_up: The level-up to apply
        max_recursion_depth: Roll cutoff for exact-count guaranteed stats

    Returns:
        New per-stat distributions; growth, cap and base are unchanged

    Raises:
        UnsupportedProgressionError: If the level's policy has no closed form
    """
    if not stat_change_acceptable(level_up):
        raise UnsupportedProgressionError(check_progression([level_up]))

    growths = {
        key: level_up.effective_growth(key, ds.growth) for key, ds in state.items()
    }
    all_zero = all_blank_probability(growths.values())
    policy = level_up.blank_avoidance

    logger.debug(f"Level-up with {policy.type}, all-blank probability {all_zero:.6f}")

    if isinstance(policy, GuaranteedStats) and policy.count.is_exact:
        return guaranteed_count_levelup(state, growths, policy, max_recursion_depth)

    updated = {}
    for key, ds in state.items():
        growth = growths[key]
        if isinstance(policy, RetriesForNoBlank):
            pmf = retried_levelup(ds, growth, all_zero, policy.max_retries)
        elif isinstance(policy, AwardFixedStatOnBlank) and key == policy.fallback_stat:
            pmf = fixed_stat_levelup(ds, growth, all_zero)
        elif isinstance(policy, (NoAvoidance, AwardFixedStatOnBlank, GuaranteedStats)):
            # GuaranteedStats reaching here is 0.., which guarantees nothing
            pmf = simple_levelup(ds, growth)
        else:
            raise UnsupportedProgressionError(check_progression([level_up]))
        updated[key] = with_pmf(ds, pmf)
    return updated
