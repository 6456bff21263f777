"""Exact-count guaranteed stats.

Under GuaranteedStats with an exact count n, a level works like this:

1. Every stat gets its guaranteed points (growth // 100).
2. Stats with at least one guaranteed point count toward n.
3. Stats are rolled cyclically in iteration order. Stats that already won
   their point or are capped are skipped. A roll succeeds with the stat's
   probabilistic growth and awards one point.
4. Rolling stops once n stats are awarded, or after max_depth rolls.

Stats are tracked independently, so the chance that another stat is capped
is taken from its own pmf (mass at or above cap - guaranteed). For each
stat the engine enumerates the capped configurations of the other stats and
runs a forward pass over the set of awarded stats to get the stat's marginal
award probability.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from itertools import product

from ..core.models import DistributedStat, GuaranteedStats, split_growth
from .pmf import spread, with_pmf


logger = logging.getLogger(__name__)

# Remaining frontier mass below which rolling stops early
NEGLIGIBLE_MASS = 1e-12


def iteration_order(policy: GuaranteedStats, keys: Iterable) -> list:
    """Roll order: the policy's order restricted to known keys, deduplicated.

    An empty policy order means all keys in sorted order.
    """
    keys = set(keys)
    order = []
    for key in policy.iteration_order or sorted(keys):
        if key in keys and key not in order:
            order.append(key)
    return order


def capped_probability(ds: DistributedStat, guaranteed: int) -> float:
    """Probability that a stat has no room left after its guaranteed points."""
    return sum(p for value, p in ds.pmf.items() if value + guaranteed >= ds.cap)


def award_probability(
    target,
    order: list,
    chances: Mapping[object, float],
    capped: frozenset,
    baseline: int,
    count: int,
    max_depth: int,
) -> float:
    """Probability that target wins its point, for a fixed set of capped stats.

    target must be in order and not in capped. States in the frontier are the
    sets of stats already awarded; a state is dropped as soon as the count is
    reached, and mass where target won is moved out into the result.
    """
    if baseline >= count:
        return 0.0

    frontier: dict[frozenset, float] = {frozenset(): 1.0}
    hit = 0.0

    for depth in range(max_depth):
        key = order[depth % len(order)]
        chance = chances[key]
        next_frontier: defaultdict[frozenset, float] = defaultdict(float)

        for awarded, probability in frontier.items():
            if key in awarded or key in capped or chance <= 0.0:
                next_frontier[awarded] += probability
                continue

            if key == target:
                hit += probability * chance
            else:
                grown = awarded | {key}
                if baseline + len(grown) < count:
                    next_frontier[grown] += probability * chance
            next_frontier[awarded] += probability * (1.0 - chance)

        frontier = next_frontier
        if sum(frontier.values()) < NEGLIGIBLE_MASS:
            break

    return hit


def marginal_award_probability(
    target,
    order: list,
    chances: Mapping[object, float],
    capped_probabilities: Mapping[object, float],
    baseline: int,
    count: int,
    max_depth: int,
) -> float:
    """Award probability of target given it has room, averaged over the
    capped states of the other stats."""
    others = [key for key in order if key != target and chances[key] > 0.0]
    always_capped = {key for key in others if capped_probabilities[key] >= 1.0}
    uncertain = [key for key in others if 0.0 < capped_probabilities[key] < 1.0]

    total = 0.0
    for states in product((False, True), repeat=len(uncertain)):
        weight = 1.0
        capped = set(always_capped)
        for key, is_capped in zip(uncertain, states):
            if is_capped:
                weight *= capped_probabilities[key]
                capped.add(key)
            else:
                weight *= 1.0 - capped_probabilities[key]
        if weight <= 0.0:
            continue
        total += weight * award_probability(
            target, order, chances, frozenset(capped), baseline, count, max_depth
        )
    return total


def guaranteed_count_levelup(
    state: Mapping[object, DistributedStat],
    growths: Mapping[object, int],
    policy: GuaranteedStats,
    max_depth: int,
) -> dict[object, DistributedStat]:
    """Apply one exact-count guaranteed stats level to every stat."""
    count = policy.count.minimum
    guaranteed = {}
    chances = {}
    for key in state:
        guaranteed[key], chances[key] = split_growth(growths[key])

    baseline = sum(1 for points in guaranteed.values() if points >= 1)
    order = iteration_order(policy, state)
    capped_probabilities = {
        key: capped_probability(ds, guaranteed[key]) for key, ds in state.items()
    }

    logger.debug(
        f"Guaranteed stats level: count={count}, baseline={baseline}, order={order}"
    )

    updated = {}
    for key, ds in state.items():
        award = 0.0
        if key in order:
            award = marginal_award_probability(
                key, order, chances, capped_probabilities, baseline, count, max_depth
            )
        updated[key] = with_pmf(ds, spread(ds, guaranteed[key], award, 1.0 - award))
    return updated
