"""Propagation engine: folds a progression over per-stat distributions.

The engine starts from a point mass at every stat's current value and
applies each stat change in order, producing one step per change. Stats are
propagated independently; correlations between stats are not modeled.

Pipeline:
    Step 0: check_progression() - Reject progressions without a closed form
    Step 1: initial_distribution() - Point mass per stat
    Step 2: process_stat_change() - One level-up or promotion per step
    Step 3: to_snapshot() - Drop growth/cap/base for the caller
"""

import logging
from collections.abc import Mapping, Sequence

from ..config import get_config
from ..core.errors import UnsupportedProgressionError
from ..core.models import (
    Character,
    DistributedStat,
    LevelUp,
    Promotion,
    Snapshot,
    StatChange,
)
from ..validation import ensure_distributed_stats
from .feasibility import check_progression, is_closed_form_solvable
from .levelup import process_levelup
from .promotion import process_promotion


logger = logging.getLogger(__name__)

StatState = dict[object, DistributedStat]


def initial_distribution(character: Character) -> StatState:
    """Point mass at each stat's current value, keyed in sorted order."""
    return {
        key: DistributedStat.point_mass(character.stats[key])
        for key in sorted(character.stats)
    }


def process_stat_change(
    state: Mapping[object, DistributedStat],
    stat_change: StatChange,
    max_recursion_depth: int = 25,
) -> StatState:
    """Apply one stat change, returning the next generation of distributions."""
    if isinstance(stat_change, LevelUp):
        return process_levelup(state, stat_change, max_recursion_depth)
    if isinstance(stat_change, Promotion):
        return process_promotion(state, stat_change)
    raise TypeError(f"Unknown stat change: {type(stat_change).__name__}")


def to_snapshot(state: Mapping[object, DistributedStat]) -> Snapshot:
    """Project distributions to the caller-facing value -> probability maps."""
    return {key: dict(ds.pmf) for key, ds in state.items()}


def propagate(
    stat_changes: Sequence[StatChange],
    character: Character,
    verify: bool | None = None,
) -> list[StatState]:
    """Run the fold without the feasibility gate.

    Returns the full per-stat distributions (with growth, cap and base) for
    the initial state and after every stat change.

    Args:
        stat_changes: The progression, in order
        character: Starting character
        verify: Check mass conservation after every step; None uses the
            engine.verify_distributions setting

    Raises:
        DistributionInvariantError: If verification is on and a step is not
            a distribution
    """
    engine_config = get_config().engine
    if verify is None:
        verify = engine_config.verify_distributions

    state = initial_distribution(character)
    states = [state]

    for index, stat_change in enumerate(stat_changes):
        state = process_stat_change(state, stat_change, engine_config.max_recursion_depth)
        if verify:
            ensure_distributed_stats(state, engine_config.error_bound)
        logger.debug(f"Step {index + 1}/{len(stat_changes)} ({stat_change.type}) done")
        states.append(state)

    return states


def binomial_analysis(
    stat_changes: Sequence[StatChange],
    character: Character,
    verify: bool | None = None,
) -> list[Snapshot] | None:
    """Closed-form analysis of a progression.

    Returns:
        One snapshot for the initial state plus one per stat change, or None
        if the feasibility gate rejects the progression
    """
    if not is_closed_form_solvable(stat_changes):
        return None

    return [to_snapshot(state) for state in propagate(stat_changes, character, verify)]


def generate_histograms(
    stat_changes: Sequence[StatChange],
    character: Character,
    num_samples: int | None = None,
    verify: bool | None = None,
) -> list[Snapshot]:
    """Compute the exact distribution of every stat after every stat change.

    Args:
        stat_changes: The progression, in order; may be empty
        character: Starting character
        num_samples: Sample budget reserved for a sampling fallback; the
            closed-form path ignores it
        verify: Check mass conservation after every step; None uses the
            engine.verify_distributions setting

    Returns:
        len(stat_changes) + 1 snapshots, starting with the initial point masses

    Raises:
        UnsupportedProgressionError: If some stat change has no closed form

    Example:
        >>> snapshots = generate_histograms([LevelUp()] * 10, character)
        >>> snapshots[-1]["Str"]
    """
    if num_samples is not None:
        logger.warning(f"Sample budget {num_samples} ignored: no sampling fallback is available")

    logger.info(
        f"Analyzing {len(stat_changes)} stat changes for "
        f"'{character.name or 'unnamed'}' ({len(character.stats)} stats)"
    )

    snapshots = binomial_analysis(stat_changes, character, verify)
    if snapshots is None:
        result = check_progression(stat_changes, character)
        logger.warning(f"Progression rejected: {len(result.errors)} unsupported stat changes")
        raise UnsupportedProgressionError(result)

    logger.info(f"Analysis complete: {len(snapshots)} snapshots")
    return snapshots
