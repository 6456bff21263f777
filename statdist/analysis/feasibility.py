"""Feasibility gate for the closed-form analysis.

Decides, for a whole progression, whether every stat change can be solved
exactly. The decision is sequence-wide: one unsupported step rejects the
whole progression.
"""

from collections.abc import Sequence

from ..core.models import (
    AwardFixedStatOnBlank,
    Character,
    GuaranteedStats,
    LevelUp,
    StatChange,
    ValidationResult,
    VariableGuaranteedStats,
)


def stat_change_acceptable(stat_change: StatChange) -> bool:
    """Whether a single stat change has a closed-form solution.

    Promotions are deterministic and always acceptable. Level-ups are
    acceptable unless they use variable guaranteed stats, or guaranteed
    stats with a count range that is neither ``0..`` nor an exact count.
    """
    if not isinstance(stat_change, LevelUp):
        return True

    policy = stat_change.blank_avoidance
    if isinstance(policy, VariableGuaranteedStats):
        return False
    if isinstance(policy, GuaranteedStats):
        return policy.count.is_unbounded_from_zero or policy.count.is_exact
    return True


def is_closed_form_solvable(stat_changes: Sequence[StatChange]) -> bool:
    """Whether every stat change of a progression can be solved exactly."""
    return all(stat_change_acceptable(change) for change in stat_changes)


def check_progression(
    stat_changes: Sequence[StatChange],
    character: Character | None = None,
) -> ValidationResult:
    """Report every reason a progression can't be solved in closed form.

    Errors block the analysis. Warnings flag stat keys that the character
    doesn't have; those are ignored by the engine.

    Args:
        stat_changes: The progression, in order
        character: Optional starting character for key checks

    Returns:
        ValidationResult with one issue per problem
    """
    result = ValidationResult()
    known_keys = set(character.stats) if character is not None else None

    for index, change in enumerate(stat_changes):
        if not isinstance(change, LevelUp):
            continue
        policy = change.blank_avoidance

        if isinstance(policy, VariableGuaranteedStats):
            result.add_error(
                category="UNSUPPORTED_POLICY",
                message="variable guaranteed stats have no closed-form solution",
                step=index,
            )
        elif isinstance(policy, GuaranteedStats) and not stat_change_acceptable(change):
            result.add_error(
                category="UNSUPPORTED_POLICY",
                message=f"guaranteed stat count range {policy.count} is not supported",
                step=index,
                suggestion="use an exact count or 0..",
            )

        if known_keys is None:
            continue

        if isinstance(policy, AwardFixedStatOnBlank) and policy.fallback_stat not in known_keys:
            result.add_warning(
                category="UNKNOWN_STAT",
                message=f"fallback stat '{policy.fallback_stat}' is not a stat of the character",
                step=index,
            )
        if isinstance(policy, GuaranteedStats):
            unknown = [key for key in policy.iteration_order if key not in known_keys]
            if unknown:
                result.add_warning(
                    category="UNKNOWN_STAT",
                    message=f"iteration order names unknown stats: {', '.join(unknown)}",
                    step=index,
                )

    return result
