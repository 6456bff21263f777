"""Closed-form analysis of stat progressions.

The analysis computes exact stat distributions without sampling.

Modules:
    feasibility: Decides whether a progression has a closed form
    levelup: Level-up handlers per blank avoidance policy
    guaranteed: Exact-count guaranteed stats
    promotion: Deterministic promotion transforms
    propagation: The fold over a progression, and generate_histograms()
    reductions: Averages, benchmarks and percentiles of distributions
"""

from .feasibility import (
    stat_change_acceptable,
    is_closed_form_solvable,
    check_progression,
)
from .levelup import (
    all_blank_probability,
    simple_levelup,
    retried_levelup,
    fixed_stat_levelup,
    process_levelup,
)
from .guaranteed import guaranteed_count_levelup
from .promotion import promote_stat, process_promotion
from .propagation import (
    initial_distribution,
    process_stat_change,
    to_snapshot,
    propagate,
    binomial_analysis,
    generate_histograms,
)
from .reductions import (
    BoxSummary,
    expected_value,
    benchmark_probability,
    cumulative_distribution,
    find_percentile,
    box_summary,
    average_series,
    benchmark_series,
)

__all__ = [
    # Feasibility
    "stat_change_acceptable",
    "is_closed_form_solvable",
    "check_progression",
    # Level-ups
    "all_blank_probability",
    "simple_levelup",
    "retried_levelup",
    "fixed_stat_levelup",
    "process_levelup",
    "guaranteed_count_levelup",
    # Promotions
    "promote_stat",
    "process_promotion",
    # Propagation
    "initial_distribution",
    "process_stat_change",
    "to_snapshot",
    "propagate",
    "binomial_analysis",
    "generate_histograms",
    # Reductions
    "BoxSummary",
    "expected_value",
    "benchmark_probability",
    "cumulative_distribution",
    "find_percentile",
    "box_summary",
    "average_series",
    "benchmark_series",
]
