"""Reductions of distributions to summary numbers.

These back the CLI's tables: averages per step, probability of reaching a
benchmark, and box-plot style percentiles.
"""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel


class BoxSummary(BaseModel):
    """Extremes, percentiles and mean of one stat at one step."""

    minimum: int
    lower: int
    median: int
    upper: int
    maximum: int
    mean: float


def expected_value(pmf: Mapping[int, float]) -> float:
    return sum(value * probability for value, probability in pmf.items())


def benchmark_probability(pmf: Mapping[int, float], benchmark: int) -> float:
    """Probability that the stat is at least benchmark."""
    return sum(probability for value, probability in pmf.items() if value >= benchmark)


def cumulative_distribution(pmf: Mapping[int, float]) -> dict[int, float]:
    """value -> P(stat <= value), in value order."""
    result = {}
    total = 0.0
    for value in sorted(pmf):
        total += pmf[value]
        result[value] = total
    return result


def find_percentile(pmf: Mapping[int, float], percentile: float) -> int | None:
    """Smallest value whose cumulative probability reaches percentile.

    Returns None for an empty pmf. Rounding may leave the total just below
    1.0, in which case percentiles near 1.0 resolve to the largest value.
    """
    if not pmf:
        return None
    for value, cumulative in cumulative_distribution(pmf).items():
        if cumulative >= percentile:
            return value
    return max(pmf)


def box_summary(pmf: Mapping[int, float], box_range: int = 50) -> BoxSummary:
    """Box plot numbers; the box covers the middle box_range percent.

    Raises:
        ValueError: If pmf is empty or box_range is outside [0, 100]
    """
    if not pmf:
        raise ValueError("Cannot summarize an empty distribution")
    if not 0 <= box_range <= 100:
        raise ValueError(f"box_range must be within [0, 100], got {box_range}")

    return BoxSummary(
        minimum=min(pmf),
        lower=find_percentile(pmf, 0.5 - box_range / 200),
        median=find_percentile(pmf, 0.5),
        upper=find_percentile(pmf, 0.5 + box_range / 200),
        maximum=max(pmf),
        mean=expected_value(pmf),
    )


def average_series(snapshots: Sequence[Mapping], key) -> list[float]:
    """Expected value of one stat at every step."""
    return [expected_value(snapshot[key]) for snapshot in snapshots]


def benchmark_series(snapshots: Sequence[Mapping], key, benchmark: int) -> list[float]:
    """Probability of reaching benchmark for one stat at every step."""
    return [benchmark_probability(snapshot[key], benchmark) for snapshot in snapshots]
