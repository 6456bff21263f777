"""Tests for distribution reductions."""

import pytest

from statdist.analysis.reductions import (
    average_series,
    benchmark_probability,
    benchmark_series,
    box_summary,
    cumulative_distribution,
    expected_value,
    find_percentile,
)


PMF = {5: 0.25, 6: 0.5, 7: 0.25}


class TestScalarReductions:
    def test_expected_value(self):
        assert expected_value(PMF) == pytest.approx(6.0)

    def test_benchmark_is_inclusive(self):
        assert benchmark_probability(PMF, 6) == pytest.approx(0.75)
        assert benchmark_probability(PMF, 8) == 0.0
        assert benchmark_probability(PMF, 0) == pytest.approx(1.0)

    def test_cumulative(self):
        assert cumulative_distribution({7: 0.25, 5: 0.25, 6: 0.5}) == pytest.approx(
            {5: 0.25, 6: 0.75, 7: 1.0}
        )


class TestPercentiles:
    """Tests for percentile lookups."""

    def test_median(self):
        assert find_percentile(PMF, 0.5) == 6

    def test_lowest_percentile(self):
        assert find_percentile(PMF, 0.0) == 5

    def test_rounding_shortfall_resolves_to_max(self):
        assert find_percentile({5: 0.5, 6: 0.4999999}, 1.0) == 6

    def test_empty(self):
        assert find_percentile({}, 0.5) is None

    def test_box_summary(self):
        summary = box_summary({3: 0.1, 4: 0.2, 5: 0.4, 6: 0.2, 7: 0.1})

        assert (summary.minimum, summary.lower, summary.median, summary.upper, summary.maximum) == (
            3,
            4,
            5,
            6,
            7,
        )
        assert summary.mean == pytest.approx(5.0)

    def test_box_summary_rejects_bad_input(self):
        with pytest.raises(ValueError):
            box_summary({})
        with pytest.raises(ValueError):
            box_summary(PMF, box_range=150)


class TestSeries:
    def test_average_and_benchmark_series(self):
        snapshots = [{"Str": {5: 1.0}}, {"Str": {5: 0.5, 6: 0.5}}]

        assert average_series(snapshots, "Str") == pytest.approx([5.0, 5.5])
        assert benchmark_series(snapshots, "Str", 6) == pytest.approx([0.0, 0.5])
