"""Tests for the propagation engine and generate_histograms()."""

import logging

import pytest

from statdist.analysis import propagation
from statdist.analysis.propagation import (
    binomial_analysis,
    generate_histograms,
    initial_distribution,
    propagate,
    to_snapshot,
)
from statdist.core.errors import (
    DistributionInvariantError,
    StatdistError,
    UnsupportedProgressionError,
)
from statdist.core.models import (
    Character,
    DistributedStat,
    LevelUp,
    Promotion,
    Stat,
    StatBoost,
    VariableGuaranteedStats,
)
from statdist.presets import gba
from statdist.validation import validate_snapshots


class TestInitialDistribution:
    def test_point_masses_in_sorted_order(self, sample_character):
        state = initial_distribution(sample_character)

        assert list(state) == ["HP", "Lck", "Spd", "Str"]
        assert state["Str"].pmf == {4: 1.0}
        assert state["HP"].cap == 60

    def test_snapshot_keeps_only_pmfs(self, sample_character):
        snapshot = to_snapshot(initial_distribution(sample_character))
        assert snapshot["Spd"] == {9: 1.0}


class TestGenerateHistograms:
    """Tests for the public entry point."""

    def test_empty_progression(self, sample_character):
        snapshots = generate_histograms([], sample_character)

        assert len(snapshots) == 1
        assert snapshots[0] == {key: {stat.value: 1.0} for key, stat in sample_character.stats.items()}

    def test_one_snapshot_per_step(self, sample_character, sample_progression):
        snapshots = generate_histograms(sample_progression, sample_character)
        assert len(snapshots) == len(sample_progression) + 1

    def test_mass_and_support(self, sample_character, sample_progression):
        snapshots = generate_histograms(sample_progression, sample_character)

        assert validate_snapshots(snapshots)
        for snapshot in snapshots[:6]:
            assert max(snapshot["Str"]) <= 20
            assert max(snapshot["HP"]) <= 60
        # Promotion raised the Str cap to 24
        for snapshot in snapshots[6:]:
            assert max(snapshot["Str"]) <= 24
            assert min(snapshot["Str"]) >= 0

    def test_no_zero_probability_entries(self, sample_character, sample_progression):
        for snapshot in generate_histograms(sample_progression, sample_character):
            for pmf in snapshot.values():
                assert all(p > 0.0 for p in pmf.values())

    def test_two_plain_levels(self, two_coin_character):
        snapshots = generate_histograms([LevelUp(), LevelUp()], two_coin_character)

        assert snapshots[1]["A"] == pytest.approx({5: 0.5, 6: 0.5})
        assert snapshots[2]["A"] == pytest.approx({5: 0.25, 6: 0.5, 7: 0.25})

    def test_promotion_step(self, two_coin_character):
        changes = [LevelUp(), Promotion(changes=[StatBoost(stat="A", amount=3)])]

        snapshots = generate_histograms(changes, two_coin_character)

        assert snapshots[2]["A"] == pytest.approx({8: 0.5, 9: 0.5})
        assert snapshots[2]["B"] == snapshots[1]["B"]

    def test_gba_unit_to_level_twenty(self):
        character = gba.default_character("Colm")
        changes = [gba.level_up()] * 19

        snapshots = generate_histograms(changes, character)

        assert len(snapshots) == 20
        assert validate_snapshots(snapshots)
        assert max(snapshots[-1]["Lck"]) <= 30

    def test_rejected_progression_raises(self, two_coin_character):
        changes = [LevelUp(), LevelUp(blank_avoidance=VariableGuaranteedStats())]

        with pytest.raises(UnsupportedProgressionError) as exc_info:
            generate_histograms(changes, two_coin_character)

        assert not exc_info.value.result.valid
        assert exc_info.value.result.errors[0].step == 1
        assert isinstance(exc_info.value, StatdistError)

    def test_sample_budget_is_ignored(self, two_coin_character, caplog):
        with caplog.at_level(logging.WARNING, logger="statdist.analysis.propagation"):
            with_budget = generate_histograms([LevelUp()], two_coin_character, num_samples=1000)

        assert with_budget == generate_histograms([LevelUp()], two_coin_character)
        assert "1000" in caplog.text


class TestBinomialAnalysis:
    def test_rejection_returns_none(self, two_coin_character):
        changes = [LevelUp(blank_avoidance=VariableGuaranteedStats())]
        assert binomial_analysis(changes, two_coin_character) is None

    def test_matches_generate_histograms(self, sample_character, sample_progression):
        assert binomial_analysis(sample_progression, sample_character) == generate_histograms(
            sample_progression, sample_character
        )


class TestVerification:
    """Tests for the mass conservation check."""

    @pytest.fixture
    def leaky_levelup(self, monkeypatch):
        def leak(state, level_up, max_recursion_depth=25):
            return {
                key: DistributedStat(growth=ds.growth, cap=ds.cap, base=ds.base, pmf={5: 0.5})
                for key, ds in state.items()
            }

        monkeypatch.setattr(propagation, "process_levelup", leak)

    def test_leak_detected(self, two_coin_character, leaky_levelup):
        with pytest.raises(DistributionInvariantError):
            propagate([LevelUp()], two_coin_character, verify=True)

    def test_leak_ignored_when_off(self, two_coin_character, leaky_levelup):
        states = propagate([LevelUp()], two_coin_character, verify=False)
        assert states[1]["A"].pmf == {5: 0.5}

    def test_support_outside_cap_detected(self, monkeypatch):
        def overshoot(state, level_up, max_recursion_depth=25):
            return {
                key: DistributedStat(growth=ds.growth, cap=ds.cap, pmf={ds.cap + 1: 1.0})
                for key, ds in state.items()
            }

        monkeypatch.setattr(propagation, "process_levelup", overshoot)
        character = Character(stats={"HP": Stat(cap=20, growth=50, value=5)})

        with pytest.raises(DistributionInvariantError, match="outside"):
            propagate([LevelUp()], character, verify=True)

    def test_config_enables_verification(self, two_coin_character, leaky_levelup):
        """The autouse fixture sets STATDIST_VERIFY=1."""
        with pytest.raises(DistributionInvariantError):
            generate_histograms([LevelUp()], two_coin_character)
