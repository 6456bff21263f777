"""Tests for the GBA presets."""

import pytest

from statdist.analysis import generate_histograms
from statdist.core.models import GrowthBoost, RetriesForNoBlank, StatBoost
from statdist.presets import gba


class TestDefaults:
    def test_default_caps(self):
        assert gba.default_cap("HP") == 60
        assert gba.default_cap("Lck") == 30
        assert gba.default_cap("Def") == 20

    def test_default_character(self):
        character = gba.default_character("Seth")

        assert character.name == "Seth"
        assert list(character.stats) == gba.GBA_STATS
        assert character.stats["HP"].value == 15
        assert character.stats["Lck"].base == 7
        assert all(stat.growth == 40 for stat in character.stats.values())


class TestStatChanges:
    """Tests for preset stat changes."""

    def test_level_up_rerolls_twice(self):
        assert gba.level_up().blank_avoidance == RetriesForNoBlank(max_retries=2)

    def test_growth_booster(self):
        booster = gba.growth_booster()
        assert booster.name == "5% Growth-Booster"
        assert booster.changes == [GrowthBoost(amount=5)]

    @pytest.mark.parametrize("key,amount", [("HP", 7), ("Def", 2)])
    def test_stat_booster(self, key, amount):
        booster = gba.stat_booster(key)
        assert booster.name == f"+{amount} {key} Booster"
        assert booster.changes == [StatBoost(stat=key, amount=amount)]

    def test_promotion(self):
        promotion = gba.promotion("Paladin", {"HP": 2, "Def": 2}, {"Def": 25})
        assert promotion.name == "Paladin Promotion"
        assert promotion.changes[0].new_caps == {"Def": 25}


class TestPresetProgression:
    def test_boosters_and_promotion(self):
        character = gba.default_character()
        changes = (
            [gba.level_up()] * 9
            + [gba.stat_booster("Def"), gba.growth_booster()]
            + [gba.promotion("General", {"Def": 3}, {"Def": 29})]
            + [gba.level_up()] * 5
        )

        snapshots = generate_histograms(changes, character)

        assert len(snapshots) == len(changes) + 1
        # 9 levels from 5 can't reach the old cap, so the booster shifts everything
        before, after = snapshots[9]["Def"], snapshots[10]["Def"]
        assert after == pytest.approx({value + 2: p for value, p in before.items()})
        assert max(snapshots[-1]["Def"]) <= 29


class TestStatOrder:
    """Tests for the in-game stat order."""

    def test_guaranteed_level_up_rolls_in_game_order(self):
        level = gba.guaranteed_level_up(3)

        assert level.blank_avoidance.count.is_exact
        assert level.blank_avoidance.iteration_order == gba.GBA_STATS

    def test_earlier_stats_are_favored(self):
        """With equal growths, HP rolls first and Res last."""
        character = gba.default_character()

        last = generate_histograms([gba.guaranteed_level_up(1)], character)[-1]

        hp_award = last["HP"][character.stats["HP"].value + 1]
        atk_award = last["Atk"][character.stats["Atk"].value + 1]
        res_award = last["Res"][character.stats["Res"].value + 1]
        assert hp_award > atk_award > res_award
        assert sum(
            last[key][character.stats[key].value + 1] for key in gba.GBA_STATS
        ) == pytest.approx(1.0, abs=1e-4)
