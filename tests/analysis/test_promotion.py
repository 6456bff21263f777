"""Tests for promotion handling."""

import pytest

from statdist.analysis.promotion import process_promotion, promote_stat
from statdist.core.errors import PromotionContractError
from statdist.core.models import (
    ClassPromotion,
    DistributedStat,
    GrowthBoost,
    Promotion,
    StatBoost,
)


def _stat(pmf, growth=40, cap=20, base=2):
    return DistributedStat(growth=growth, cap=cap, base=base, pmf=pmf)


class TestPromoteStat:
    """Tests for value-dependent and flat promotions."""

    def test_value_dependent_bonus(self):
        def bonus(key, stat):
            stat = stat.model_copy()
            stat.increase_value(5 if stat.value >= 11 else 3)
            return stat

        promoted = promote_stat("Str", _stat({10: 0.4, 12: 0.6}), Promotion(transform=bonus))

        assert promoted.pmf == pytest.approx({13: 0.4, 17: 0.6})
        assert promoted.cap == 20
        assert promoted.base == 2

    def test_colliding_values_merge(self):
        def reset(key, stat):
            return stat.model_copy(update={"value": 15})

        promoted = promote_stat("Str", _stat({10: 0.4, 12: 0.6}), Promotion(transform=reset))

        assert promoted.pmf == pytest.approx({15: 1.0})

    def test_class_promotion_raises_cap_and_adds_bonus(self):
        promotion = Promotion(
            changes=[ClassPromotion(stat_bonus={"Str": 2}, new_caps={"Str": 25}, growth_change=-10)]
        )

        promoted = promote_stat("Str", _stat({19: 0.5, 20: 0.5}), promotion)

        assert promoted.pmf == pytest.approx({21: 0.5, 22: 0.5})
        assert promoted.cap == 25
        assert promoted.growth == 30

    def test_fixed_growth_stat_keeps_growth(self):
        promotion = Promotion(
            changes=[ClassPromotion(growth_change=-10, fixed_growth_stats=["HP"])]
        )

        assert promote_stat("HP", _stat({5: 1.0}), promotion).growth == 40
        assert promote_stat("Str", _stat({5: 1.0}), promotion).growth == 30

    def test_changes_run_in_order(self):
        promotion = Promotion(
            changes=[StatBoost(stat="Str", amount=2), GrowthBoost(amount=5)]
        )

        promoted = promote_stat("Str", _stat({19: 1.0}), promotion)

        assert promoted.pmf == {20: 1.0}
        assert promoted.growth == 45

    def test_value_dependent_cap_rejected(self):
        def uneven_cap(key, stat):
            return stat.model_copy(update={"cap": 20 + stat.value % 2})

        with pytest.raises(PromotionContractError, match="value-dependent"):
            promote_stat("Str", _stat({10: 0.5, 11: 0.5}), Promotion(transform=uneven_cap))

    def test_value_above_cap_rejected(self):
        def overflow(key, stat):
            return stat.model_copy(update={"value": 25})

        with pytest.raises(PromotionContractError, match="outside"):
            promote_stat("Str", _stat({10: 1.0}), Promotion(transform=overflow))

    def test_contract_error_is_value_error(self):
        assert issubclass(PromotionContractError, ValueError)


class TestProcessPromotion:
    def test_every_stat_is_transformed(self):
        state = {"HP": _stat({20: 1.0}, cap=60), "Str": _stat({5: 1.0})}
        promotion = Promotion(changes=[ClassPromotion(stat_bonus={"HP": 4, "Str": 2})])

        promoted = process_promotion(state, promotion)

        assert promoted["HP"].pmf == {24: 1.0}
        assert promoted["Str"].pmf == {7: 1.0}

    def test_stats_without_changes_pass_through(self):
        state = {"Def": _stat({5: 0.25, 6: 0.75})}

        promoted = process_promotion(state, Promotion(changes=[StatBoost(stat="Str")]))

        assert promoted["Def"] == state["Def"]
