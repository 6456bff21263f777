"""Stat change models: level-ups, promotions and blank avoidance policies.

A progression is an ordered list of stat changes applied to a character:
- LevelUp: every stat rolls for growth; a blank avoidance policy decides what
  happens when no stat grew
- Promotion: a deterministic per-stat transform (new caps, flat bonuses,
  growth changes)

Level-up growth overrides and promotion transforms are tagged data so that a
progression can round-trip through YAML/JSON. Both also accept a plain
callable for cases the tagged variants don't cover; such callables must be
pure and are never serialized.
"""

from typing import Annotated, Callable, Literal, Union

from pydantic import BaseModel, Field, model_validator

from .stats import Stat, StatKey


# Signature of a custom level-up growth override: (stat key, growth) -> growth
GrowthOverride = Callable[[StatKey, int], int]

# Signature of a custom promotion transform: (stat key, stat) -> stat
StatTransform = Callable[[StatKey, Stat], Stat]


# =============================================================================
# Blank avoidance
# =============================================================================


class NoAvoidance(BaseModel):
    """Every stat rolls independently and blank levels stand."""

    type: Literal["no_avoidance"] = "no_avoidance"


class RetriesForNoBlank(BaseModel):
    """Reroll the whole level up to max_retries times when it was blank.

    This implements GBA semantics (two rerolls). A reroll only happens if no
    stat hit its growth roll; hitting a roll on a capped stat still counts as
    a hit and prevents the reroll.
    """

    type: Literal["retries_for_no_blank"] = "retries_for_no_blank"
    max_retries: int = Field(default=2, ge=0)


class AwardFixedStatOnBlank(BaseModel):
    """Award one point to a fixed stat when no stat grew.

    This implements Shadows of Valentia semantics, where the stat is HP. A hit
    on a capped stat prevents the award, and nothing is awarded if the
    fallback stat itself is capped.
    """

    type: Literal["award_fixed_stat_on_blank"] = "award_fixed_stat_on_blank"
    fallback_stat: StatKey


class CountRange(BaseModel):
    """Inclusive range of stat counts; maximum=None means unbounded."""

    minimum: int = Field(default=0, ge=0)
    maximum: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "CountRange":
        if self.maximum is not None and self.maximum < self.minimum:
            raise ValueError(
                f"maximum ({self.maximum}) must be >= minimum ({self.minimum})"
            )
        return self

    @classmethod
    def exactly(cls, count: int) -> "CountRange":
        return cls(minimum=count, maximum=count)

    @property
    def is_unbounded_from_zero(self) -> bool:
        return self.minimum == 0 and self.maximum is None

    @property
    def is_exact(self) -> bool:
        return self.maximum is not None and self.minimum == self.maximum

    def __str__(self) -> str:
        if self.maximum is None:
            return f"{self.minimum}.."
        return f"{self.minimum}..={self.maximum}"


class GuaranteedStats(BaseModel):
    """Guarantee a number of stat points per level.

    Radiant Dawn bonus experience uses exactly three stats, Three Houses uses
    at least two. iteration_order is the order in which stats are rolled; an
    empty order means all stats in sorted order.
    """

    type: Literal["guaranteed_stats"] = "guaranteed_stats"
    count: CountRange = Field(default_factory=CountRange)
    iteration_order: list[StatKey] = Field(default_factory=list)


class VariableGuaranteedStats(BaseModel):
    """Growth-dependent number of guaranteed stats (drill ground levels).

    There is no closed form for this policy; the feasibility gate rejects it.
    """

    type: Literal["variable_guaranteed_stats"] = "variable_guaranteed_stats"


BlankAvoidance = Annotated[
    Union[
        NoAvoidance,
        RetriesForNoBlank,
        AwardFixedStatOnBlank,
        GuaranteedStats,
        VariableGuaranteedStats,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Growth overrides
# =============================================================================


class GrowthBonus(BaseModel):
    """Temporary per-stat growth bonus for a single level-up."""

    type: Literal["growth_bonus"] = "growth_bonus"
    bonuses: dict[StatKey, int] = Field(default_factory=dict)

    def __call__(self, key: StatKey, growth: int) -> int:
        return max(growth + self.bonuses.get(key, 0), 0)


# =============================================================================
# Promotion changes
# =============================================================================


class ClassPromotion(BaseModel):
    """Promotion into a new class: flat bonuses, new caps, growth change."""

    type: Literal["class_promotion"] = "class_promotion"
    name: str = ""
    stat_bonus: dict[StatKey, int] = Field(default_factory=dict)
    new_caps: dict[StatKey, int] = Field(default_factory=dict)
    growth_change: int = 0
    fixed_growth_stats: list[StatKey] = Field(
        default_factory=list,
        description="Stats whose growth is not affected by growth_change",
    )

    def apply(self, key: StatKey, stat: Stat) -> Stat:
        stat = stat.model_copy()
        if self.growth_change and key not in self.fixed_growth_stats:
            stat.growth = max(stat.growth + self.growth_change, 0)
        if key in self.new_caps:
            stat.cap = self.new_caps[key]
        if key in self.new_caps or key in self.stat_bonus:
            stat.increase_value(self.stat_bonus.get(key, 0))
        return stat


class GrowthBoost(BaseModel):
    """Permanent growth increase for every stat."""

    type: Literal["growth_boost"] = "growth_boost"
    amount: int = 5

    def apply(self, key: StatKey, stat: Stat) -> Stat:
        return stat.model_copy(update={"growth": max(stat.growth + self.amount, 0)})


class StatBoost(BaseModel):
    """Flat increase of a single stat (stat booster items)."""

    type: Literal["stat_boost"] = "stat_boost"
    stat: StatKey
    amount: int = 2

    def apply(self, key: StatKey, stat: Stat) -> Stat:
        stat = stat.model_copy()
        if key == self.stat:
            stat.increase_value(self.amount)
        return stat


PromotionChange = Annotated[
    Union[ClassPromotion, GrowthBoost, StatBoost],
    Field(discriminator="type"),
]


# =============================================================================
# Stat changes
# =============================================================================


class LevelUp(BaseModel):
    """A single level-up."""

    type: Literal["level_up"] = "level_up"
    growth_override: GrowthBonus | GrowthOverride | None = None
    blank_avoidance: BlankAvoidance = Field(default_factory=NoAvoidance)

    def effective_growth(self, key: StatKey, growth: int) -> int:
        """Growth rate used for this level, after the temporary override."""
        if self.growth_override is None:
            return growth
        return self.growth_override(key, growth)

    @property
    def has_custom_override(self) -> bool:
        return self.growth_override is not None and not isinstance(
            self.growth_override, GrowthBonus
        )


class Promotion(BaseModel):
    """A deterministic transform applied to every stat.

    The tagged changes run first, in order, then the optional custom
    transform. The transform may depend on the current value, but must map
    every value of a stat to the same growth and cap.
    """

    type: Literal["promotion"] = "promotion"
    name: str = ""
    changes: list[PromotionChange] = Field(default_factory=list)
    transform: StatTransform | None = Field(default=None, exclude=True)

    def apply(self, key: StatKey, stat: Stat) -> Stat:
        result = stat.model_copy()
        for change in self.changes:
            result = change.apply(key, result)
        if self.transform is not None:
            result = self.transform(key, result)
        return result


StatChange = Annotated[Union[LevelUp, Promotion], Field(discriminator="type")]
