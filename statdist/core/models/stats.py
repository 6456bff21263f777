"""Stat and character models.

A stat is a single numeric attribute of a character (e.g. HP or Strength)
together with its growth rate, its lower bound and its cap. Growth rates are
expressed in units of GUARANTEED_STAT_POINT_GROWTH: a rate of 100 grants one
guaranteed point per level, 150 grants one guaranteed point plus a 50% chance
of a second one.
"""

from pydantic import BaseModel, Field, model_validator


GUARANTEED_STAT_POINT_GROWTH = 100

# Stat identifiers are plain strings in every serializable model
StatKey = str


class Stat(BaseModel):
    """A single stat of a character."""

    base: int = Field(default=0, ge=0, description="Lower bound for clamped increments")
    cap: int = Field(ge=0, description="Maximum value the stat can reach")
    growth: int = Field(default=0, ge=0, description="Growth rate, 100 = one guaranteed point")
    value: int = Field(ge=0, description="Current value")

    @model_validator(mode="after")
    def _check_value_within_bounds(self) -> "Stat":
        if self.value > self.cap:
            raise ValueError(f"value ({self.value}) exceeds cap ({self.cap})")
        if self.value < self.base:
            raise ValueError(f"value ({self.value}) is below base ({self.base})")
        return self

    def increase_value(self, amount: int) -> None:
        """Increase the value by amount, clamped to [base, cap]."""
        self.value = min(max(self.value + amount, self.base), self.cap)

    def split_growth(self) -> tuple[int, float]:
        """Split the growth rate into guaranteed points and a probability."""
        return split_growth(self.growth)


class Character(BaseModel):
    """A named collection of stats.

    The key set of ``stats`` is fixed for the whole progression: stat changes
    never add or remove stats.
    """

    name: str = ""
    level: int = Field(default=1, ge=0)
    stats: dict[StatKey, Stat] = Field(default_factory=dict)

    def stat_keys(self) -> list[StatKey]:
        """Stat keys in their deterministic (sorted) order."""
        return sorted(self.stats)


def split_growth(growth: int) -> tuple[int, float]:
    """Split a growth rate into (guaranteed points, probability of one more).

    Example:
        >>> split_growth(150)
        (1, 0.5)
    """
    guaranteed = growth // GUARANTEED_STAT_POINT_GROWTH
    chance = (growth % GUARANTEED_STAT_POINT_GROWTH) / GUARANTEED_STAT_POINT_GROWTH
    return guaranteed, chance
