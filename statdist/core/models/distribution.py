"""Distribution models for the closed-form engine."""

from pydantic import BaseModel, Field

from .stats import Stat, StatKey


# External shape of one step's result: stat key -> value -> probability
Snapshot = dict[StatKey, dict[int, float]]


class DistributedStat(BaseModel):
    """Probability mass function of one stat at one step.

    Carries the growth, cap and base the stat has at that step so the next
    step can be computed without the starting character. Values with exactly
    zero probability are never stored.
    """

    growth: int = Field(ge=0)
    cap: int = Field(ge=0)
    base: int = Field(default=0, ge=0)
    pmf: dict[int, float] = Field(default_factory=dict)

    @classmethod
    def point_mass(cls, stat: Stat) -> "DistributedStat":
        """All mass on the stat's current value."""
        return cls(growth=stat.growth, cap=stat.cap, base=stat.base, pmf={stat.value: 1.0})

    def stat_at(self, value: int) -> Stat:
        """The concrete Stat for one point of the support."""
        return Stat(base=self.base, cap=self.cap, growth=self.growth, value=value)

    def total_probability(self) -> float:
        return sum(self.pmf.values())
