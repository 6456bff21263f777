"""Presets for the GBA Fire Emblem games.

Level-ups reroll blank levels twice. Stat boosters give +2 (+7 for HP), the
growth booster adds 5 to every growth, and class promotions add flat bonuses
and raise caps.
"""

from ..core.models import (
    Character,
    ClassPromotion,
    CountRange,
    GrowthBoost,
    GuaranteedStats,
    LevelUp,
    Promotion,
    RetriesForNoBlank,
    Stat,
    StatBoost,
)


# In-game stat order; also the roll order for guaranteed stats
GBA_STATS = ["HP", "Atk", "Skl", "Spd", "Lck", "Def", "Res"]

HP = "HP"
LUCK = "Lck"

GBA_RETRIES = 2
DEFAULT_GROWTH = 40
HP_BOOSTER_AMOUNT = 7
STAT_BOOSTER_AMOUNT = 2
GROWTH_BOOSTER_AMOUNT = 5


def default_cap(key: str) -> int:
    if key == HP:
        return 60
    if key == LUCK:
        return 30
    return 20


def default_stat(key: str) -> Stat:
    """Starting stat for a fresh unit: a quarter of the cap, 40% growth."""
    cap = default_cap(key)
    return Stat(base=cap // 4, cap=cap, growth=DEFAULT_GROWTH, value=cap // 4)


def default_character(name: str = "") -> Character:
    return Character(name=name, stats={key: default_stat(key) for key in GBA_STATS})


def level_up() -> LevelUp:
    return LevelUp(blank_avoidance=RetriesForNoBlank(max_retries=GBA_RETRIES))


def guaranteed_level_up(count: int) -> LevelUp:
    """Level-up that awards exactly count stats, rolled in in-game stat order."""
    return LevelUp(
        blank_avoidance=GuaranteedStats(
            count=CountRange.exactly(count), iteration_order=list(GBA_STATS)
        )
    )


def growth_booster() -> Promotion:
    return Promotion(
        name=f"{GROWTH_BOOSTER_AMOUNT}% Growth-Booster",
        changes=[GrowthBoost(amount=GROWTH_BOOSTER_AMOUNT)],
    )


def stat_booster(key: str) -> Promotion:
    amount = HP_BOOSTER_AMOUNT if key == HP else STAT_BOOSTER_AMOUNT
    return Promotion(
        name=f"+{amount} {key} Booster",
        changes=[StatBoost(stat=key, amount=amount)],
    )


def promotion(
    name: str,
    stat_bonus: dict[str, int],
    new_caps: dict[str, int] | None = None,
) -> Promotion:
    """Class promotion with flat bonuses and optional new caps."""
    return Promotion(
        name=f"{name} Promotion" if name else "Promotion",
        changes=[ClassPromotion(name=name, stat_bonus=stat_bonus, new_caps=new_caps or {})],
    )
