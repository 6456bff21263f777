"""statdist: exact stat distributions for level-up progressions.

Computes the probability distribution of every stat of a character after
each level-up and promotion of a progression, without sampling.

    from statdist import Character, LevelUp, Stat, generate_histograms

    character = Character(stats={"Str": Stat(value=5, cap=20, growth=150)})
    snapshots = generate_histograms([LevelUp()], character)
    snapshots[1]["Str"]  # {6: 0.5, 7: 0.5}
"""

__version__ = "0.1.0"

from .analysis import generate_histograms
from .core.errors import (
    StatdistError,
    UnsupportedProgressionError,
    PromotionContractError,
    DistributionInvariantError,
)
from .core.models import (
    Character,
    Stat,
    LevelUp,
    Promotion,
    NoAvoidance,
    RetriesForNoBlank,
    AwardFixedStatOnBlank,
    GuaranteedStats,
    VariableGuaranteedStats,
    CountRange,
    ProgressionTask,
)

__all__ = [
    "__version__",
    "generate_histograms",
    # Errors
    "StatdistError",
    "UnsupportedProgressionError",
    "PromotionContractError",
    "DistributionInvariantError",
    # Models
    "Character",
    "Stat",
    "LevelUp",
    "Promotion",
    "NoAvoidance",
    "RetriesForNoBlank",
    "AwardFixedStatOnBlank",
    "GuaranteedStats",
    "VariableGuaranteedStats",
    "CountRange",
    "ProgressionTask",
]
