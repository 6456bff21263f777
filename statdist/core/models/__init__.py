"""Data models for statdist.

This package contains all Pydantic models used across the system:
- stats.py: Stats, characters and the growth constant
- progression.py: Level-ups, promotions and blank avoidance policies
- distribution.py: Per-stat probability mass functions and snapshots
- validation.py: Validation issues and results
- task.py: Progression task files and histogram output
"""

from .stats import (
    GUARANTEED_STAT_POINT_GROWTH,
    StatKey,
    Stat,
    Character,
    split_growth,
)
from .progression import (
    # Blank avoidance
    NoAvoidance,
    RetriesForNoBlank,
    AwardFixedStatOnBlank,
    CountRange,
    GuaranteedStats,
    VariableGuaranteedStats,
    BlankAvoidance,
    # Growth overrides
    GrowthOverride,
    GrowthBonus,
    # Promotion changes
    StatTransform,
    ClassPromotion,
    GrowthBoost,
    StatBoost,
    PromotionChange,
    # Stat changes
    LevelUp,
    Promotion,
    StatChange,
)
from .distribution import DistributedStat, Snapshot
from .validation import Severity, ValidationIssue, ValidationResult
from .task import ProgressionTask, save_histograms, load_histograms

__all__ = [
    # Stats
    "GUARANTEED_STAT_POINT_GROWTH",
    "StatKey",
    "Stat",
    "Character",
    "split_growth",
    # Blank avoidance
    "NoAvoidance",
    "RetriesForNoBlank",
    "AwardFixedStatOnBlank",
    "CountRange",
    "GuaranteedStats",
    "VariableGuaranteedStats",
    "BlankAvoidance",
    # Growth overrides
    "GrowthOverride",
    "GrowthBonus",
    # Promotion changes
    "StatTransform",
    "ClassPromotion",
    "GrowthBoost",
    "StatBoost",
    "PromotionChange",
    # Stat changes
    "LevelUp",
    "Promotion",
    "StatChange",
    # Distributions
    "DistributedStat",
    "Snapshot",
    # Validation
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    # Tasks
    "ProgressionTask",
    "save_histograms",
    "load_histograms",
]
