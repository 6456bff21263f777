"""Progression task files.

A task bundles a starting character with the stat changes to analyze:

    character:
      name: Eirika
      stats:
        HP: {base: 16, cap: 60, growth: 70, value: 16}
    stat_changes:
      - type: level_up
        blank_avoidance: {type: retries_for_no_blank, max_retries: 2}
      - type: promotion
        changes:
          - {type: class_promotion, name: Great Lord, stat_bonus: {HP: 4}}

Tasks load from YAML (.yaml/.yml) or JSON (.json).
"""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from .distribution import Snapshot
from .progression import LevelUp, Promotion, StatChange
from .stats import Character


YAML_SUFFIXES = (".yaml", ".yml")


class ProgressionTask(BaseModel):
    """A character and the ordered stat changes applied to it."""

    character: Character
    stat_changes: list[StatChange] = Field(default_factory=list)

    def has_custom_transforms(self) -> bool:
        """True if any stat change carries a callable that can't be serialized."""
        for change in self.stat_changes:
            if isinstance(change, LevelUp) and change.has_custom_override:
                return True
            if isinstance(change, Promotion) and change.transform is not None:
                return True
        return False

    def _dump(self) -> dict:
        if self.has_custom_transforms():
            raise ValueError(
                "Progression contains custom callable transforms which cannot be serialized"
            )
        return self.model_dump(mode="json", exclude_none=True)

    def to_yaml(self, path: Path | str) -> None:
        """Save the task as YAML."""
        path = Path(path)
        with open(path, "w") as f:
            yaml.safe_dump(self._dump(), f, sort_keys=False, allow_unicode=True)

    def to_json(self, path: Path | str) -> None:
        """Save the task as JSON."""
        path = Path(path)
        with open(path, "w") as f:
            json.dump(self._dump(), f, indent=2)

    @classmethod
    def from_file(cls, path: Path | str) -> "ProgressionTask":
        """Load a task from a YAML or JSON file, chosen by suffix.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the suffix is unsupported or the file is not a mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Task file not found: {path}")

        with open(path) as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported task file type: {path.suffix}")

        if not isinstance(data, dict):
            raise ValueError(f"Task file must contain a mapping: {path}")

        return cls.model_validate(data)


def save_histograms(snapshots: list[Snapshot], path: Path | str) -> None:
    """Write a snapshot list as JSON (one object per step)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [
        {key: {str(value): prob for value, prob in sorted(pmf.items())} for key, pmf in snapshot.items()}
        for snapshot in snapshots
    ]
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def load_histograms(path: Path | str) -> list[Snapshot]:
    """Read a snapshot list written by save_histograms."""
    with open(Path(path)) as f:
        data = json.load(f)
    return [
        {key: {int(value): prob for value, prob in pmf.items()} for key, pmf in snapshot.items()}
        for snapshot in data
    ]
