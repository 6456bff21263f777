"""Global fixtures for statdist tests."""

import pytest

from statdist.config import reset_config
from statdist.core.models import (
    Character,
    ClassPromotion,
    LevelUp,
    ProgressionTask,
    Promotion,
    RetriesForNoBlank,
    Stat,
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config at a temp file and turn verification on."""
    monkeypatch.setenv("STATDIST_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.setenv("STATDIST_VERIFY", "1")
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_character():
    """A small GBA-style unit."""
    return Character(
        name="Eirika",
        level=1,
        stats={
            "HP": Stat(base=16, cap=60, growth=70, value=16),
            "Str": Stat(base=4, cap=20, growth=40, value=4),
            "Spd": Stat(base=9, cap=20, growth=60, value=9),
            "Lck": Stat(base=5, cap=30, growth=60, value=5),
        },
    )


@pytest.fixture
def two_coin_character():
    """Two stats that each grow with probability 0.5 and no guaranteed points."""
    return Character(
        name="Coins",
        stats={
            "A": Stat(base=5, cap=20, growth=50, value=5),
            "B": Stat(base=5, cap=20, growth=50, value=5),
        },
    )


@pytest.fixture
def sample_progression():
    """Five GBA level-ups, a promotion, five more level-ups."""
    level = LevelUp(blank_avoidance=RetriesForNoBlank(max_retries=2))
    promotion = Promotion(
        name="Great Lord",
        changes=[
            ClassPromotion(
                name="Great Lord",
                stat_bonus={"HP": 4, "Str": 2, "Spd": 1},
                new_caps={"HP": 60, "Str": 24, "Spd": 26},
            )
        ],
    )
    return [level] * 5 + [promotion] + [level] * 5


@pytest.fixture
def sample_task(sample_character, sample_progression):
    return ProgressionTask(character=sample_character, stat_changes=sample_progression)


@pytest.fixture
def sample_task_file(tmp_path, sample_task):
    """The sample task saved as YAML."""
    path = tmp_path / "task.yaml"
    sample_task.to_yaml(path)
    return path
