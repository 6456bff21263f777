"""Configuration for statdist.

Settings live in a JSON file at $STATDIST_CONFIG, or
~/.config/statdist/config.json when the variable is unset. A missing file
means defaults.

Environment variables (prefix STATDIST_) are read with pydantic-settings and
layered on top of the file whenever the configuration is read. They are
never written back to the file:
    STATDIST_CONFIG: Config file path
    STATDIST_VERIFY: Force distribution verification on or off
        (alias STATDIST_ENGINE__VERIFY_DISTRIBUTIONS)

Sections:
    engine: Closed-form engine settings
    output: CLI output settings
"""

import json
import logging
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError
from pydantic_settings import BaseSettings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "statdist" / "config.json"


class EngineConfig(BaseModel):
    """Closed-form engine settings."""

    verify_distributions: bool = Field(
        default=False,
        description="Check mass conservation after every step (debug)",
    )
    error_bound: float = Field(default=1e-5, gt=0)
    max_recursion_depth: int = Field(
        default=25,
        ge=1,
        description="Roll cutoff for exact-count guaranteed stats",
    )


class OutputConfig(BaseModel):
    """CLI output settings."""

    precision: int = Field(default=4, ge=0)
    benchmark: int | None = None


class StatdistConfig(BaseModel):
    """Top-level configuration, as stored in the config file."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: Path) -> "StatdistConfig":
        if not path.exists():
            return cls()
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)


class EnvironmentSettings(BaseSettings):
    """Overrides read from STATDIST_* environment variables."""

    config_file: Path | None = Field(
        default=None, validation_alias="STATDIST_CONFIG", description="Config file path"
    )
    verify: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("STATDIST_VERIFY", "STATDIST_ENGINE__VERIFY_DISTRIBUTIONS"),
        description="Force distribution verification on or off",
    )

    model_config = {
        "env_prefix": "STATDIST_",
        "case_sensitive": False,
        "env_ignore_empty": True,
        "extra": "ignore",
    }

    def apply(self, config: StatdistConfig) -> StatdistConfig:
        """A copy of config with the environment overrides applied."""
        config = config.model_copy(deep=True)
        if self.verify is not None:
            config.engine.verify_distributions = self.verify
        return config


# File contents, and file contents with environment overrides
_stored_config: StatdistConfig | None = None
_config: StatdistConfig | None = None


def get_config_path() -> Path:
    return EnvironmentSettings().config_file or DEFAULT_CONFIG_PATH


def get_stored_config() -> StatdistConfig:
    """Return the configuration as saved in the file, without overrides."""
    global _stored_config
    if _stored_config is None:
        path = get_config_path()
        try:
            _stored_config = StatdistConfig.load(path)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}, using defaults: {e}")
            _stored_config = StatdistConfig()
    return _stored_config


def get_config() -> StatdistConfig:
    """Return the active configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = EnvironmentSettings().apply(get_stored_config())
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _stored_config, _config
    _stored_config = None
    _config = None


def save_config(config: StatdistConfig) -> Path:
    """Persist config; the next get_config() re-applies the environment."""
    global _stored_config, _config
    path = get_config_path()
    config.save(path)
    _stored_config = config
    _config = None
    return path


_KIND_ERRORS = {int: "Invalid integer", float: "Invalid number", bool: "Invalid boolean"}


def _parse_value(raw: str, kind: type) -> object:
    if kind is str:
        return raw
    try:
        return TypeAdapter(kind).validate_python(raw.strip())
    except ValidationError:
        raise ValueError(f"{_KIND_ERRORS[kind]}: {raw}") from None


def _field_kind(section: BaseModel, field: str) -> type:
    annotation = type(section).model_fields[field].annotation
    # int | None and friends count as their non-None member
    for kind in (bool, int, float):
        if annotation is kind or kind in getattr(annotation, "__args__", ()):
            return kind
    return str


def set_config_value(key: str, raw: str) -> StatdistConfig:
    """Update one dotted key (e.g. "engine.max_recursion_depth") and save.

    Only the stored file contents are changed; environment overrides stay
    out of the file.

    Returns:
        The saved configuration

    Raises:
        KeyError: If the key doesn't name a setting
        ValueError: If the value can't be parsed for that setting
    """
    config = get_stored_config().model_copy(deep=True)

    parts = key.split(".")
    if len(parts) != 2:
        raise KeyError(key)
    section_name, field = parts
    section = getattr(config, section_name, None)
    if not isinstance(section, BaseModel) or field not in type(section).model_fields:
        raise KeyError(key)

    kind = _field_kind(section, field)
    if kind is not bool and raw.strip().lower() in ("none", "null", ""):
        value = None
    else:
        value = _parse_value(raw, kind)

    updated = type(section).model_validate({**section.model_dump(), field: value})
    setattr(config, section_name, updated)
    save_config(config)
    return config
