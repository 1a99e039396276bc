from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from testarossa.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TESTAROSSA_CONFIG"


class Settings(BaseModel):
    """Knobs for failure reporting and call-site attribution."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_value_length: int = 1024
    ellipsis: str = "..."
    indent: str = "    "
    test_prefixes: list[str] = ["test", "benchmark"]
    runner_modules: list[str] = ["_pytest", "pytest", "pluggy", "unittest"]
    output: Literal["stdout", "stderr"] = "stdout"
    debug_log: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "DEBUG"
    log_stderr: bool = False

    @field_validator("max_value_length")
    @classmethod
    def max_value_length_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_value_length must be positive")
        return v

    @field_validator("test_prefixes")
    @classmethod
    def test_prefixes_must_not_be_empty(cls, v: list[str]) -> list[str]:
        if not v or any(not p for p in v):
            raise ValueError("test_prefixes must be a non-empty list of non-empty prefixes")
        return v


def _expand(value: Any) -> Any:
    if isinstance(value, str):
        return expandvars(value)
    if isinstance(value, list):
        return [_expand(v) for v in value]
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    return value


def load_config(path: Path) -> Settings:
    """Load settings from a YAML file, expanding ``${VAR}`` references."""
    config_dir = path.parent.resolve()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(raw).__name__}")

    try:
        settings = Settings(**_expand(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}:\n{e}") from e

    # Resolve a relative debug log path against the config file location
    if settings.debug_log and not Path(settings.debug_log).is_absolute():
        resolved = str((config_dir / settings.debug_log).resolve())
        settings = settings.model_copy(update={"debug_log": resolved})

    return settings


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the active settings, loading ``$TESTAROSSA_CONFIG`` on first use."""
    global _settings
    if _settings is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        _settings = load_config(Path(path)) if path else Settings()
    return _settings


def configure(settings: Settings | None) -> None:
    """Replace the active settings; None reverts to lazy loading."""
    global _settings
    _settings = settings


def current_settings() -> Settings:
    """Like get_settings, but never raises.

    A broken ``$TESTAROSSA_CONFIG`` is logged once and replaced by the
    defaults, so assertions keep reporting outside the pytest plugin, which
    turns the same error into a usage error at startup.
    """
    global _settings
    try:
        return get_settings()
    except ConfigError as e:
        logger.error(f"{e}; falling back to default settings")
        _settings = Settings()
        return _settings
