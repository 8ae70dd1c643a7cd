"""Tunable settings for tree generation and the quiz loop.

Configuration files may be JSON (``.json``) or YAML (any other suffix).  A
file only needs to mention the values it overrides::

    generator:
      imbalance_probability: 0.5
      value_max: 50
    max_generation_attempts: 100
    reveal_balance_factors: false
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

_PROBABILITY_FIELDS = (
    "deep_stop_probability",
    "shallow_stop_probability",
    "root_child_probability",
    "child_probability",
    "imbalance_probability",
    "left_heavy_probability",
    "extension_probability",
)


class ConfigError(ValueError):
    """Raised when a configuration file or value is invalid."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Probabilities steering :class:`~avl_quiz.generator.TreeGenerator`."""

    deep_stop_probability: float = 0.9
    shallow_stop_probability: float = 0.6
    deep_depth: int = 3
    shallow_depth: int = 1
    max_depth: int = 6
    root_child_probability: float = 0.9
    child_probability: float = 0.7
    imbalance_probability: float = 0.3
    left_heavy_probability: float = 0.5
    extension_probability: float = 0.7
    value_min: int = 1
    value_max: int = 99

    def __post_init__(self) -> None:
        for name in _PROBABILITY_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number")
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be between 0 and 1 (got {value})")
        for name in ("deep_depth", "shallow_depth", "max_depth", "value_min", "value_max"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer")
        for name in ("deep_depth", "shallow_depth", "max_depth"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.value_min > self.value_max:
            raise ConfigError("value_min must not exceed value_max")


@dataclass(frozen=True)
class QuizConfig:
    """Top-level quiz settings."""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    max_generation_attempts: Optional[int] = None
    reveal_balance_factors: bool = False

    def __post_init__(self) -> None:
        attempts = self.max_generation_attempts
        if attempts is not None and (
            isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1
        ):
            raise ConfigError("max_generation_attempts must be a positive integer or null")
        if not isinstance(self.reveal_balance_factors, bool):
            raise ConfigError("reveal_balance_factors must be a boolean")


def _known_keys(cls: type) -> set[str]:
    return {item.name for item in fields(cls)}


def _reject_unknown(payload: Mapping[Any, Any], cls: type, section: str) -> None:
    unknown = sorted(map(str, set(payload) - _known_keys(cls)))
    if unknown:
        raise ConfigError(f"Unknown {section} keys: {', '.join(unknown)}")


def config_from_mapping(payload: Mapping[str, Any]) -> QuizConfig:
    """Build a :class:`QuizConfig` from a parsed mapping."""

    if not isinstance(payload, Mapping):
        raise ConfigError("Configuration root must be a mapping")
    _reject_unknown(payload, QuizConfig, "configuration")

    generator_payload = payload.get("generator") or {}
    if not isinstance(generator_payload, Mapping):
        raise ConfigError("'generator' must be a mapping")
    _reject_unknown(generator_payload, GeneratorConfig, "generator")

    generator = replace(GeneratorConfig(), **dict(generator_payload))
    options = {key: value for key, value in payload.items() if key != "generator"}
    return QuizConfig(generator=generator, **options)


def load_config(path: str | Path | None) -> QuizConfig:
    """Load quiz settings from *path*, returning defaults when it is ``None``."""

    if path is None:
        return QuizConfig()

    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    config = config_from_mapping(payload or {})
    logger.debug("Loaded quiz configuration from %s: %s", config_path, config)
    return config


__all__ = [
    "ConfigError",
    "GeneratorConfig",
    "QuizConfig",
    "config_from_mapping",
    "load_config",
]
