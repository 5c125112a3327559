"""Configuration management for the search engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "MAILSEARCH_"


@dataclass
class FieldWeights:
    """Per-field token weights used when building the index."""

    subject: float = 2.0
    sender: float = 1.5
    body: float = 1.0


@dataclass
class SearchConfig:
    """Tunable constants for indexing, ranking and snippet generation."""

    weights: FieldWeights = field(default_factory=FieldWeights)

    # Ranking
    partial_match_bonus: float = 0.5
    phrase_multiplier: float = 1.5
    recency_window_days: float = 30.0
    recency_weight: float = 0.2
    min_relevance: float = 0.1
    max_results: int = 50

    # Similarity
    similarity_threshold: float = 0.3
    max_similar: int = 10

    # Snippets
    highlight_tag: str = "mark"
    body_snippet_length: int = 200
    sender_snippet_length: int = 100
    summary_length: int = 150

    history_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchConfig:
        """Create a configuration from a (possibly partial) mapping.

        Unknown keys are rejected so that typos in config files surface.
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        weights = data.pop("weights", None) or {}
        if not isinstance(weights, dict):
            raise ConfigError("'weights' must be a mapping")
        try:
            field_weights = FieldWeights(**{k: float(v) for k, v in weights.items()})
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid field weights: {e}")

        if data.get("history_dir") is not None:
            data["history_dir"] = Path(data["history_dir"]).expanduser()

        config = cls(weights=field_weights, **data)
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: If a value is out of range
        """
        if not 0.0 <= self.min_relevance <= 1.0:
            raise ConfigError("min_relevance must be within [0, 1]")
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ConfigError("similarity_threshold must be within [0, 1]")
        if self.recency_window_days <= 0:
            raise ConfigError("recency_window_days must be positive")
        for name in (
            "max_results",
            "max_similar",
            "body_snippet_length",
            "sender_snippet_length",
            "summary_length",
        ):
            if int(getattr(self, name)) < 1:
                raise ConfigError(f"{name} must be at least 1")


class Config:
    """Loading of configuration files."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}", str(path))
        except OSError as e:
            raise ConfigError(f"Error reading config file: {e}", str(path))

        if not isinstance(data, dict):
            raise ConfigError("Top level of config file must be a mapping", str(path))

        # Allow the settings to live under a "search" section
        return data.get("search", data)

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "mailsearch" / "config.yaml")

        paths.append(Path(".mailsearch.yaml"))
        paths.append(Path("mailsearch.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def env_overrides() -> dict[str, Any]:
    """Collect MAILSEARCH_* environment overrides."""
    overrides: dict[str, Any] = {}
    casts = {
        "MAX_RESULTS": ("max_results", int),
        "MIN_RELEVANCE": ("min_relevance", float),
        "SIMILARITY_THRESHOLD": ("similarity_threshold", float),
        "MAX_SIMILAR": ("max_similar", int),
        "HIGHLIGHT_TAG": ("highlight_tag", str),
        "HISTORY_DIR": ("history_dir", str),
    }

    for suffix, (key, cast) in casts.items():
        raw = os.environ.get(ENV_PREFIX + suffix)
        if raw is None:
            continue
        try:
            overrides[key] = cast(raw)
        except ValueError:
            raise ConfigError(f"Invalid value for {ENV_PREFIX}{suffix}: {raw!r}")

    return overrides


def load_config(path: Path | None = None) -> SearchConfig:
    """Load configuration from files and environment variables.

    Args:
        path: Explicit config file; replaces the default search paths

    Returns:
        Validated search configuration
    """
    data: dict[str, Any] = {}

    paths = [path] if path else Config.get_config_paths()
    for config_path in paths:
        if config_path.exists():
            logger.debug(f"Loading configuration from {config_path}")
            data = Config.merge_configs(data, Config.from_file(config_path))
        elif path:
            raise ConfigError("Config file not found", str(config_path))

    data = Config.merge_configs(data, env_overrides())
    return SearchConfig.from_dict(data)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
