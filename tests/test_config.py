"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from mailsearch.config import (
    Config,
    FieldWeights,
    SearchConfig,
    env_overrides,
    load_config,
)
from mailsearch.exceptions import ConfigError


class TestSearchConfig:
    """Test configuration values and validation."""

    def test_defaults(self):
        """Defaults match the documented ranking constants."""
        config = SearchConfig()

        assert config.weights == FieldWeights(subject=2.0, sender=1.5, body=1.0)
        assert config.partial_match_bonus == 0.5
        assert config.phrase_multiplier == 1.5
        assert config.recency_window_days == 30
        assert config.recency_weight == 0.2
        assert config.min_relevance == 0.1
        assert config.max_results == 50
        assert config.similarity_threshold == 0.3
        assert config.max_similar == 10
        assert config.highlight_tag == "mark"

    def test_from_dict(self):
        """Partial mappings override only the given values."""
        config = SearchConfig.from_dict(
            {"max_results": 5, "weights": {"subject": 3}, "history_dir": "~/h"}
        )

        assert config.max_results == 5
        assert config.weights.subject == 3.0
        assert config.weights.body == 1.0
        assert config.history_dir == Path("~/h").expanduser()

    def test_unknown_key(self):
        """Typos are rejected."""
        with pytest.raises(ConfigError, match="max_result"):
            SearchConfig.from_dict({"max_result": 5})

    def test_unknown_weight(self):
        with pytest.raises(ConfigError, match="field weights"):
            SearchConfig.from_dict({"weights": {"footer": 1}})

    @pytest.mark.parametrize(
        "values",
        [
            {"min_relevance": 1.5},
            {"similarity_threshold": -0.1},
            {"recency_window_days": 0},
            {"max_results": 0},
        ],
    )
    def test_out_of_range(self, values):
        with pytest.raises(ConfigError):
            SearchConfig.from_dict(values)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            SearchConfig.from_dict({"max_similar": 0})


class TestConfigFiles:
    """Test YAML loading and merging."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"max_results": 7}))

        assert Config.from_file(path) == {"max_results": 7}

    def test_search_section(self, tmp_path):
        """Settings may live under a search section."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"search": {"highlight_tag": "em"}}))

        assert Config.from_file(path) == {"highlight_tag": "em"}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_results: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config.from_file(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            Config.from_file(path)

    def test_default_paths(self, tmp_path):
        """The XDG location comes first."""
        paths = Config.get_config_paths()

        assert paths[0] == tmp_path / "config" / "mailsearch" / "config.yaml"
        assert Path(".mailsearch.yaml") in paths

    def test_merge_configs(self):
        merged = Config.merge_configs(
            {"max_results": 5, "weights": {"subject": 3}},
            {"weights": {"body": 2}},
        )

        assert merged == {"max_results": 5, "weights": {"subject": 3, "body": 2}}


class TestLoadConfig:
    """Test the full loading chain."""

    def test_defaults_without_files(self):
        assert load_config() == SearchConfig()

    def test_local_file(self, tmp_path):
        """Project-local files are picked up."""
        (tmp_path / "mailsearch.yaml").write_text("max_results: 12\n")

        assert load_config().max_results == 12

    def test_later_files_win(self, tmp_path):
        xdg = tmp_path / "config" / "mailsearch"
        xdg.mkdir(parents=True)
        (xdg / "config.yaml").write_text("max_results: 12\nmax_similar: 3\n")
        (tmp_path / ".mailsearch.yaml").write_text("max_results: 20\n")

        config = load_config()

        assert config.max_results == 20
        assert config.max_similar == 3

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("highlight_tag: em\n")

        assert load_config(path).highlight_tag == "em"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_environment_overrides(self, tmp_path, monkeypatch):
        """MAILSEARCH_* variables override files."""
        (tmp_path / "mailsearch.yaml").write_text("max_results: 12\n")
        monkeypatch.setenv("MAILSEARCH_MAX_RESULTS", "3")
        monkeypatch.setenv("MAILSEARCH_MIN_RELEVANCE", "0.25")
        monkeypatch.setenv("MAILSEARCH_HISTORY_DIR", str(tmp_path / "h"))

        config = load_config()

        assert config.max_results == 3
        assert config.min_relevance == 0.25
        assert config.history_dir == tmp_path / "h"

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("MAILSEARCH_MAX_SIMILAR", "lots")

        with pytest.raises(ConfigError, match="MAILSEARCH_MAX_SIMILAR"):
            env_overrides()
