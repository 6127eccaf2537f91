"""Tests for configuration loading and validation."""

import os

import pytest

from codeshape.config import (
    AnalysisConfig,
    DependencyConfig,
    FileSizeConfig,
    ResponsibilityConfig,
    load_config,
)
from codeshape.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep user and project config files out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CODESHAPE_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_default_values(self):
        config = load_config()
        assert config.size.threshold == 400
        assert config.dependencies.max_circular_depth == 10
        assert config.responsibility.max_responsibilities == 2
        assert "**/node_modules/**" in config.dependencies.exclude_patterns
        assert config.verbosity == "normal"

    def test_config_is_immutable(self):
        config = AnalysisConfig()
        with pytest.raises(AttributeError):
            config.max_scan_depth = 3


class TestValidation:
    def test_cycle_depth_minimum(self):
        with pytest.raises(InvalidConfigError):
            DependencyConfig(max_circular_depth=1)

    def test_threshold_minimum(self):
        with pytest.raises(InvalidConfigError):
            FileSizeConfig(threshold=0)

    def test_verbosity_values(self):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(verbosity="loud")

    def test_strict_mode_lowers_the_limit(self):
        assert ResponsibilityConfig(strict_mode=True).effective_max == 1
        assert ResponsibilityConfig(max_responsibilities=1, strict_mode=True).effective_max == 1


class TestSources:
    def test_project_file(self, tmp_path):
        (tmp_path / "codeshape.toml").write_text(
            "max_scan_depth = 4\n\n[size]\nthreshold = 250\n\n"
            '[dependencies]\npath_aliases = { "@/" = "src/" }\n'
        )
        config = load_config()
        assert config.max_scan_depth == 4
        assert config.size.threshold == 250
        assert config.size.exclude_comments
        assert config.dependencies.path_aliases == {"@/": "src/"}

    def test_explicit_file_overrides_project_file(self, tmp_path):
        (tmp_path / "codeshape.toml").write_text("[size]\nthreshold = 250\nexclude_imports = true\n")
        explicit = tmp_path / "ci.toml"
        explicit.write_text("[size]\nthreshold = 300\n")

        config = load_config(explicit)
        assert config.size.threshold == 300
        assert config.size.exclude_imports

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[size\n")
        with pytest.raises(ConfigurationError):
            load_config(bad)

    def test_unknown_section_key(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[size]\nlimit = 3\n")
        with pytest.raises(ConfigurationError):
            load_config(bad)

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("CODESHAPE_SIZE_THRESHOLD", "120")
        monkeypatch.setenv("CODESHAPE_DEPENDENCIES_INCLUDE_EXTERNAL_DEPS", "yes")
        monkeypatch.setenv("CODESHAPE_MAX_SCAN_DEPTH", "3")

        config = load_config()
        assert config.size.threshold == 120
        assert config.dependencies.include_external_deps
        assert config.max_scan_depth == 3

    def test_bad_environment_value(self, monkeypatch):
        monkeypatch.setenv("CODESHAPE_SIZE_THRESHOLD", "lots")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("CODESHAPE_SIZE_THRESHOLD", "120")
        config = load_config(size={"threshold": 90}, verbose=True)
        assert config.size.threshold == 90
        assert config.verbosity == "verbose"

    def test_section_override_keeps_other_fields(self, tmp_path):
        (tmp_path / "codeshape.toml").write_text("[responsibility]\nstrict_mode = true\n")
        config = load_config(responsibility={"max_responsibilities": 4})
        assert config.responsibility.strict_mode
        assert config.responsibility.max_responsibilities == 4

    def test_with_helpers_copy(self):
        base = AnalysisConfig()
        changed = base.with_dependencies(include_external_deps=True)
        assert changed.dependencies.include_external_deps
        assert not base.dependencies.include_external_deps
        assert base.with_responsibility(strict_mode=True).responsibility.strict_mode
