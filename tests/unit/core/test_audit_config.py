"""Unit tests for AuditConfig and related functions.

Tests for the audit configuration module that provides Pydantic models
and TOML I/O functions.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from mediacheck.core.config import (
    DEFAULT_DISALLOWED_EXTENSIONS,
    DEFAULT_SCAN_MAX_DURATION_SECONDS,
    DEFAULT_SCAN_MAX_FILES,
    AuditConfig,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    DisallowedExtensionSettings,
    LargeFileSettings,
    load_config,
    load_config_or_default,
    save_config,
)
from mediacheck.core.ignore import ALL_RULES, IgnoreRule
from pydantic import ValidationError


class TestAuditConfig:
    """Tests for AuditConfig Pydantic model."""

    def test_default_values(self) -> None:
        """AuditConfig has correct default values."""
        config = AuditConfig()

        assert config.storage.root is None
        assert config.root_segments == ("media",)
        assert config.catalog.page_size == 500
        assert config.large_files.threshold_mb == 5.0
        assert config.large_files.threshold_bytes == 5 * 1024 * 1024
        assert tuple(config.disallowed_extensions.extensions) == DEFAULT_DISALLOWED_EXTENSIONS
        assert config.orphans.budget.max_files is None

    def test_extra_fields_forbidden(self) -> None:
        """Unknown sections are rejected."""
        with pytest.raises(ValidationError):
            AuditConfig.model_validate({"unknown": {}})

    def test_threshold_must_be_positive(self) -> None:
        """The large-file threshold must be positive."""
        with pytest.raises(ValidationError):
            LargeFileSettings(threshold_mb=0)

    def test_extensions_normalized(self) -> None:
        """Extensions lose dots and case, and duplicates are dropped."""
        settings = DisallowedExtensionSettings(extensions=[".EXE", "exe", " php ", ""])

        assert settings.extensions == ["exe", "php"]

    def test_non_positive_budget_uses_defaults(self) -> None:
        """Zero or negative budget values fall back to the defaults."""
        settings = DisallowedExtensionSettings(max_files=0, max_duration_seconds=-1)

        assert settings.budget.max_files == DEFAULT_SCAN_MAX_FILES
        assert settings.budget.max_duration == DEFAULT_SCAN_MAX_DURATION_SECONDS

    def test_default_ignore_rules(self) -> None:
        """Missing-file detection ignores path rules by default."""
        config = AuditConfig()

        assert config.ignore.rules_for("duplicates") == ALL_RULES
        assert IgnoreRule.PATHS not in config.ignore.rules_for("missing_files")

    def test_ignore_rules_override(self) -> None:
        """Per-analyzer rules can be overridden."""
        config = AuditConfig.model_validate({"ignore": {"rules": {"duplicates": ["ids"]}}})

        assert config.ignore.rules_for("duplicates") == frozenset({IgnoreRule.IDS})

    def test_ignore_policy_uses_root_segments(self) -> None:
        """The ignore policy strips the configured root segments."""
        config = AuditConfig.model_validate(
            {"storage": {"root_segments": ["assets"]}, "ignore": {"paths": ["/assets/old/"]}}
        )

        assert config.ignore_policy().is_path_ignored("old/a.jpg")


class TestLoadConfig:
    """Tests for load_config and load_config_or_default."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """A valid TOML file is loaded and validated."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[storage]\nroot = "/srv/media"\n\n'
            "[large_files]\nthreshold_mb = 2.5\n\n"
            '[disallowed_extensions]\nextensions = ["exe"]\nmax_files = 10\n'
        )

        config = load_config(path)

        assert config.storage.root == Path("/srv/media")
        assert config.large_files.threshold_mb == 2.5
        assert config.disallowed_extensions.extensions == ["exe"]
        assert config.disallowed_extensions.max_files == 10

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("[storage\nroot=")

        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("[catalog]\npage_size = 0\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_when_default_path_missing(self, tmp_path: Path) -> None:
        """Defaults are used when the default config file does not exist."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config = load_config_or_default()

        assert config == AuditConfig()

    def test_explicit_missing_path_raises(self, tmp_path: Path) -> None:
        """An explicitly requested config file must exist."""
        with pytest.raises(ConfigNotFoundError):
            load_config_or_default(tmp_path / "absent.toml")


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        config = AuditConfig.model_validate(
            {
                "storage": {"root": str(tmp_path / "media")},
                "ignore": {"ids": ["abc"], "rules": {"missing_files": ["ids"]}},
                "orphans": {"max_files": 100},
            }
        )
        path = tmp_path / "nested" / "config.toml"

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Atomic writes leave no temporary files behind."""
        save_config(AuditConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
