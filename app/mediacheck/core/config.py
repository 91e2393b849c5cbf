"""Audit configuration and settings.

This module provides the configuration model and I/O functions for an
audit: where the media store and catalog export live, what to ignore,
the large-file threshold, the disallowed extensions and the scan
budgets.

Configuration is stored in ~/.config/mediacheck/config.toml, e.g.::

    [storage]
    root = "/srv/site/wwwroot/media"

    [catalog]
    path = "/srv/exports/media-catalog.json"

    [ignore]
    ids = ["a1b2c3d4-e5f6-7890-abcd-ef1234567890"]
    paths = ["/media/legacy/"]
    file_names = ["placeholder.png"]

    [ignore.rules]
    missing_files = ["ids", "file_names"]

    [large_files]
    threshold_mb = 5.0

    [disallowed_extensions]
    extensions = ["exe", "php"]
    max_files = 50000
    max_duration_seconds = 5
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mediacheck.core.ignore import ALL_RULES, IgnorePolicy, IgnoreRule
from mediacheck.core.paths import get_config_path
from mediacheck.storage.models import ScanBudget
from mediacheck.storage.paths import DEFAULT_ROOT_SEGMENTS

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_MB = 5.0
DEFAULT_SCAN_MAX_FILES = 50_000
DEFAULT_SCAN_MAX_DURATION_SECONDS = 5.0

# Extensions the host application refuses for upload by default
DEFAULT_DISALLOWED_EXTENSIONS: tuple[str, ...] = (
    "ashx",
    "aspx",
    "ascx",
    "config",
    "cshtml",
    "vbhtml",
    "asmx",
    "air",
    "axd",
    "xamlx",
)

# Ignore rules consulted per analyzer when the config does not override them
DEFAULT_IGNORE_RULES: dict[str, frozenset[IgnoreRule]] = {
    "duplicates": ALL_RULES,
    "large_files": ALL_RULES,
    "missing_files": frozenset({IgnoreRule.IDS, IgnoreRule.FILE_NAMES}),
    "unused_media": ALL_RULES,
}


class StorageSettings(BaseModel):
    """Location of the physical media store.

    Attributes:
        root: Directory holding the media files.
        root_segments: Leading path segments catalog paths carry for the
            store root (e.g. "/media/1042/a.jpg" for root "media").
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[Path | None, Field(description="Media store directory")] = None
    root_segments: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_ROOT_SEGMENTS),
            description="Storage-root segments stripped from paths",
        ),
    ]


class CatalogSettings(BaseModel):
    """Location of the catalog export and paging settings."""

    model_config = ConfigDict(extra="forbid")

    path: Annotated[Path | None, Field(description="Catalog export (JSON)")] = None
    page_size: Annotated[
        int,
        Field(ge=1, le=10_000, description="Entries per catalog page (1-10000)"),
    ] = 500


class IgnoreSettings(BaseModel):
    """Media items excluded from the record-based analyzers.

    Attributes:
        ids: Media keys or ids to ignore.
        paths: Path fragments to ignore (substring, case-insensitive).
        file_names: File names to ignore (exact, case-insensitive).
        rules: Per-analyzer override of which of the rules apply.
    """

    model_config = ConfigDict(extra="forbid")

    ids: Annotated[list[str], Field(default_factory=list)]
    paths: Annotated[list[str], Field(default_factory=list)]
    file_names: Annotated[list[str], Field(default_factory=list)]
    rules: Annotated[dict[str, list[IgnoreRule]], Field(default_factory=dict)]

    def rules_for(self, analyzer_name: str) -> frozenset[IgnoreRule]:
        """Return the ignore rules an analyzer consults."""
        if analyzer_name in self.rules:
            return frozenset(self.rules[analyzer_name])
        return DEFAULT_IGNORE_RULES.get(analyzer_name, ALL_RULES)


class LargeFileSettings(BaseModel):
    """Large-file threshold."""

    model_config = ConfigDict(extra="forbid")

    threshold_mb: Annotated[
        float,
        Field(gt=0, description="Files above this size in MB are reported"),
    ] = DEFAULT_THRESHOLD_MB

    @property
    def threshold_bytes(self) -> int:
        """Threshold converted to bytes."""
        return int(self.threshold_mb * 1024 * 1024)


class DisallowedExtensionSettings(BaseModel):
    """Disallowed extensions and the scan budget for finding them.

    Non-positive budget values fall back to the defaults.
    """

    model_config = ConfigDict(extra="forbid")

    extensions: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_DISALLOWED_EXTENSIONS)),
    ]
    max_files: int = DEFAULT_SCAN_MAX_FILES
    max_duration_seconds: float = DEFAULT_SCAN_MAX_DURATION_SECONDS

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Strip leading dots, lowercase and drop empty or repeated entries."""
        normalized: list[str] = []
        for ext in v:
            cleaned = ext.strip().lstrip(".").lower()
            if cleaned and cleaned not in normalized:
                normalized.append(cleaned)
        return normalized

    @field_validator("max_files", mode="after")
    @classmethod
    def default_max_files(cls, v: int) -> int:
        """Use the default file limit for non-positive values."""
        return v if v > 0 else DEFAULT_SCAN_MAX_FILES

    @field_validator("max_duration_seconds", mode="after")
    @classmethod
    def default_max_duration(cls, v: float) -> float:
        """Use the default time budget for non-positive values."""
        return v if v > 0 else DEFAULT_SCAN_MAX_DURATION_SECONDS

    @property
    def budget(self) -> ScanBudget:
        """Scan budget for the disallowed-extension walk."""
        return ScanBudget(max_files=self.max_files, max_duration=self.max_duration_seconds)


class OrphanSettings(BaseModel):
    """Optional scan budget for the orphan walk (unbounded by default)."""

    model_config = ConfigDict(extra="forbid")

    max_files: Annotated[int | None, Field(ge=1)] = None
    max_duration_seconds: Annotated[float | None, Field(gt=0)] = None

    @property
    def budget(self) -> ScanBudget:
        """Scan budget for the orphan walk."""
        return ScanBudget(max_files=self.max_files, max_duration=self.max_duration_seconds)


class AuditConfig(BaseModel):
    """Complete audit configuration."""

    model_config = ConfigDict(extra="forbid")

    storage: Annotated[StorageSettings, Field(default_factory=StorageSettings)]
    catalog: Annotated[CatalogSettings, Field(default_factory=CatalogSettings)]
    ignore: Annotated[IgnoreSettings, Field(default_factory=IgnoreSettings)]
    large_files: Annotated[LargeFileSettings, Field(default_factory=LargeFileSettings)]
    disallowed_extensions: Annotated[
        DisallowedExtensionSettings,
        Field(default_factory=DisallowedExtensionSettings),
    ]
    orphans: Annotated[OrphanSettings, Field(default_factory=OrphanSettings)]

    @property
    def root_segments(self) -> tuple[str, ...]:
        """Storage-root segments as a tuple."""
        return tuple(self.storage.root_segments)

    def ignore_policy(self) -> IgnorePolicy:
        """Build the IgnorePolicy described by the [ignore] section."""
        return IgnorePolicy.create(
            ids=self.ignore.ids,
            path_fragments=self.ignore.paths,
            file_names=self.ignore.file_names,
            root_segments=self.root_segments,
        )


class ConfigError(Exception):
    """Base exception for audit configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AuditConfig:
    """Load audit configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated AuditConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        config = AuditConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e

    unknown = set(config.ignore.rules) - set(DEFAULT_IGNORE_RULES)
    if unknown:
        logger.warning("Ignore rules for unknown analyzers in %s: %s", config_path, unknown)

    return config


def load_config_or_default(path: Path | None = None) -> AuditConfig:
    """Load the configuration, falling back to defaults.

    A missing file is only tolerated for the default location; an
    explicitly requested file must exist.

    Raises:
        ConfigError: If the file exists but is invalid, or an explicit
            path does not exist.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        if path is not None:
            raise
        logger.debug("No config file at %s, using defaults", get_config_path())
        return AuditConfig()


def save_config(config: AuditConfig, path: Path | None = None) -> Path:
    """Save audit configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AuditConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: AuditConfig) -> dict[str, Any]:
    """Convert AuditConfig to a dictionary for TOML serialization.

    TOML has no null, so unset values are left out.
    """
    return config.model_dump(mode="json", exclude_none=True)
