"""Shared types and utilities for CLI commands."""

from enum import Enum

from mediacheck.analyzers import Analyzer, get_analyzers


class AnalyzerChoice(str, Enum):
    """Analyzers selectable with ``--check``."""

    DUPLICATES = "duplicates"
    LARGE_FILES = "large_files"
    MISSING_FILES = "missing_files"
    ORPHANS = "orphans"
    DISALLOWED_EXTENSIONS = "disallowed_extensions"
    UNUSED_MEDIA = "unused_media"


def get_selected_analyzers(choices: list[AnalyzerChoice] | None = None) -> list[Analyzer]:
    """Get analyzer instances for the selected checks.

    Args:
        choices: Selected checks, or None/empty for all of them.

    Returns:
        List of analyzer instances in registry order.
    """
    return get_analyzers([c.value for c in choices] if choices else None)
