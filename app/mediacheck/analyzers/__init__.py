"""Media analyzers and the analyzer registry."""

from mediacheck.analyzers.base import Analyzer
from mediacheck.analyzers.disallowed_extensions import DisallowedExtensionAnalyzer
from mediacheck.analyzers.duplicates import DuplicateAnalyzer
from mediacheck.analyzers.large_files import LargeFileAnalyzer
from mediacheck.analyzers.missing_files import MissingFileAnalyzer
from mediacheck.analyzers.orphans import OrphanAnalyzer
from mediacheck.analyzers.unused import UnusedMediaAnalyzer

ANALYZER_CLASSES: tuple[type[Analyzer], ...] = (
    DuplicateAnalyzer,
    LargeFileAnalyzer,
    MissingFileAnalyzer,
    OrphanAnalyzer,
    DisallowedExtensionAnalyzer,
    UnusedMediaAnalyzer,
)

ANALYZER_NAMES: tuple[str, ...] = tuple(cls.name for cls in ANALYZER_CLASSES)


def get_analyzers(names: list[str] | None = None) -> list[Analyzer]:
    """Instantiate analyzers by name, in registry order.

    Args:
        names: Analyzer names to include, or None for all.

    Returns:
        Analyzer instances.

    Raises:
        ValueError: If a name is not a known analyzer.
    """
    if not names:
        return [cls() for cls in ANALYZER_CLASSES]

    unknown = sorted(set(names) - set(ANALYZER_NAMES))
    if unknown:
        msg = f"Unknown analyzer(s): {', '.join(unknown)}"
        raise ValueError(msg)
    return [cls() for cls in ANALYZER_CLASSES if cls.name in names]


__all__ = [
    "ANALYZER_CLASSES",
    "ANALYZER_NAMES",
    "Analyzer",
    "DisallowedExtensionAnalyzer",
    "DuplicateAnalyzer",
    "LargeFileAnalyzer",
    "MissingFileAnalyzer",
    "OrphanAnalyzer",
    "UnusedMediaAnalyzer",
    "get_analyzers",
]
