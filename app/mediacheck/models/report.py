"""Analysis report model and builder.

An AnalysisReport is the only externally observable output of an
analyzer. Presentation (tables, JSON, a host UI) is left to the
consumer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mediacheck.models.findings import Finding


class ReportStatus(str, Enum):
    """Outcome severity of an analyzer run, in ascending order."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        """Numeric severity for ordering (success = 0)."""
        return list(ReportStatus).index(self)


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Structured result of one analyzer run.

    Attributes:
        analyzer_name: Machine name of the analyzer (e.g. "duplicates").
        title: Human-readable analyzer title.
        status: Outcome severity.
        message: One-line English summary.
        item_count: Number of reported items.
        total_bytes_affected: Bytes the reported items account for.
        summary_counts: Additional named counters.
        examples: Capped list of findings, most significant first.
        truncated_count: Findings left out of ``examples``.
        aborted: Whether a store walk stopped on its budget.
        abort_reason: Why the walk stopped, if it did.
        error: Cause message when status is ERROR.
    """

    analyzer_name: str
    title: str
    status: ReportStatus
    message: str
    item_count: int = 0
    total_bytes_affected: int = 0
    summary_counts: dict[str, int] = field(default_factory=lambda: {})
    examples: tuple[Finding, ...] = ()
    truncated_count: int = 0
    aborted: bool = False
    abort_reason: str | None = None
    error: str | None = None

    @property
    def truncated(self) -> bool:
        """Check if findings were left out of the examples."""
        return self.truncated_count > 0

    @property
    def is_error(self) -> bool:
        """Check if the report has error status."""
        return self.status == ReportStatus.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "analyzer": self.analyzer_name,
            "title": self.title,
            "status": self.status.value,
            "message": self.message,
            "item_count": self.item_count,
            "total_bytes_affected": self.total_bytes_affected,
            "summary": dict(self.summary_counts),
            "examples": [example.to_dict() for example in self.examples],
            "truncated": self.truncated,
            "truncated_count": self.truncated_count,
            "aborted": self.aborted,
            "abort_reason": self.abort_reason,
            "error": self.error,
        }


class ReportBuilder:
    """Accumulates an analyzer's findings into an AnalysisReport.

    Examples beyond ``example_limit`` are counted but not stored.

    Example:
        >>> builder = ReportBuilder("orphans", "Orphaned media files", example_limit=15)
        >>> for orphan in orphans:
        ...     builder.add_example(orphan)
        >>> builder.set_totals(item_count=len(orphans), total_bytes=total)
        >>> report = builder.build(ReportStatus.WARNING, "Found 3 orphaned files")
    """

    def __init__(self, analyzer_name: str, title: str, example_limit: int) -> None:
        if example_limit < 0:
            msg = f"Example limit cannot be negative, got {example_limit}"
            raise ValueError(msg)
        self._analyzer_name = analyzer_name
        self._title = title
        self._example_limit = example_limit
        self._examples: list[Finding] = []
        self._truncated_count = 0
        self._item_count = 0
        self._total_bytes = 0
        self._summary: dict[str, int] = {}
        self._abort_reason: str | None = None

    def add_example(self, finding: Finding) -> None:
        """Store a finding, or count it as truncated once the cap is hit."""
        if len(self._examples) < self._example_limit:
            self._examples.append(finding)
        else:
            self._truncated_count += 1

    def set_totals(self, *, item_count: int, total_bytes: int = 0) -> None:
        """Set the reported item count and affected bytes."""
        self._item_count = item_count
        self._total_bytes = total_bytes

    def add_count(self, name: str, value: int) -> None:
        """Record a named summary counter."""
        self._summary[name] = value

    def mark_aborted(self, reason: str) -> None:
        """Label the report as based on a partial scan."""
        self._abort_reason = reason

    def build(self, status: ReportStatus, message: str) -> AnalysisReport:
        """Create the AnalysisReport."""
        return AnalysisReport(
            analyzer_name=self._analyzer_name,
            title=self._title,
            status=status,
            message=message,
            item_count=self._item_count,
            total_bytes_affected=self._total_bytes,
            summary_counts=dict(self._summary),
            examples=tuple(self._examples),
            truncated_count=self._truncated_count,
            aborted=self._abort_reason is not None,
            abort_reason=self._abort_reason,
        )

    @staticmethod
    def success(analyzer_name: str, title: str, message: str) -> AnalysisReport:
        """Create a report for a run that found nothing to flag."""
        return AnalysisReport(
            analyzer_name=analyzer_name,
            title=title,
            status=ReportStatus.SUCCESS,
            message=message,
        )

    @staticmethod
    def failure(
        analyzer_name: str,
        title: str,
        error: BaseException,
    ) -> AnalysisReport:
        """Create a report for a run that could not complete."""
        return AnalysisReport(
            analyzer_name=analyzer_name,
            title=title,
            status=ReportStatus.ERROR,
            message=f"Error during {title.lower()} check: {error}",
            error=str(error),
        )
