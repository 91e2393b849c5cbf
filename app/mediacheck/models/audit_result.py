"""Audit result model for JSON export.

This module defines the data structure for exporting the reports of
one audit run to JSON with proper metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from mediacheck.models.report import AnalysisReport, ReportStatus


@dataclass(frozen=True, slots=True)
class AuditMetadata:
    """Metadata for an audit result.

    Attributes:
        timestamp: ISO format timestamp when the audit was performed.
        hostname: Name of the machine that ran the audit.
        mediacheck_version: Version of mediacheck that performed the audit.
        analyzers: Names of the analyzers that ran (immutable).
    """

    timestamp: str
    hostname: str
    mediacheck_version: str
    analyzers: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "mediacheck_version": self.mediacheck_version,
            "analyzers": list(self.analyzers),
        }


@dataclass(frozen=True, slots=True)
class AuditResult:
    """Complete audit result for export.

    Attributes:
        metadata: Audit metadata including timestamp and hostname.
        reports: One report per analyzer, in run order.
    """

    metadata: AuditMetadata
    reports: tuple[AnalysisReport, ...]

    @property
    def status(self) -> ReportStatus:
        """Most severe status across all reports."""
        if not self.reports:
            return ReportStatus.SUCCESS
        return max((r.status for r in self.reports), key=lambda s: s.severity)

    @property
    def has_errors(self) -> bool:
        """Check if any report has error status."""
        return any(r.is_error for r in self.reports)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata.to_dict(),
            "status": self.status.value,
            "reports": [report.to_dict() for report in self.reports],
        }

    @classmethod
    def create(cls, reports: list[AnalysisReport]) -> AuditResult:
        """Create an AuditResult with auto-generated metadata.

        Args:
            reports: Reports of the analyzers that ran.

        Returns:
            AuditResult with populated metadata.
        """
        import socket

        from mediacheck import __version__

        metadata = AuditMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            mediacheck_version=__version__,
            analyzers=tuple(r.analyzer_name for r in reports),
        )

        return cls(metadata=metadata, reports=tuple(reports))
