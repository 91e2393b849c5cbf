"""Unit tests for report models.

Tests for AnalysisReport, ReportBuilder and AuditResult.
"""

import json

import pytest
from mediacheck.models.audit_result import AuditResult
from mediacheck.models.findings import OrphanFile
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus


class TestReportStatus:
    """Tests for ReportStatus enum."""

    def test_severity_order(self) -> None:
        """Statuses are ordered from success to error."""
        severities = [s.severity for s in ReportStatus]
        assert severities == sorted(severities)
        assert ReportStatus.ERROR.severity > ReportStatus.WARNING.severity


class TestReportBuilder:
    """Tests for ReportBuilder class."""

    def test_caps_examples(self) -> None:
        """Examples beyond the limit are counted as truncated."""
        builder = ReportBuilder("orphans", "Orphaned media files", example_limit=2)
        for i in range(5):
            builder.add_example(OrphanFile(path=f"{i}.jpg", size_bytes=i))
        builder.set_totals(item_count=5, total_bytes=10)

        report = builder.build(ReportStatus.WARNING, "Found 5 orphaned files.")

        assert len(report.examples) == 2
        assert report.truncated
        assert report.truncated_count == 3
        assert report.item_count == 5
        assert report.total_bytes_affected == 10

    def test_mark_aborted(self) -> None:
        """Aborted reports carry their reason."""
        builder = ReportBuilder("orphans", "Orphaned media files", example_limit=1)
        builder.mark_aborted("time budget of 5s exceeded")

        report = builder.build(ReportStatus.INFO, "partial")

        assert report.aborted
        assert report.abort_reason == "time budget of 5s exceeded"

    def test_negative_limit_rejected(self) -> None:
        """The example limit cannot be negative."""
        with pytest.raises(ValueError, match="negative"):
            ReportBuilder("x", "X", example_limit=-1)

    def test_failure(self) -> None:
        """failure builds an error report from an exception."""
        report = ReportBuilder.failure("duplicates", "Duplicate media items", OSError("down"))

        assert report.is_error
        assert report.error == "down"
        assert report.message == "Error during duplicate media items check: down"


class TestAnalysisReport:
    """Tests for AnalysisReport serialization."""

    def test_to_dict(self) -> None:
        """to_dict exposes every report field under stable keys."""
        report = AnalysisReport(
            analyzer_name="orphans",
            title="Orphaned media files",
            status=ReportStatus.WARNING,
            message="Found 1 orphaned file.",
            item_count=1,
            total_bytes_affected=25,
            summary_counts={"files_scanned": 3},
            examples=(OrphanFile(path="9/stray.png", size_bytes=25),),
        )

        data = report.to_dict()

        assert data["analyzer"] == "orphans"
        assert data["status"] == "warning"
        assert data["summary"] == {"files_scanned": 3}
        assert data["examples"] == [{"path": "9/stray.png", "size_bytes": 25}]
        assert data["truncated"] is False
        assert data["aborted"] is False
        assert data["error"] is None
        json.dumps(data)


class TestAuditResult:
    """Tests for AuditResult class."""

    def test_status_is_most_severe(self) -> None:
        """The overall status is the most severe report status."""
        reports = [
            ReportBuilder.success("a", "A", "ok"),
            ReportBuilder("b", "B", 1).build(ReportStatus.WARNING, "warn"),
        ]

        result = AuditResult.create(reports)

        assert result.status == ReportStatus.WARNING
        assert not result.has_errors
        assert result.metadata.analyzers == ("a", "b")

    def test_empty_result_is_success(self) -> None:
        """An audit without reports is a success."""
        assert AuditResult.create([]).status == ReportStatus.SUCCESS

    def test_to_dict(self) -> None:
        """to_dict includes metadata, status and reports."""
        result = AuditResult.create([ReportBuilder.success("a", "A", "ok")])

        data = result.to_dict()

        assert data["status"] == "success"
        assert data["metadata"]["analyzers"] == ["a"]
        assert "mediacheck_version" in data["metadata"]
        assert len(data["reports"]) == 1
