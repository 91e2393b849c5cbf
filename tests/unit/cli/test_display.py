"""Unit tests for report display helpers."""

from mediacheck.cli.display import create_examples_table, create_summary_table
from mediacheck.models.audit_result import AuditResult
from mediacheck.models.findings import OrphanFile
from mediacheck.models.report import ReportBuilder, ReportStatus


class TestDisplay:
    """Tests for summary and example tables."""

    def test_summary_table_has_row_per_report(self) -> None:
        """The summary table lists every report."""
        result = AuditResult.create(
            [ReportBuilder.success("a", "A", "ok"), ReportBuilder.success("b", "B", "ok")]
        )

        table = create_summary_table(result)

        assert table.row_count == 2

    def test_examples_table_respects_limit(self) -> None:
        """The display limit trims the example rows."""
        builder = ReportBuilder("orphans", "Orphaned media files", example_limit=15)
        for i in range(4):
            builder.add_example(OrphanFile(path=f"{i}.jpg", size_bytes=i))
        report = builder.build(ReportStatus.WARNING, "Found 4 orphaned files.")

        assert create_examples_table(report).row_count == 4
        assert create_examples_table(report, limit=2).row_count == 2
