"""Unit tests for disallowed file extension detection."""

from collections.abc import Callable

from mediacheck.analyzers.disallowed_extensions import (
    DisallowedExtensionAnalyzer,
    find_disallowed,
)
from mediacheck.core.config import AuditConfig
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import DisallowedFile
from mediacheck.models.report import ReportStatus
from mediacheck.storage.models import PhysicalFile


class TestFindDisallowed:
    """Tests for find_disallowed function."""

    def test_matches_case_insensitively(self) -> None:
        """Extensions match regardless of case or a leading dot."""
        files = [
            PhysicalFile("a/Shell.ASPX", "a/shell.aspx", 1),
            PhysicalFile("a/photo.jpg", "a/photo.jpg", 1),
            PhysicalFile("a/README", "a/readme", 1),
        ]

        found = list(find_disallowed(files, [".aspx"]))

        assert found == [DisallowedFile(path="a/Shell.ASPX", extension="aspx")]


class TestDisallowedExtensionAnalyzer:
    """Tests for DisallowedExtensionAnalyzer class."""

    def test_reports_violations(self, make_context: Callable[..., AuditContext]) -> None:
        """Files with default disallowed extensions produce a warning."""
        context = make_context([], files={"1/page.aspx": 1, "1/web.config": 1, "1/a.jpg": 1})

        report = DisallowedExtensionAnalyzer().run(context)

        assert report.status == ReportStatus.WARNING
        assert report.item_count == 2
        assert report.summary_counts["ext_aspx"] == 1
        assert report.summary_counts["ext_config"] == 1
        assert not report.aborted

    def test_empty_list_skips_scan(self, make_context: Callable[..., AuditContext]) -> None:
        """With no configured extensions the store is not walked."""
        config = AuditConfig.model_validate({"disallowed_extensions": {"extensions": []}})
        context = make_context([], files={"1/page.aspx": 1}, config=config)

        report = DisallowedExtensionAnalyzer().run(context)

        assert report.status == ReportStatus.SUCCESS
        assert report.summary_counts == {}

    def test_file_limit_aborts_with_partial_results(
        self, make_context: Callable[..., AuditContext]
    ) -> None:
        """max_files=2 over three files aborts after scanning two."""
        config = AuditConfig.model_validate({"disallowed_extensions": {"max_files": 2}})
        context = make_context([], files={"a.aspx": 1, "b.aspx": 1, "c.aspx": 1}, config=config)

        report = DisallowedExtensionAnalyzer().run(context)

        assert report.aborted
        assert report.summary_counts["files_scanned"] == 2
        assert report.item_count == 2
        assert report.abort_reason == "scan limit of 2 files reached"

    def test_abort_without_violations_is_info(
        self, make_context: Callable[..., AuditContext]
    ) -> None:
        """An aborted scan with no violations is informational."""
        config = AuditConfig.model_validate({"disallowed_extensions": {"max_files": 1}})
        context = make_context([], files={"a.jpg": 1, "b.jpg": 1}, config=config)

        report = DisallowedExtensionAnalyzer().run(context)

        assert report.status == ReportStatus.INFO

    def test_examples_capped_at_fifty(self, make_context: Callable[..., AuditContext]) -> None:
        """At most fifty violations are kept as examples."""
        context = make_context([], files={f"{i:03}.aspx": 1 for i in range(55)})

        report = DisallowedExtensionAnalyzer().run(context)

        assert report.item_count == 55
        assert len(report.examples) == 50
        assert report.truncated_count == 5
