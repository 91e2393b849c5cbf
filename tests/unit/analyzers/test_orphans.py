"""Unit tests for orphaned physical file detection."""

from collections.abc import Callable
from typing import Any

from mediacheck.analyzers.orphans import OrphanAnalyzer, catalog_paths, find_orphans
from mediacheck.catalog.models import MediaRecord
from mediacheck.core.config import AuditConfig
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import OrphanFile
from mediacheck.models.report import ReportStatus
from mediacheck.storage.models import PhysicalFile


class TestOrphanHelpers:
    """Tests for catalog_paths and find_orphans functions."""

    def test_catalog_paths_normalized(self, make_record: Callable[..., MediaRecord]) -> None:
        """Catalog paths are normalized and empty paths dropped."""
        paths = catalog_paths(
            [make_record(1, "/media/1/Photo.JPG"), make_record(2, "")], ("media",)
        )

        assert paths == {"1/photo.jpg"}

    def test_find_orphans_largest_first(self) -> None:
        """Unclaimed files are returned largest first."""
        files = [
            PhysicalFile("1/a.jpg", "1/a.jpg", 10),
            PhysicalFile("2/b.jpg", "2/b.jpg", 30),
            PhysicalFile("3/c.jpg", "3/c.jpg", 20),
        ]

        orphans = find_orphans(files, {"1/a.jpg"})

        assert [o.path for o in orphans] == ["2/b.jpg", "3/c.jpg"]


class TestOrphanAnalyzer:
    """Tests for OrphanAnalyzer class."""

    def test_orphan_reported_once(
        self,
        make_context: Callable[..., AuditContext],
        media_node: Callable[..., dict[str, Any]],
    ) -> None:
        """A file no record points at is reported exactly once."""
        context = make_context(
            [media_node(1, "/media/1/Photo.JPG")],
            files={"1/photo.jpg": 10, "9/stray.png": 25},
        )

        report = OrphanAnalyzer().run(context)

        assert report.status == ReportStatus.WARNING
        assert report.item_count == 1
        assert report.total_bytes_affected == 25
        assert report.examples == (OrphanFile(path="9/stray.png", size_bytes=25),)

    def test_artifacts_never_orphans(
        self,
        make_context: Callable[..., AuditContext],
    ) -> None:
        """OS sidecar and hidden files are never reported."""
        context = make_context([], files={"Thumbs.db": 1, "1/desktop.ini": 1, ".keep": 1})

        report = OrphanAnalyzer().run(context)

        assert report.status == ReportStatus.SUCCESS
        assert report.summary_counts["files_scanned"] == 3

    def test_ignored_record_still_claims_file(
        self,
        make_context: Callable[..., AuditContext],
        media_node: Callable[..., dict[str, Any]],
    ) -> None:
        """Ignore rules do not turn a catalogued file into an orphan."""
        config = AuditConfig.model_validate({"ignore": {"ids": ["1"]}})
        context = make_context(
            [media_node(1, "/media/1/a.jpg")], files={"1/a.jpg": 10}, config=config
        )

        report = OrphanAnalyzer().run(context)

        assert report.status == ReportStatus.SUCCESS

    def test_partial_scan_labeled(
        self,
        make_context: Callable[..., AuditContext],
    ) -> None:
        """An aborted walk still reports its orphans, labeled as partial."""
        config = AuditConfig.model_validate({"orphans": {"max_files": 2}})
        context = make_context([], files={"a.jpg": 1, "b.jpg": 2, "c.jpg": 3}, config=config)

        report = OrphanAnalyzer().run(context)

        assert report.status == ReportStatus.WARNING
        assert report.aborted
        assert report.abort_reason == "scan limit of 2 files reached"
        assert report.item_count == 2
        assert "scan stopped early" in report.message

    def test_partial_scan_without_orphans_is_info(
        self,
        make_context: Callable[..., AuditContext],
        media_node: Callable[..., dict[str, Any]],
    ) -> None:
        """An aborted walk that found nothing is informational, not a success."""
        config = AuditConfig.model_validate({"orphans": {"max_files": 1}})
        context = make_context(
            [media_node(1, "/media/a.jpg"), media_node(2, "/media/b.jpg")],
            files={"a.jpg": 1, "b.jpg": 1},
            config=config,
        )

        report = OrphanAnalyzer().run(context)

        assert report.status == ReportStatus.INFO
        assert report.aborted
