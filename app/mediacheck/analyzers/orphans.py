"""Orphaned physical file detection.

A physical file is orphaned when no catalog record points at its
normalized path. Ignore rules are not consulted: an ignored record
still claims its file.
"""

import logging
from collections.abc import Iterable

from mediacheck.analyzers.base import Analyzer
from mediacheck.catalog.models import MediaRecord
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import OrphanFile
from mediacheck.models.report import AnalysisReport, ReportStatus
from mediacheck.storage.models import PhysicalFile
from mediacheck.storage.paths import normalize_path
from mediacheck.utils.sizes import plural, to_megabytes

logger = logging.getLogger(__name__)


def catalog_paths(records: Iterable[MediaRecord], root_segments: tuple[str, ...]) -> set[str]:
    """Normalized file paths claimed by catalog records."""
    return {normalize_path(r.file_path, root_segments) for r in records if r.file_path}


def find_orphans(files: Iterable[PhysicalFile], claimed: set[str]) -> list[OrphanFile]:
    """Return files whose normalized path is unclaimed, largest first."""
    orphans = [
        OrphanFile(path=f.path, size_bytes=f.size_bytes)
        for f in files
        if f.normalized_path not in claimed
    ]
    orphans.sort(key=lambda o: o.size_bytes, reverse=True)
    return orphans


class OrphanAnalyzer(Analyzer):
    """Finds files in the media store that no catalog record references."""

    name = "orphans"
    title = "Orphaned media files"
    description = "Checks for files in the media store without a matching media item."
    example_limit = 15

    def analyze(self, context: AuditContext) -> AnalysisReport:
        claimed = catalog_paths(context.read_records(), context.root_segments)
        scan = context.walker(context.config.orphans.budget).walk()
        orphans = find_orphans(scan.files, claimed)

        builder = self.report_builder()
        builder.add_count("catalog_paths", len(claimed))
        builder.add_count("files_scanned", scan.scanned_count)
        if scan.failed_directories:
            builder.add_count("unreadable_directories", len(scan.failed_directories))
        if scan.aborted:
            builder.mark_aborted(scan.abort_detail or "scan stopped early")

        suffix = f" (scan stopped early: {scan.abort_detail})" if scan.aborted else ""

        if not orphans:
            status = ReportStatus.INFO if scan.aborted else ReportStatus.SUCCESS
            message = (
                f"No orphaned files found in {plural(scan.scanned_count, 'scanned file')}{suffix}."
            )
            return builder.build(status, message)

        total = sum(o.size_bytes for o in orphans)
        for orphan in orphans:
            builder.add_example(orphan)
        builder.set_totals(item_count=len(orphans), total_bytes=total)

        logger.info(
            "Orphan check complete: %d orphan(s) in %d scanned file(s)",
            len(orphans),
            scan.scanned_count,
        )

        message = (
            f"Found {plural(len(orphans), 'orphaned file')} "
            f"({to_megabytes(total)} MB){suffix}."
        )
        return builder.build(ReportStatus.WARNING, message)
