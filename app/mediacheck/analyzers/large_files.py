"""Large media detection."""

import logging
from collections.abc import Iterable

from mediacheck.analyzers.base import Analyzer
from mediacheck.catalog.models import MediaRecord
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import LargeFile
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus
from mediacheck.utils.sizes import plural, to_megabytes

logger = logging.getLogger(__name__)


def find_large_files(records: Iterable[MediaRecord], threshold_bytes: int) -> list[LargeFile]:
    """Return records strictly above the threshold, largest first.

    A file exactly at the threshold is not reported.
    """
    large = [
        LargeFile(record=r, excess_bytes=r.size_bytes - threshold_bytes)
        for r in records
        if r.size_bytes > threshold_bytes
    ]
    large.sort(key=lambda f: f.record.size_bytes, reverse=True)
    return large


class LargeFileAnalyzer(Analyzer):
    """Finds media items above the configured size threshold."""

    name = "large_files"
    title = "Large media items"
    description = "Checks for media items larger than the configured size threshold."
    example_limit = 20

    def analyze(self, context: AuditContext) -> AnalysisReport:
        settings = context.config.large_files
        threshold = settings.threshold_bytes
        large = find_large_files(self.eligible_records(context), threshold)

        if not large:
            return ReportBuilder.success(
                self.name,
                self.title,
                f"No media items larger than {settings.threshold_mb:g} MB found.",
            )

        excess = sum(f.excess_bytes for f in large)
        builder = self.report_builder()
        for item in large:
            builder.add_example(item)
        builder.set_totals(item_count=len(large), total_bytes=excess)
        builder.add_count("threshold_bytes", threshold)

        logger.info("Large file check complete: %d file(s) above threshold", len(large))

        message = (
            f"Found {plural(len(large), 'file')} larger than {settings.threshold_mb:g} MB "
            f"({to_megabytes(excess)} MB above the threshold)."
        )
        return builder.build(ReportStatus.INFO, message)
