"""Unused media detection.

A media item is unused when no content item references it. Reference
counts come from the optional ReferenceService on the context.
"""

import logging

from mediacheck.analyzers.base import Analyzer
from mediacheck.catalog.service import CatalogError
from mediacheck.core.cancellation import check_cancelled
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import UnusedMedia
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus
from mediacheck.utils.sizes import plural, to_megabytes

logger = logging.getLogger(__name__)


class UnusedMediaAnalyzer(Analyzer):
    """Finds media items with no tracked references."""

    name = "unused_media"
    title = "Unused media items"
    description = "Checks for media items that are not referenced by any content."
    example_limit = 20

    def analyze(self, context: AuditContext) -> AnalysisReport:
        references = context.references
        if references is None or not references.is_available():
            return self.report_builder().build(
                ReportStatus.WARNING,
                "Unable to check unused media: reference tracking is not available.",
            )

        unused: list[UnusedMedia] = []
        checked = 0
        failed = 0
        for record in self.eligible_records(context):
            check_cancelled(context.cancel, "while checking for unused media")
            try:
                count = references.count_references(record.key)
            except (CatalogError, OSError) as e:
                logger.warning("Could not check references for media %s: %s", record.key, e)
                failed += 1
                continue
            checked += 1
            if count == 0:
                unused.append(UnusedMedia(record=record))

        if not unused:
            return ReportBuilder.success(
                self.name,
                self.title,
                f"All {plural(checked, 'checked media item')} are in use.",
            )

        total = sum(u.record.size_bytes for u in unused)
        builder = self.report_builder()
        for item in unused:
            builder.add_example(item)
        builder.set_totals(item_count=len(unused), total_bytes=total)
        builder.add_count("records_checked", checked)
        if failed:
            builder.add_count("lookup_failures", failed)

        logger.info("Unused media check complete: %d of %d unused", len(unused), checked)

        message = (
            f"Found {plural(len(unused), 'unused media item')} ({to_megabytes(total)} MB)."
        )
        return builder.build(ReportStatus.WARNING, message)
