"""Missing physical file detection.

A catalog record whose file path does not exist in the store is
reported. Existence is checked against the store path with its case
preserved, so case-sensitive stores are handled correctly.
"""

import logging

from mediacheck.analyzers.base import Analyzer
from mediacheck.core.cancellation import check_cancelled
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import MissingFile
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus
from mediacheck.storage.paths import to_store_path
from mediacheck.utils.sizes import plural

logger = logging.getLogger(__name__)


class MissingFileAnalyzer(Analyzer):
    """Finds catalog records whose physical file is absent."""

    name = "missing_files"
    title = "Missing media files"
    description = "Checks that every media item's file exists in the media store."
    example_limit = 15

    def analyze(self, context: AuditContext) -> AnalysisReport:
        missing: list[MissingFile] = []
        checked = 0

        for record in self.eligible_records(context):
            if not record.file_path:
                continue
            check_cancelled(context.cancel, "while checking for missing files")
            checked += 1
            store_path = to_store_path(record.file_path, context.root_segments)
            if not context.store.exists(store_path):
                logger.debug("Missing file for media %s: %s", record.key, record.file_path)
                missing.append(MissingFile(record=record, expected_path=record.file_path))

        if not missing:
            return ReportBuilder.success(
                self.name,
                self.title,
                f"All {plural(checked, 'media file')} exist in the media store.",
            )

        builder = self.report_builder()
        for item in missing:
            builder.add_example(item)
        builder.set_totals(item_count=len(missing))
        builder.add_count("records_checked", checked)

        logger.info("Missing file check complete: %d of %d missing", len(missing), checked)

        message = f"Found {plural(len(missing), 'media item')} with missing files."
        return builder.build(ReportStatus.ERROR, message)
