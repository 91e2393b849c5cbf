"""Disallowed file extension detection.

Walks the media store under a scan budget and reports files whose
extension is on the configured deny list. A stopped walk still
reports what it found, labeled as partial.
"""

import logging
from collections.abc import Iterable, Iterator

from mediacheck.analyzers.base import Analyzer
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import DisallowedFile
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus
from mediacheck.storage.models import PhysicalFile
from mediacheck.storage.paths import extension_of
from mediacheck.utils.sizes import plural

logger = logging.getLogger(__name__)


def find_disallowed(
    files: Iterable[PhysicalFile], extensions: Iterable[str]
) -> Iterator[DisallowedFile]:
    """Yield files whose extension is in ``extensions`` (case-insensitive)."""
    denied = {ext.lstrip(".").lower() for ext in extensions}
    for f in files:
        ext = extension_of(f.path)
        if ext and ext in denied:
            yield DisallowedFile(path=f.path, extension=ext)


class DisallowedExtensionAnalyzer(Analyzer):
    """Finds files with extensions that should never be served as media."""

    name = "disallowed_extensions"
    title = "Disallowed media file extensions"
    description = "Checks the media store for files with disallowed extensions."
    example_limit = 50

    def analyze(self, context: AuditContext) -> AnalysisReport:
        settings = context.config.disallowed_extensions
        if not settings.extensions:
            return ReportBuilder.success(
                self.name, self.title, "No disallowed file extensions are configured."
            )

        scan = context.walker(settings.budget).walk()
        violations = list(find_disallowed(scan.files, settings.extensions))

        builder = self.report_builder()
        builder.add_count("files_scanned", scan.scanned_count)
        if scan.failed_directories:
            builder.add_count("unreadable_directories", len(scan.failed_directories))
        if scan.aborted:
            builder.mark_aborted(scan.abort_detail or "scan stopped early")

        suffix = f" (scan stopped early: {scan.abort_detail})" if scan.aborted else ""

        if not violations:
            status = ReportStatus.INFO if scan.aborted else ReportStatus.SUCCESS
            message = (
                f"No files with disallowed extensions found in "
                f"{plural(scan.scanned_count, 'scanned file')}{suffix}."
            )
            return builder.build(status, message)

        by_extension: dict[str, int] = {}
        for violation in violations:
            builder.add_example(violation)
            by_extension[violation.extension] = by_extension.get(violation.extension, 0) + 1
        for ext, count in sorted(by_extension.items()):
            builder.add_count(f"ext_{ext}", count)
        builder.set_totals(item_count=len(violations))

        logger.info("Disallowed extension check complete: %d violation(s)", len(violations))

        message = f"Found {plural(len(violations), 'file')} with disallowed extensions{suffix}."
        return builder.build(ReportStatus.WARNING, message)
