"""Duplicate media detection.

Two media items are duplicates when their file names match
(case-insensitive) and their stored sizes are equal.
"""

import logging
from collections.abc import Iterable

from mediacheck.analyzers.base import Analyzer
from mediacheck.catalog.models import MediaRecord
from mediacheck.core.context import AuditContext
from mediacheck.models.findings import DuplicateGroup
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus
from mediacheck.utils.sizes import plural, to_megabytes

logger = logging.getLogger(__name__)


def find_duplicates(records: Iterable[MediaRecord]) -> list[DuplicateGroup]:
    """Group records by (lowercased file name, size) and keep the duplicates.

    Members of a group are ordered by creation time; equal timestamps
    keep their catalog order. Groups are ranked by wasted bytes,
    largest first, again keeping catalog order for ties.

    Args:
        records: Candidate records; those without a file name or with
            zero size are skipped.

    Returns:
        Duplicate groups, most wasteful first.
    """
    buckets: dict[tuple[str, int], list[MediaRecord]] = {}
    for record in records:
        if not record.file_name or record.size_bytes <= 0:
            continue
        buckets.setdefault((record.file_name.lower(), record.size_bytes), []).append(record)

    groups: list[DuplicateGroup] = []
    for (_, size), members in buckets.items():
        if len(members) < 2:
            continue
        ordered = tuple(sorted(members, key=lambda r: r.created_at))
        groups.append(DuplicateGroup(file_name=ordered[0].file_name, size_bytes=size, items=ordered))

    groups.sort(key=lambda g: g.wasted_bytes, reverse=True)
    return groups


class DuplicateAnalyzer(Analyzer):
    """Finds media items sharing a file name and size."""

    name = "duplicates"
    title = "Duplicate media items"
    description = "Checks for duplicate media items based on file name and file size."
    example_limit = 5

    def analyze(self, context: AuditContext) -> AnalysisReport:
        records = self.eligible_records(context)
        groups = find_duplicates(records)

        if not groups:
            return ReportBuilder.success(
                self.name, self.title, "No duplicate media items found."
            )

        total_duplicates = sum(g.count - 1 for g in groups)
        wasted_bytes = sum(g.wasted_bytes for g in groups)

        builder = self.report_builder()
        for group in groups:
            builder.add_example(group)
        builder.set_totals(item_count=total_duplicates, total_bytes=wasted_bytes)
        builder.add_count("groups", len(groups))
        builder.add_count("records_checked", len(records))

        logger.info(
            "Duplicate check complete: %d duplicates in %d groups", total_duplicates, len(groups)
        )

        message = (
            f"Found {plural(total_duplicates, 'duplicate file')} in "
            f"{plural(len(groups), 'group')} ({to_megabytes(wasted_bytes)} MB wasted)."
        )
        return builder.build(ReportStatus.INFO, message)
