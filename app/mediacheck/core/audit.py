"""Sequential audit runner."""

import logging
from collections.abc import Callable, Sequence

from mediacheck.analyzers.base import Analyzer
from mediacheck.core.context import AuditContext
from mediacheck.models.audit_result import AuditResult
from mediacheck.models.report import AnalysisReport

logger = logging.getLogger(__name__)


def run_audit(
    analyzers: Sequence[Analyzer],
    context: AuditContext,
    on_report: Callable[[AnalysisReport], None] | None = None,
) -> AuditResult:
    """Run analyzers one after another and collect their reports.

    Each analyzer reads the catalog and walks the store on its own, so
    reports are independent and a failing analyzer never stops the
    others.

    Args:
        analyzers: Analyzers to run, in order.
        context: Shared audit context.
        on_report: Optional callback invoked after each analyzer finishes.

    Returns:
        AuditResult with one report per analyzer.
    """
    reports: list[AnalysisReport] = []
    for analyzer in analyzers:
        logger.info("Running %s check", analyzer.name)
        report = analyzer.run(context)
        logger.info("%s: %s", analyzer.name, report.status.value)
        reports.append(report)
        if on_report is not None:
            on_report(report)
    return AuditResult.create(reports)
