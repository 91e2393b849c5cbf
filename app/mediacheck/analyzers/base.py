"""Abstract base class for media analyzers.

This module defines the Analyzer interface that every check must
implement, and the single error boundary around an analyzer run.
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from mediacheck.catalog.models import MediaRecord
from mediacheck.core.cancellation import AuditCancelledError
from mediacheck.core.context import AuditContext
from mediacheck.models.report import AnalysisReport, ReportBuilder

logger = logging.getLogger(__name__)


class Analyzer(ABC):
    """Abstract base class for all media analyzers.

    Analyzers read the catalog and/or walk the store through the
    AuditContext and turn what they find into an AnalysisReport. They
    never modify either side.

    Example:
        >>> analyzer = DuplicateAnalyzer()
        >>> report = analyzer.run(context)
        >>> print(f"{report.title}: {report.status.value}")
    """

    name: ClassVar[str]
    title: ClassVar[str]
    description: ClassVar[str]
    example_limit: ClassVar[int]

    @abstractmethod
    def analyze(self, context: AuditContext) -> AnalysisReport:
        """Run the check and build its report.

        Args:
            context: Collaborators and configuration for this audit.

        Returns:
            AnalysisReport describing the findings.

        Raises:
            CatalogAccessError: If the catalog cannot be reached.
        """

    def run(self, context: AuditContext) -> AnalysisReport:
        """Run the check, converting any failure into an error report.

        This is the only place analyzer failures are caught; the
        caller always receives a report.
        """
        try:
            return self.analyze(context)
        except AuditCancelledError as e:
            logger.info("%s check cancelled", self.title)
            return ReportBuilder.failure(self.name, self.title, e)
        except Exception as e:
            logger.exception("Error during %s check", self.title.lower())
            return ReportBuilder.failure(self.name, self.title, e)

    def report_builder(self) -> ReportBuilder:
        """Create a ReportBuilder for this analyzer."""
        return ReportBuilder(self.name, self.title, self.example_limit)

    def eligible_records(self, context: AuditContext) -> list[MediaRecord]:
        """Read catalog records not excluded by this analyzer's ignore rules."""
        policy = context.ignore_policy()
        rules = context.config.ignore.rules_for(self.name)
        records: list[MediaRecord] = []
        ignored = 0
        for record in context.catalog_reader().read_all():
            if policy.ignores_record(record, rules):
                ignored += 1
                continue
            records.append(record)
        if ignored:
            logger.debug("%s: %d record(s) ignored by configuration", self.name, ignored)
        return records
