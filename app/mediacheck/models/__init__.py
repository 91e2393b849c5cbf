"""Data models for mediacheck.

This module exports the findings, reports and audit results produced
by the analyzers.
"""

from mediacheck.models.audit_result import AuditMetadata, AuditResult
from mediacheck.models.findings import (
    DisallowedFile,
    DuplicateGroup,
    Finding,
    LargeFile,
    MissingFile,
    OrphanFile,
    UnusedMedia,
)
from mediacheck.models.report import AnalysisReport, ReportBuilder, ReportStatus

__all__ = [
    "AnalysisReport",
    "AuditMetadata",
    "AuditResult",
    "DisallowedFile",
    "DuplicateGroup",
    "Finding",
    "LargeFile",
    "MissingFile",
    "OrphanFile",
    "ReportBuilder",
    "ReportStatus",
    "UnusedMedia",
]
