"""Shared Rich display functions for audit reports.

Provides table builders for the audit summary and for the example
findings of each report.
"""

from rich.markup import escape
from rich.table import Table

from mediacheck.models.audit_result import AuditResult
from mediacheck.models.findings import (
    DisallowedFile,
    DuplicateGroup,
    Finding,
    LargeFile,
    MissingFile,
    OrphanFile,
    UnusedMedia,
)
from mediacheck.models.report import AnalysisReport
from mediacheck.utils.formatting import console, create_table, format_status
from mediacheck.utils.sizes import format_size


def create_summary_table(result: AuditResult) -> Table:
    """Create a table with one row per analyzer report.

    Args:
        result: Audit result to summarize.

    Returns:
        Rich Table with Check, Status, Items, Affected and Message columns.
    """
    table = create_table("Media Audit")
    table.add_column("Check", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Items", justify="right", style="info")
    table.add_column("Affected", justify="right", style="size")
    table.add_column("Message", style="text")

    for report in result.reports:
        message = escape(report.message)
        if report.aborted:
            message = f"{message} [warning](partial)[/]"
        table.add_row(
            escape(report.title),
            format_status(report.status),
            str(report.item_count),
            format_size(report.total_bytes_affected) if report.total_bytes_affected else "-",
            message,
        )
    return table


def _finding_row(finding: Finding) -> tuple[str, str, str]:
    """Return (name/path, size, detail) for one finding."""
    match finding:
        case DuplicateGroup():
            detail = ", ".join(r.file_path or r.name for r in finding.duplicates)
            return (
                f"[path]{escape(finding.file_name)}[/] x{finding.count}",
                format_size(finding.size_bytes),
                f"[muted]{escape(detail)}[/]",
            )
        case LargeFile():
            return (
                f"[path]{escape(finding.record.file_path or finding.record.name)}[/]",
                format_size(finding.record.size_bytes),
                f"[muted]+{format_size(finding.excess_bytes)} over threshold[/]",
            )
        case MissingFile():
            return (
                f"[path]{escape(finding.expected_path)}[/]",
                "-",
                f"[muted]{escape(finding.record.name)} (id {finding.record.id})[/]",
            )
        case OrphanFile():
            return (f"[path]{escape(finding.path)}[/]", format_size(finding.size_bytes), "")
        case DisallowedFile():
            return (
                f"[path]{escape(finding.path)}[/]",
                "-",
                f"[warning].{finding.extension}[/]",
            )
        case UnusedMedia():
            return (
                f"[path]{escape(finding.record.file_path or finding.record.name)}[/]",
                format_size(finding.record.size_bytes),
                f"[muted]{escape(finding.record.name)} (id {finding.record.id})[/]",
            )
    return (str(finding), "-", "")


def create_examples_table(report: AnalysisReport, limit: int | None = None) -> Table:
    """Create a table listing a report's example findings.

    Args:
        report: Report whose examples to display.
        limit: Optional display limit on top of the report's own cap.

    Returns:
        Rich Table with Item, Size and Detail columns.
    """
    table = create_table(report.title)
    table.add_column("Item", overflow="fold")
    table.add_column("Size", justify="right", style="size")
    table.add_column("Detail")

    examples = report.examples[:limit] if limit else report.examples
    for finding in examples:
        table.add_row(*_finding_row(finding))
    return table


def print_report_details(report: AnalysisReport, limit: int | None = None) -> None:
    """Print the examples of a report followed by a truncation note."""
    if not report.examples:
        return
    console.print(create_examples_table(report, limit))

    shown = min(len(report.examples), limit) if limit else len(report.examples)
    hidden = report.truncated_count + len(report.examples) - shown
    if hidden > 0:
        console.print(f"[dim]... and {hidden} more[/dim]")
    if report.aborted:
        console.print(f"[warning]Partial result:[/] {escape(report.abort_reason or '')}")
