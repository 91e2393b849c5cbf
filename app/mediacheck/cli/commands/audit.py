"""Audit command implementation.

Runs the selected analyzers against a media store and catalog export.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from mediacheck.cli.display import create_summary_table, print_report_details
from mediacheck.cli.types import AnalyzerChoice, get_selected_analyzers
from mediacheck.core.audit import run_audit
from mediacheck.core.config import ConfigError, load_config_or_default
from mediacheck.core.context import build_context
from mediacheck.models.audit_result import AuditResult
from mediacheck.models.report import ReportStatus
from mediacheck.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Audit the media library.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def audit_media(
    ctx: typer.Context,
    checks: Annotated[
        list[AnalyzerChoice] | None,
        typer.Option(
            "--check",
            "-c",
            help="Check to run (repeatable). Runs all checks by default.",
            case_sensitive=False,
        ),
    ] = None,
    media_root: Annotated[
        Path | None,
        typer.Option(
            "--media-root",
            "-m",
            help="Media store directory (overrides [storage].root).",
        ),
    ] = None,
    catalog_path: Annotated[
        Path | None,
        typer.Option(
            "--catalog",
            "-k",
            help="Catalog export JSON file (overrides [catalog].path).",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Configuration file (defaults to ~/.config/mediacheck/config.toml).",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of examples displayed per check.",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export audit results to JSON file.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Run storage health checks and display the reports.

    Exits with code 1 when any check reports an error.

    Examples:
        mediacheck audit --media-root ./media --catalog catalog.json
        mediacheck audit --check orphans --check missing_files
        mediacheck audit --format json
        mediacheck audit --export audit.json
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    try:
        config = load_config_or_default(config_path)
        context = build_context(config, media_root=media_root, catalog_path=catalog_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    result = run_audit(get_selected_analyzers(checks), context)

    if export_path is not None:
        _export_result(result, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
    else:
        _print_tables(result, limit, quiet)

    if result.has_errors:
        raise typer.Exit(code=1)


def _print_tables(result: AuditResult, limit: int | None, quiet: bool) -> None:
    """Display the summary table and, unless quiet, each report's examples."""
    console.print(create_summary_table(result))
    if not quiet:
        for report in result.reports:
            print_report_details(report, limit)

    if result.status == ReportStatus.SUCCESS:
        print_success("Media library looks healthy.")


def _export_result(result: AuditResult, export_path: Path) -> None:
    """Write the audit result to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(result.to_dict(), indent=2))
        print_info(f"Audit results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
