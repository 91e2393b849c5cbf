"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mediacheck.core.theme import get_theme
from mediacheck.models.report import ReportStatus

STATUS_ICONS: dict[ReportStatus, str] = {
    ReportStatus.SUCCESS: "✓",
    ReportStatus.INFO: "i",
    ReportStatus.WARNING: "!",
    ReportStatus.ERROR: "✗",
}


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_status(status: ReportStatus) -> str:
    """Format a report status with its icon and color markup."""
    return f"[status.{status.value}]{STATUS_ICONS[status]} {status.value}[/]"


def create_table(title: str) -> Table:
    """Create a table with the shared header and border styles."""
    return Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
