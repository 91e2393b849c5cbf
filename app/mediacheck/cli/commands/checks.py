"""Checks command implementation.

Lists the available analyzers.
"""

import typer

from mediacheck.analyzers import ANALYZER_CLASSES
from mediacheck.utils.formatting import console, create_table

app = typer.Typer(
    help="List available checks.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_checks(ctx: typer.Context) -> None:
    """List the checks that ``mediacheck audit`` can run."""
    if ctx.invoked_subcommand is not None:
        return

    table = create_table("Available Checks")
    table.add_column("Name", no_wrap=True, style="info")
    table.add_column("Title", no_wrap=True)
    table.add_column("Examples", justify="right", style="muted")
    table.add_column("Description", style="text")

    for cls in ANALYZER_CLASSES:
        table.add_row(cls.name, cls.title, str(cls.example_limit), cls.description)

    console.print(table)
