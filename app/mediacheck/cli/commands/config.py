"""Configuration commands.

Provides commands to create and inspect the audit configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from mediacheck.core.config import (
    AuditConfig,
    ConfigError,
    config_to_dict,
    load_config_or_default,
    save_config,
)
from mediacheck.core.paths import get_config_path
from mediacheck.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the audit configuration.",
    no_args_is_help=True,
)


@app.command()
def init(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Where to write the config file."),
    ] = None,
    media_root: Annotated[
        Path | None,
        typer.Option("--media-root", "-m", help="Media store directory to record."),
    ] = None,
    catalog_path: Annotated[
        Path | None,
        typer.Option("--catalog", "-k", help="Catalog export file to record."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a configuration file with the default settings."""
    target = path or get_config_path()
    if target.exists() and not force:
        print_error(f"Config already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    config = AuditConfig()
    if media_root is not None:
        config.storage.root = media_root.resolve()
    if catalog_path is not None:
        config.catalog.path = catalog_path.resolve()

    try:
        saved = save_config(config, target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Config file to read."),
    ] = None,
) -> None:
    """Show the effective configuration as TOML."""
    try:
        config = load_config_or_default(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command(name="path")
def show_path() -> None:
    """Print the default config file location."""
    target = get_config_path()
    suffix = "" if target.exists() else " (not created yet)"
    print_info(f"{target}{suffix}")
