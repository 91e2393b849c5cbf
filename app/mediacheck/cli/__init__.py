"""CLI package for mediacheck.

This package contains the Typer application and all subcommands.
"""

from mediacheck.cli.main import app

__all__ = ["app"]
