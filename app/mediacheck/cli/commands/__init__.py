"""CLI commands for mediacheck.

This package contains all subcommand implementations.
"""

from mediacheck.cli.commands import audit, checks, config

__all__ = ["audit", "checks", "config"]
