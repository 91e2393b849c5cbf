"""Unit tests for checks command."""

import pytest
from mediacheck.analyzers import ANALYZER_NAMES
from mediacheck.cli.main import app
from mediacheck.utils.formatting import console
from typer.testing import CliRunner

runner = CliRunner()


class TestChecksCommand:
    """Tests for mediacheck checks command."""

    def test_lists_all_checks(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Every analyzer is listed by name."""
        monkeypatch.setattr(console, "width", 200)

        result = runner.invoke(app, ["checks"])

        assert result.exit_code == 0
        for name in ANALYZER_NAMES:
            assert name in result.stdout


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "mediacheck version" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without arguments shows help."""
        result = runner.invoke(app, [])

        assert "audit" in result.stdout
