"""Tests for the --examples flag on commands and groups."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from autoprops.cli import cli


@pytest.mark.usefixtures("_isolated_vault")
class TestExamples:
    @pytest.mark.parametrize(
        ("args", "keywords"),
        [
            (["apply"], ["autoprops apply", "inbox/"]),
            (["plan"], ["autoprops plan"]),
            (["normalize"], ["autoprops normalize tags", "number"]),
            (["rules"], ["autoprops rules list", "autoprops rules validate"]),
            (["rules", "list"], ["autoprops rules list"]),
            (["rules", "validate"], ["autoprops rules validate"]),
        ],
    )
    def test_examples_flag(self, cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
        result = cli_runner.invoke(cli, [*args, "--examples"])
        assert result.exit_code == 0, result.output
        assert "Examples for" in result.output
        for keyword in keywords:
            assert keyword in result.output

    def test_examples_skip_required_arguments(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["apply", "--examples"])
        assert result.exit_code == 0
        assert "Missing argument" not in result.output

    def test_help_mentions_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["apply", "--help"])
        assert "--examples" in result.output
