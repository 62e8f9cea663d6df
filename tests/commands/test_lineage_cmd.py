"""Tests for the lineage CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from dqcatalog.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestLineageCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["lineage", "work_email"])
        assert result.exit_code == 0
        assert "string → email → work_email" in result.stdout

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "lineage", "price"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["lineage"] == ["decimal", "price"]

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "lineage", "email"])
        assert result.exit_code == 0
        assert result.stdout == "string\nemail\n"

    def test_unknown_type_warns_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "lineage", "not_a_type"])
        assert result.exit_code == 0
        assert result.stdout == "string\n"
        assert "WARNING: Unknown type 'not_a_type', using 'string' lineage" in result.stderr

    def test_verbose_shows_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "lineage", "email"])
        assert result.exit_code == 0
        assert "CatalogService.lineage" in result.stdout
