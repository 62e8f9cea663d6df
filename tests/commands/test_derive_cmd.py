"""Tests for the derive CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from dqcatalog.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestDeriveCommand:
    def test_default_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["derive", "email"])
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert "alias:email" in result.stdout
        assert "7 rules" in result.stdout

    def test_json_payload(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "derive", "customer_id", "--key", "primary_key", "--not-null"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["rules"] == ["R17", "R4", "R6", "R18", "R67", "R38", "R7", "R1", "R2"]
        assert data["ruleSources"]["R1"] == "primary_key"
        assert data["keyUsed"] == "primary_key"
        assert data["nullable"] is False

    def test_exclude_repeatable(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "derive", "price", "--exclude", "R40", "--exclude", "r63"]
        )
        assert result.exit_code == 0
        assert result.stdout.split() == ["R17", "R4", "R9", "R10", "R39", "R48", "R52", "R22"]

    def test_unique_key(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "derive", "integer", "--key", "unique"])
        data = json.loads(result.stdout)["data"]
        assert data["keyUsed"] == "unique"
        assert "R2" not in data["rules"]

    def test_invalid_key(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["derive", "integer", "--key", "foreign"])
        assert result.exit_code == 2

    def test_conflicting_nullability(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["derive", "integer", "--not-null", "--nullable"])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.stderr

    def test_unknown_type(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "derive", "mystery"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["data"]["typeUsed"] == "mystery"
        assert payload["warnings"] == ["Unknown type 'mystery', using 'string' lineage"]


class TestDeriveWithConfig:
    def test_config_exclusions_and_defaults(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "dqcat.toml").write_text(
            '[derive]\nexclude = ["R17"]\ndefault_nullable = false\n'
        )
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "derive", "integer"])
        data = json.loads(result.stdout)["data"]
        assert "R17" not in data["rules"]
        assert data["nullable"] is False
        assert data["ruleSources"]["R1"] == "nullable:false"

    def test_nullable_flag_overrides_config(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "dqcat.toml").write_text("[derive]\ndefault_nullable = false\n")
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "derive", "integer", "--nullable"])
        data = json.loads(result.stdout)["data"]
        assert data["nullable"] is True
        assert "R1" not in data["rules"]
