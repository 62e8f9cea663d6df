"""Tests for the validate CLI command and catalog load failures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from dqcatalog.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestValidateCommand:
    def test_packaged_catalog(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate"])
        assert result.exit_code == 0
        assert "core_types: 10" in result.stdout

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "validate"])
        data = json.loads(result.stdout)["data"]
        assert data["valid"] is True
        assert data["universal_rules"] == ["R17", "R4"]

    def test_custom_catalog(self, cli_runner: CliRunner, minimal_artifact, write_catalog) -> None:
        path = write_catalog(minimal_artifact)
        result = cli_runner.invoke(cli, ["--json", "--catalog", str(path), "validate"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["source"] == str(path)
        assert data["rules"] == 4

    def test_lists_every_issue(self, cli_runner: CliRunner, minimal_artifact, write_catalog) -> None:
        minimal_artifact["type_aliases"]["ghost"] = {"name": "ghost", "extends": "nowhere"}
        minimal_artifact["core_types"]["string"]["rules"].append("R404")
        path = write_catalog(minimal_artifact)
        result = cli_runner.invoke(cli, ["--json", "--catalog", str(path), "validate"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "CATALOG_INVALID"
        assert len(payload["error"]["detail"]["issues"]) == 2

    def test_missing_artifact(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        missing = tmp_path / "nope.json"
        result = cli_runner.invoke(cli, ["--json", "--catalog", str(missing), "validate"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "CATALOG_LOAD_FAILED"


@pytest.mark.usefixtures("_isolated_cwd")
class TestCatalogLoadFailures:
    def test_broken_json(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{")
        result = cli_runner.invoke(cli, ["--json", "--catalog", str(path), "lineage", "email"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert '"code": "CATALOG_LOAD_FAILED"' in result.stderr
        assert '"op": "load_catalog"' in result.stderr

    def test_undecodable_catalog(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"core_types": {"\xff": 1}}')
        result = cli_runner.invoke(cli, ["--json", "--catalog", str(path), "derive", "email"])
        assert result.exit_code == 1
        assert '"code": "CATALOG_LOAD_FAILED"' in result.stderr

    def test_inconsistent_catalog(
        self, cli_runner: CliRunner, minimal_artifact, write_catalog
    ) -> None:
        minimal_artifact["type_aliases"]["loop"] = {"name": "loop", "extends": "loop"}
        path = write_catalog(minimal_artifact)
        result = cli_runner.invoke(cli, ["--json", "--catalog", str(path), "derive", "email"])
        assert result.exit_code == 1
        assert '"code": "CATALOG_INVALID"' in result.stderr
        assert "Inheritance cycle: loop -> loop" in result.stderr

    def test_catalog_path_from_config(
        self, cli_runner: CliRunner, tmp_path: Path, minimal_artifact, write_catalog
    ) -> None:
        write_catalog(minimal_artifact, "small.json")
        (tmp_path / "dqcat.toml").write_text('[catalog]\npath = "small.json"\n')
        result = cli_runner.invoke(cli, ["--json", "types", "list"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["count"] == 2
