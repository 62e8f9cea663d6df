"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from dqcatalog.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["lineage", "--examples"], ["dqcat lineage email"]),
    (["derive", "--examples"], ["--key primary_key --not-null", "--exclude R40"]),
    (["validate", "--examples"], ["dqcat validate"]),
    (["plan", "--examples"], ["dqcat plan columns.json", '"column"']),
    (["types", "--examples"], ["dqcat types list", "dqcat types show email"]),
    (["types", "list", "--examples"], ["--kind alias"]),
    (["types", "show", "--examples"], ["dqcat types show"]),
    (["types", "categories", "--examples"], ["dqcat types categories"]),
    (["rules", "--examples"], ["dqcat rules list --tag universal"]),
    (["rules", "list", "--examples"], ["--severity high"]),
    (["rules", "show", "--examples"], ["dqcat rules show R1"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert result.output.startswith("Examples for 'cli ")
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.parametrize("args", [item[0][:-1] + ["--help"] for item in EXAMPLES_COMMANDS])
def test_examples_listed_in_help(cli_runner: CliRunner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "--examples" in result.output
