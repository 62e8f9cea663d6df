"""Command group: inspect the rule catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dqcatalog.commands._base import DqGroup
from dqcatalog.domain.types import Severity
from dqcatalog.services.catalog import CatalogService

if TYPE_CHECKING:
    from dqcatalog.commands._context import AppContext

_RULES_EXAMPLES = """\
  dqcat rules list
  dqcat rules list --tag universal
  dqcat rules list --severity critical
  dqcat rules show R4"""


@click.group(cls=DqGroup, examples=_RULES_EXAMPLES)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List and inspect data quality rules."""


@rules.command(
    "list",
    examples="""\
  dqcat rules list
  dqcat rules list --tag universal
  dqcat rules list --severity high
  dqcat -v rules list""",
)
@click.option("--tag", default=None, help="Only rules carrying this tag.")
@click.option(
    "--severity",
    type=click.Choice([s.value for s in Severity]),
    default=None,
    help="Only rules of this severity.",
)
@click.pass_obj
def list_rules(app: AppContext, tag: str | None, severity: str | None) -> None:
    """List catalog rules."""
    svc = CatalogService(app.catalog, app.settings.derive)
    app.emit(svc.list_rules(tag=tag, severity=severity))


@rules.command(
    examples="""\
  dqcat rules show R1
  dqcat rules show r17
  dqcat --json rules show R40"""
)
@click.argument("rule_id")
@click.pass_obj
def show(app: AppContext, rule_id: str) -> None:
    """Show one rule and the types that declare it."""
    app.emit(CatalogService(app.catalog, app.settings.derive).show_rule(rule_id))
