"""Command: print the ancestor chain of a type."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dqcatalog.commands._base import DqCommand

if TYPE_CHECKING:
    from dqcatalog.commands._context import AppContext


@click.command(
    cls=DqCommand,
    examples="""\
  dqcat lineage email
  dqcat lineage work_email
  dqcat -q lineage price
  dqcat --json lineage customer_id""",
)
@click.argument("type_name")
@click.pass_obj
def lineage(app: AppContext, type_name: str) -> None:
    """Show the lineage of TYPE_NAME, root core type first."""
    from dqcatalog.services.catalog import CatalogService

    app.emit(CatalogService(app.catalog, app.settings.derive).lineage(type_name))
