"""Command: seed per-column rule selections from a declarations file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from dqcatalog.commands._base import DqCommand

if TYPE_CHECKING:
    from dqcatalog.commands._context import AppContext


@click.command(
    cls=DqCommand,
    examples="""\
  dqcat plan columns.json
  dqcat -q plan columns.json
  dqcat --json plan columns.json

columns.json holds a list (or {"columns": [...]}) of declarations:
  [{"column": "id", "core_type": "integer", "type_alias": "customer_id",
    "key_type": "primary_key", "nullable": false},
   {"column": "contact", "type_alias": "email"}]""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def plan(app: AppContext, file: Path) -> None:
    """Plan the rules each column declared in FILE should carry."""
    from dqcatalog.services.planning import PlanService

    app.emit(PlanService(app.catalog, app.settings.derive).plan_file(file))
