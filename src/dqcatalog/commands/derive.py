"""Command: derive the rule set for one field declaration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dqcatalog.commands._base import DqCommand
from dqcatalog.domain.types import KeyType

if TYPE_CHECKING:
    from dqcatalog.commands._context import AppContext


@click.command(
    cls=DqCommand,
    examples="""\
  dqcat derive email
  dqcat derive customer_id --key primary_key --not-null
  dqcat derive price --exclude R40
  dqcat derive price --exclude R40 --exclude R63
  dqcat -q derive work_email
  dqcat --json derive email""",
)
@click.argument("type_name")
@click.option(
    "--key",
    "key_type",
    type=click.Choice([k.value for k in KeyType]),
    default=None,
    help="Key role of the field (default from [derive] config).",
)
@click.option("--not-null", is_flag=True, help="Missing values are forbidden.")
@click.option(
    "--nullable",
    is_flag=True,
    help="Missing values are allowed (overrides [derive] default_nullable).",
)
@click.option(
    "--exclude",
    multiple=True,
    metavar="RULE_ID",
    help="Rule id to suppress. Repeatable.",
)
@click.pass_obj
def derive(
    app: AppContext,
    type_name: str,
    key_type: str | None,
    not_null: bool,
    nullable: bool,
    exclude: tuple[str, ...],
) -> None:
    """Derive the quality rules that apply to a field of TYPE_NAME."""
    from dqcatalog.services.catalog import CatalogService

    if not_null and nullable:
        raise click.UsageError("--not-null and --nullable are mutually exclusive.")
    is_nullable: bool | None = None
    if not_null:
        is_nullable = False
    elif nullable:
        is_nullable = True

    svc = CatalogService(app.catalog, app.settings.derive)
    result = svc.derive(type_name, key_type=key_type, nullable=is_nullable, exclude=exclude)
    app.emit(result)
