"""Command group: inspect core types and aliases."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dqcatalog.commands._base import DqGroup
from dqcatalog.domain.types import TypeKind
from dqcatalog.services.catalog import CatalogService

if TYPE_CHECKING:
    from dqcatalog.commands._context import AppContext

_TYPES_EXAMPLES = """\
  dqcat types list
  dqcat types list --kind core
  dqcat types list --category geo
  dqcat types categories
  dqcat types show email"""


@click.group(cls=DqGroup, examples=_TYPES_EXAMPLES)
@click.pass_obj
def types(app: AppContext) -> None:
    """List and inspect registered types."""


@types.command(
    "list",
    examples="""\
  dqcat types list
  dqcat types list --kind alias
  dqcat types list --category financial
  dqcat -q types list --kind core""",
)
@click.option("--category", default=None, help="Only aliases in this category.")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in TypeKind]),
    default=None,
    help="Only core types or only aliases.",
)
@click.pass_obj
def list_types(app: AppContext, category: str | None, kind: str | None) -> None:
    """List registered types."""
    svc = CatalogService(app.catalog, app.settings.derive)
    app.emit(svc.list_types(category=category, kind=kind))


@types.command(
    examples="""\
  dqcat types categories
  dqcat -q types categories"""
)
@click.pass_obj
def categories(app: AppContext) -> None:
    """List alias categories with their member counts."""
    app.emit(CatalogService(app.catalog, app.settings.derive).list_categories())


@types.command(
    examples="""\
  dqcat types show email
  dqcat --json types show decimal"""
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show one type: lineage, declared and effective rules, children."""
    app.emit(CatalogService(app.catalog, app.settings.derive).show_type(name))
