"""Command: check the registry artifact for consistency."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dqcatalog.commands._base import DqCommand

if TYPE_CHECKING:
    from dqcatalog.commands._context import AppContext


@click.command(
    cls=DqCommand,
    examples="""\
  dqcat validate
  dqcat --catalog ./my_catalog.json validate
  dqcat --json validate""",
)
@click.pass_obj
def validate(app: AppContext) -> None:
    """Validate the type & rule registry and report every issue found.

    Unlike other commands this never builds the full catalog, so an
    inconsistent registry is listed issue by issue instead of aborting
    on load.
    """
    from dqcatalog.commands._context import catalog_failure
    from dqcatalog.domain.errors import RegistryLoadError
    from dqcatalog.domain.registry import load_registry
    from dqcatalog.services.catalog import CatalogService

    try:
        registry = load_registry(app.settings.effective_catalog_path)
    except RegistryLoadError as exc:
        app.fail(catalog_failure("validate", exc))
    app.emit(
        CatalogService.validate_registry(
            registry, fallback_type=app.settings.catalog.fallback_type
        )
    )
