"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy catalog loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from dqcatalog.domain.errors import CatalogError, CatalogIntegrityError
from dqcatalog.output.formatters import OutputSettings, format_result
from dqcatalog.services.result import CATALOG_INVALID, CATALOG_LOAD_FAILED, ServiceResult

if TYPE_CHECKING:
    from dqcatalog.config.settings import DqSettings
    from dqcatalog.domain.catalog import Catalog


def catalog_failure(op: str, exc: CatalogError) -> ServiceResult:
    """Convert a fatal catalog error into an ``ok=False`` result."""
    if isinstance(exc, CatalogIntegrityError):
        return ServiceResult.failure(op, CATALOG_INVALID, str(exc), issues=exc.issues)
    return ServiceResult.failure(op, CATALOG_LOAD_FAILED, str(exc))


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The catalog is loaded
    lazily on first use so ``--help``, ``--version`` and ``--examples``
    never read the registry artifact.
    """

    def __init__(self, settings: DqSettings) -> None:
        self.settings = settings
        self._catalog: Catalog | None = None

        from dqcatalog.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from dqcatalog.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def catalog(self) -> Catalog:
        """The validated catalog (loaded on first access).

        A missing, malformed or inconsistent registry is reported as a
        ``load_catalog`` failure and exits with code 1.
        """
        if self._catalog is None:
            self._catalog = self._load_catalog()
        return self._catalog

    def _load_catalog(self) -> Catalog:
        from dqcatalog.domain.catalog import Catalog

        cfg = self.settings.catalog
        try:
            return Catalog.load(
                self.settings.effective_catalog_path,
                fallback_type=cfg.fallback_type,
                max_depth=cfg.max_depth,
                eager=cfg.eager_lineage,
            )
        except CatalogError as exc:
            self.fail(catalog_failure("load_catalog", exc))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self._output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            self.fail(result, output)

    def fail(self, result: ServiceResult, output: str | None = None) -> NoReturn:
        """Write a failed result to stderr and exit with code 1."""
        if output is None:
            output = format_result(result, settings=self._output_settings())
        click.echo(output, err=True)
        raise SystemExit(1)

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
