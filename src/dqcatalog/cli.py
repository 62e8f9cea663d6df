"""Root CLI group for dqcat with global flags and command registration."""

from __future__ import annotations

import click

from dqcatalog import __version__
from dqcatalog.commands import register_commands
from dqcatalog.commands._context import AppContext
from dqcatalog.config.settings import DqSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dqcat")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (ids only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Registry artifact to load instead of the packaged catalog.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    catalog_path: str | None,
) -> None:
    """dqcat: data quality type & rule catalog."""
    ctx.ensure_object(dict)
    settings = DqSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        catalog_path=catalog_path,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
