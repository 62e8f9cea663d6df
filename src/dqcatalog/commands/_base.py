"""Click command and group classes that take an ``examples=`` block.

``dqcat <cmd> --examples`` prints the block and exits, so ``--help`` can
stay short.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )


class _ExamplesMixin:
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            self.params.append(_examples_option(examples))  # type: ignore[attr-defined]


class DqCommand(_ExamplesMixin, click.Command):
    """Command with an optional ``--examples`` flag."""


class DqGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands also accept ``examples=`` without ``cls=``."""

    command_class = DqCommand
