"""Subcommand modules for dqcat.

Provides register_commands() which uses deferred imports to keep
``dqcat --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 4 standalone commands.
    """
    # --- Groups ---
    from dqcatalog.commands.rules import rules
    from dqcatalog.commands.types import types

    cli.add_command(types)
    cli.add_command(rules)

    # --- Standalone commands ---
    from dqcatalog.commands.derive import derive
    from dqcatalog.commands.lineage import lineage
    from dqcatalog.commands.plan import plan
    from dqcatalog.commands.validate import validate

    cli.add_command(lineage)
    cli.add_command(derive)
    cli.add_command(validate)
    cli.add_command(plan)
