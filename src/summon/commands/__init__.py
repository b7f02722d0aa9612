"""Subcommand modules for summon.

Provides register_commands(), using deferred imports to keep
``summon --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from summon.commands.check import check
    from summon.commands.conjure import conjure
    from summon.commands.plan import plan
    from summon.commands.rules import rules

    cli.add_command(plan)
    cli.add_command(conjure)
    cli.add_command(rules)
    cli.add_command(check)
