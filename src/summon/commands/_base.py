"""Click base classes shared by every summon command.

Each command may carry a few example invocations. ``--examples`` prints
them and exits, so ``--help`` stays short. The root group lists its
subcommands in the order they were registered (plan before conjure) rather
than alphabetically.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import click


def _examples_callback(
    lines: Sequence[str],
) -> Callable[[click.Context, click.Parameter, bool], None]:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in lines:
            click.echo(f"  $ {line}")
        ctx.exit(0)

    return show


class SummonCommand(click.Command):
    """Command taking ``examples=[...]``, one shell line per entry."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_examples_callback(self.examples),
                    help="Show example invocations and exit.",
                )
            )


class SummonGroup(click.Group):
    """Root group: subcommands default to :class:`SummonCommand`."""

    command_class = SummonCommand

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)
