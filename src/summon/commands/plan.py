"""Command: show the plan that would produce a type."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from summon.commands._base import SummonCommand
from summon.services.summon import SummonService

if TYPE_CHECKING:
    from summon.commands._context import AppContext


@click.command(
    cls=SummonCommand,
    examples=[
        "summon -s physics plan Distance",
        "summon -s physics -v plan physics.Distance",
        "summon --json -s physics plan Distance",
    ],
)
@click.argument("target")
@click.pass_obj
def plan(app: AppContext, target: str) -> None:
    """Find the ordered rule applications that produce TARGET."""
    app.emit(SummonService(app.tome).plan(target))
