"""Command: summon a value and print it."""

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
        "summon -s physics conjure Distance",
        "summon -q -s physics conjure Distance",
        "summon --json -s physics:inscribe conjure Distance",
    ],
)
@click.argument("target")
@click.pass_obj
def conjure(app: AppContext, target: str) -> None:
    """Plan, execute, and print the value of TARGET."""
    app.emit(SummonService(app.tome).conjure(target))
