"""Command: static health check of the loaded rules."""

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
        "summon -s physics check",
        "summon --json -s physics check",
    ],
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Report rule cycles and products that can never be summoned."""
    app.emit(SummonService(app.tome).check())
