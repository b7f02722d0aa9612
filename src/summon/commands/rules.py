"""Command: list registered rules."""

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
        "summon -s physics rules",
        "summon -s physics rules --product Distance",
    ],
)
@click.option("--product", default=None, help="Only rules producing this type.")
@click.pass_obj
def rules(app: AppContext, product: str | None) -> None:
    """List rules in preference order."""
    app.emit(SummonService(app.tome).list_rules(product))
