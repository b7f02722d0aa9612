"""Pluggy hook specifications for summon.

Installed packages contribute rules by implementing ``summon_inscribe``
and advertising themselves under the ``summon.spellbooks`` entry-point
group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from summon.engine.tome import Tome

PROJECT_NAME = "summon"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class SummonHookSpec:
    """Hook specifications for the summon plugin system."""

    @hookspec
    def summon_inscribe(self, tome: Tome) -> None:
        """Register rules and facts on *tome*."""
