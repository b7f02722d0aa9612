"""Plugin discovery and dispatch.

Discovery: entry points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from summon.plugins.hookspecs import PROJECT_NAME, SummonHookSpec

if TYPE_CHECKING:
    from summon.engine.tome import Tome

ENTRY_POINT_GROUP = "summon.spellbooks"

logger = logging.getLogger(__name__)


class PluginManager:
    """Loads spellbook plugins and lets them inscribe a Tome."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SummonHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load the ``summon.spellbooks`` entry-point group.

        Returns the names of all registered plugins.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load spellbook entry points", exc_info=True)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin object (module, class instance) directly."""
        resolved_name = name or getattr(plugin, "__name__", None) or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def inscribe(self, tome: Tome) -> list[str]:
        """Call every plugin's ``summon_inscribe`` hook with *tome*.

        Each plugin runs in isolation; a failing plugin is logged and
        reported in the returned warnings while the others still run.
        """
        warnings: list[str] = []
        for impl in self._pm.hook.summon_inscribe.get_hookimpls():
            try:
                impl.function(tome=tome)
            except Exception:
                logger.warning("Plugin %s failed to inscribe", impl.plugin_name, exc_info=True)
                warnings.append(f"Plugin {impl.plugin_name} failed to inscribe rules")
        return warnings

    def _normalize_plugin_instances(self) -> None:
        """Replace plugin classes registered by entry points with instances."""
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            name = self._pm.get_name(plugin)
            self._pm.unregister(plugin)
            try:
                self.register_plugin(plugin(), name=name)
            except Exception:
                logger.warning("Failed to instantiate plugin class %s", plugin, exc_info=True)
