"""Extension layer — spellbook plugins via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from summon.plugins.hookspecs import hookimpl
from summon.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
