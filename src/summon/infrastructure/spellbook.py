"""Spellbook loading — import modules that inscribe rules on a Tome.

A spellbook reference is ``package.module`` or ``package.module:attr``.
Without ``attr`` the module's ``inscribe`` function is used. The
resolved attribute is called with the Tome and registers rules on it.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from summon.domain.errors import SpellbookError

if TYPE_CHECKING:
    from summon.engine.tome import Tome

logger = logging.getLogger(__name__)

DEFAULT_ENTRY = "inscribe"


def parse_reference(reference: str) -> tuple[str, str]:
    """Split ``module[:attr]`` into ``(module, attr)``."""
    module_name, _, attr = reference.strip().partition(":")
    if not module_name:
        msg = f"Invalid spellbook reference: {reference!r}"
        raise SpellbookError(msg)
    return module_name, attr or DEFAULT_ENTRY


def load_spellbook(reference: str, tome: Tome) -> int:
    """Import *reference* and let it inscribe rules on *tome*.

    Returns the number of rules the spellbook added.

    Raises:
        SpellbookError: If importing the module raises, the attribute is
            missing, or it is not callable. Errors raised by the entry
            itself propagate unchanged.
    """
    module_name, attr = parse_reference(reference)
    try:
        module = importlib.import_module(module_name)
    except Exception as exc:
        msg = f"Cannot import spellbook module {module_name!r}: {type(exc).__name__}: {exc}"
        raise SpellbookError(msg) from exc

    entry = getattr(module, attr, None)
    if entry is None:
        msg = f"Spellbook {module_name!r} has no attribute {attr!r}"
        raise SpellbookError(msg)
    if not callable(entry):
        msg = f"Spellbook entry {reference!r} is not callable"
        raise SpellbookError(msg)

    before = len(tome.registry)
    entry(tome)
    added = len(tome.registry) - before
    logger.debug("Loaded spellbook %s (%d rules)", reference, added)
    return added
