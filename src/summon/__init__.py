"""summon — a backward-chaining engine that gives you what you ask for.

Register rules (transmutations between types) and facts on a :class:`Tome`,
then ask for a type::

    @circle
    def travelled(speed: Speed, time: Time) -> Distance:
        return Distance(speed.value * time.value)

    tome = Tome()
    tome.register_fact(Speed(3.0))
    tome.register_fact(Time(4.0))
    tome.register(travelled)
    tome.summon(Distance)  # Distance(12.0)
"""

from __future__ import annotations

from summon.domain.authoring import circle, fusion
from summon.domain.errors import (
    ArityError,
    DuplicateMaterialError,
    IngredientTypeError,
    InvariantViolation,
    MaterialTypeError,
    MissingMaterialError,
    ProductTypeError,
    SpellbookError,
    SummonError,
)
from summon.domain.keys import TypeKey, type_key
from summon.domain.rules import Fact, FunctionRule, Rule
from summon.engine.plan import Plan
from summon.engine.search import SearchResult
from summon.engine.tome import Tome

__version__ = "0.1.0"

__all__ = [
    "ArityError",
    "DuplicateMaterialError",
    "Fact",
    "FunctionRule",
    "IngredientTypeError",
    "InvariantViolation",
    "MaterialTypeError",
    "MissingMaterialError",
    "Plan",
    "ProductTypeError",
    "Rule",
    "SearchResult",
    "SpellbookError",
    "SummonError",
    "Tome",
    "TypeKey",
    "__version__",
    "circle",
    "fusion",
    "type_key",
]
