"""Exception hierarchy.

"No solution" is never an exception: it is the normal negative outcome of
a request. Everything below :class:`InvariantViolation` signals a defect in
rule registration or plan construction and must abort the current request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from summon.domain.keys import TypeKey


class SummonError(Exception):
    """Base class for all summon errors."""


class InvariantViolation(SummonError):
    """An internal invariant was broken. Never retried, never recovered."""


class ArityError(InvariantViolation):
    """A rule was handed the wrong number of ingredients."""

    def __init__(self, rule_name: str, expected: int, found: int) -> None:
        self.rule_name = rule_name
        self.expected = expected
        self.found = found
        super().__init__(
            f"{rule_name} passed incorrect number of arguments "
            f"(expected: {expected}, found: {found})"
        )


class IngredientTypeError(InvariantViolation):
    """A value does not conform to the type key it was handed under."""

    def __init__(self, rule_name: str, key: TypeKey, value: object) -> None:
        self.rule_name = rule_name
        self.key = key
        super().__init__(
            f"{rule_name} passed an incorrect type: expected {key.name}, "
            f"found {type(value).__module__}.{type(value).__qualname__}"
        )


class ProductTypeError(InvariantViolation):
    """A rule returned a value that does not conform to its declared product."""

    def __init__(self, rule_name: str, key: TypeKey, value: object) -> None:
        self.rule_name = rule_name
        self.key = key
        super().__init__(
            f"{rule_name} produced an incorrect type: expected {key.name}, "
            f"found {type(value).__module__}.{type(value).__qualname__}"
        )


class MissingMaterialError(InvariantViolation):
    """A value was requested under a key it was never stored under."""

    def __init__(self, key: TypeKey) -> None:
        self.key = key
        super().__init__(f"material was not found: {key.name}")


class DuplicateMaterialError(InvariantViolation):
    """A second value was stored under a key already present."""

    def __init__(self, key: TypeKey) -> None:
        self.key = key
        super().__init__(f"material already produced: {key.name}")


class MaterialTypeError(InvariantViolation):
    """A stored value does not match its key's class at extraction."""

    def __init__(self, key: TypeKey, value: object) -> None:
        self.key = key
        super().__init__(
            f"material stored as {key.name} is a "
            f"{type(value).__module__}.{type(value).__qualname__}"
        )


class SpellbookError(SummonError):
    """A spellbook reference could not be imported or applied."""
