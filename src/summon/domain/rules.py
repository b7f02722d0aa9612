"""Rule ABC and its concrete variants.

A rule ("transmutation") requires ingredients and produces a product.
The engine only ever talks to rules through the three methods of
:class:`Rule`; how a rule object was authored is irrelevant to it.

INVARIANT: Rules are immutable after construction.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from summon.domain.errors import ArityError, IngredientTypeError, ProductTypeError
from summon.domain.keys import TypeKey, type_key


class Rule(ABC):
    """Abstract base class for rules.

    ``transmute`` MUST be called with exactly ``len(ingredients())`` values,
    in declared order, each conforming to its declared key.
    """

    @abstractmethod
    def ingredients(self) -> tuple[TypeKey, ...]:
        """Ordered keys of the values this rule consumes."""
        ...

    @abstractmethod
    def product(self) -> TypeKey:
        """Key of the value this rule produces."""
        ...

    @abstractmethod
    def transmute(self, inputs: Sequence[object]) -> object:
        """Produce a product value from one value per ingredient."""
        ...

    @property
    def name(self) -> str:
        """Display name used in plans, logs, and CLI output."""
        return type(self).__qualname__

    def __repr__(self) -> str:
        ingredients = ", ".join(k.short_name for k in self.ingredients())
        return f"<{type(self).__name__} {self.name}: ({ingredients}) -> {self.product().short_name}>"


def _arrow_name(ingredients: tuple[TypeKey, ...], product: TypeKey) -> str:
    return f"({', '.join(k.short_name for k in ingredients)}) -> {product.short_name}"


class FunctionRule(Rule):
    """Rule backed by a plain callable.

    The callable receives the ingredient values positionally, in order, and
    returns the product value. Inputs and the returned value are checked
    against their declared keys.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        ingredients: Sequence[type | TypeKey],
        product: type | TypeKey,
        *,
        name: str | None = None,
    ) -> None:
        self._func = func
        self._ingredients = tuple(type_key(i) for i in ingredients)
        self._product = type_key(product)
        if name is None:
            qualname = getattr(func, "__qualname__", "")
            name = qualname if qualname and "<lambda>" not in qualname else None
        self._name = name or _arrow_name(self._ingredients, self._product)

    @property
    def name(self) -> str:
        return self._name

    def ingredients(self) -> tuple[TypeKey, ...]:
        return self._ingredients

    def product(self) -> TypeKey:
        return self._product

    def transmute(self, inputs: Sequence[object]) -> object:
        if len(inputs) != len(self._ingredients):
            raise ArityError(self._name, len(self._ingredients), len(inputs))
        for key, value in zip(self._ingredients, inputs, strict=True):
            if not key.accepts(value):
                raise IngredientTypeError(self._name, key, value)
        result = self._func(*inputs)
        if not self._product.accepts(result):
            raise ProductTypeError(self._name, self._product, result)
        return result


class Fact(Rule):
    """Zero-ingredient rule supplying a known value.

    Each transmutation hands out a fresh copy so executions never share
    mutable state through a fact.
    """

    def __init__(self, value: object, key: type | TypeKey | None = None, *, deep: bool = False) -> None:
        self._key = type_key(key) if key is not None else type_key(type(value))
        if not self._key.accepts(value):
            raise IngredientTypeError(f"fact {self._key.short_name}", self._key, value)
        self._value = value
        self._deep = deep

    @property
    def name(self) -> str:
        return f"fact {self._key.short_name}"

    @property
    def value(self) -> object:
        return self._value

    def ingredients(self) -> tuple[TypeKey, ...]:
        return ()

    def product(self) -> TypeKey:
        return self._key

    def transmute(self, inputs: Sequence[object]) -> object:
        if inputs:
            raise ArityError(self.name, 0, len(inputs))
        if self._deep:
            return copy.deepcopy(self._value)
        return copy.copy(self._value)
