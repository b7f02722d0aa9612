"""Plan — an ordered, deduplicated sequence of rules producing a target.

INVARIANT: Each product key appears at most once, and every rule appears
after the rules producing its ingredients.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from summon.domain.keys import TypeKey
from summon.domain.rules import Rule


@dataclass(frozen=True)
class Plan:
    """Immutable execution plan for one target."""

    target: TypeKey
    steps: tuple[Rule, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.steps)

    def products(self) -> tuple[TypeKey, ...]:
        """Product key of each step, in execution order."""
        return tuple(rule.product() for rule in self.steps)

    def describe(self) -> list[dict[str, Any]]:
        """Plain-data view of the steps for output and logging."""
        return [
            {
                "index": i,
                "rule": rule.name,
                "product": rule.product().name,
                "ingredients": [k.name for k in rule.ingredients()],
            }
            for i, rule in enumerate(self.steps)
        ]


@dataclass
class Recipe:
    """Mutable plan under construction during search.

    Joining keeps the first rule seen for each product key and appends
    new entries in the order they are encountered.
    """

    steps: list[Rule] = field(default_factory=list)
    products: set[TypeKey] = field(default_factory=set)

    def add(self, rule: Rule) -> None:
        """Append *rule* unless its product is already supplied."""
        product = rule.product()
        if product in self.products:
            return
        self.products.add(product)
        self.steps.append(rule)

    def join(self, other: Recipe) -> None:
        """Merge *other* into this recipe, first-wins by product key."""
        for rule in other.steps:
            self.add(rule)

    def freeze(self, target: TypeKey) -> Plan:
        return Plan(target=target, steps=tuple(self.steps))
