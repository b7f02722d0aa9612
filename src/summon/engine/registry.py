"""Registry — every known rule, indexed by the type it produces.

INVARIANT: Each candidate list is ordered by ascending ingredient count,
ties in registration order. This encodes "prefer the simplest known way".
The registry only grows; there is no unregister.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from summon.domain.keys import TypeKey, type_key
from summon.domain.rules import Fact, Rule

logger = logging.getLogger(__name__)


class Registry:
    """Product key -> preference-ordered candidate rules.

    Not thread-safe for writes: callers serialize ``register`` calls.
    Concurrent reads of a registry that is no longer mutated are safe.
    """

    def __init__(self) -> None:
        self._rules: dict[TypeKey, list[Rule]] = {}
        self._names: dict[str, TypeKey] = {}
        self._short_names: dict[str, set[TypeKey]] = {}
        self._revision = 0

    # ------------------------------------------------------------------
    # Build phase
    # ------------------------------------------------------------------

    def register(self, rule: Rule) -> None:
        """Add *rule* to the candidates for its product. Always succeeds."""
        if not isinstance(rule, Rule):
            msg = f"expected a Rule, got {type(rule).__qualname__}"
            raise TypeError(msg)
        product = rule.product()
        candidates = self._rules.setdefault(product, [])
        candidates.append(rule)
        candidates.sort(key=lambda r: len(r.ingredients()))
        self._revision += 1

        self._index(product)
        for ingredient in rule.ingredients():
            self._index(ingredient)
        logger.debug(
            "Registered rule %s for %s (%d ingredients, %d candidates)",
            rule.name,
            product.name,
            len(rule.ingredients()),
            len(candidates),
        )

    def register_fact(
        self,
        value: object,
        key: type | TypeKey | None = None,
        *,
        deep: bool = False,
    ) -> Fact:
        """Register *value* as a known fact and return the synthesized rule."""
        fact = Fact(value, key, deep=deep)
        self.register(fact)
        return fact

    def _index(self, key: TypeKey) -> None:
        self._names[key.name] = key
        self._short_names.setdefault(key.short_name, set()).add(key)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def revision(self) -> int:
        """Number of mutations so far; changes whenever a rule is added."""
        return self._revision

    def candidates(self, target: type | TypeKey) -> tuple[Rule, ...]:
        """Rules producing *target*, in preference order."""
        return tuple(self._rules.get(type_key(target), ()))

    def products(self) -> list[TypeKey]:
        """Keys with at least one registered rule, in first-registration order."""
        return list(self._rules)

    def rules(self) -> Iterator[Rule]:
        """All rules, grouped by product in preference order."""
        for candidates in self._rules.values():
            yield from candidates

    def lookup(self, name: str) -> TypeKey | None:
        """Resolve a display name to a known key.

        Accepts a full ``module.QualName`` or an unambiguous short name.
        """
        key = self._names.get(name)
        if key is not None:
            return key
        matches = self.matching(name)
        if len(matches) == 1:
            return matches[0]
        return None

    def matching(self, name: str) -> list[TypeKey]:
        """Keys whose short name is *name*, sorted by full name."""
        return sorted(self._short_names.get(name, ()), key=lambda k: k.name)

    def __contains__(self, target: object) -> bool:
        if isinstance(target, type):
            target = type_key(target)
        return target in self._rules

    def __len__(self) -> int:
        return sum(len(c) for c in self._rules.values())
