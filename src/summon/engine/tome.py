"""Tome — where all the rules and facts of a program are written down.

The tome owns a :class:`Registry` and answers requests against it::

    tome = Tome()
    tome.register_fact(Normal(4))
    tome.register(double)          # a rule: Normal -> Double
    tome.summon(Double)            # -> Double(8)

``summon`` never mutates the registry. An unsatisfiable request is a
normal outcome and yields the caller's default (None unless given).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, overload

from summon.domain.keys import TypeKey, type_key
from summon.engine.executor import Executor
from summon.engine.registry import Registry
from summon.engine.search import PlanSearch, SearchResult

if TYPE_CHECKING:
    from summon.config.settings import SummonSettings
    from summon.domain.rules import Fact, Rule
    from summon.engine.plan import Plan
    from summon.engine.store import ValueStore

logger = logging.getLogger(__name__)


class Tome:
    """Facade over the registry, plan search, and executor.

    Args:
        detect_cycles: Prune cyclic branches during search.
        max_depth: Optional bound on resolution depth.
        cache_plans: Keep search results per target until the registry
            changes.
        deep_copy_facts: Default copy mode for facts registered through
            :meth:`register_fact`.
    """

    def __init__(
        self,
        *,
        detect_cycles: bool = True,
        max_depth: int | None = None,
        cache_plans: bool = False,
        deep_copy_facts: bool = False,
    ) -> None:
        self.registry = Registry()
        self._search = PlanSearch(
            self.registry,
            detect_cycles=detect_cycles,
            max_depth=max_depth,
        )
        self._max_depth = max_depth
        self._executor = Executor()
        self._cache_plans = cache_plans
        self._deep_copy_facts = deep_copy_facts
        self._cache: dict[TypeKey, SearchResult] = {}
        self._cache_revision = self.registry.revision

    @classmethod
    def from_settings(cls, settings: SummonSettings) -> Tome:
        """Build an empty tome configured from ``[search]`` and ``[execution]``."""
        return cls(
            detect_cycles=settings.search.detect_cycles,
            max_depth=settings.search.max_depth,
            cache_plans=settings.search.cache_plans,
            deep_copy_facts=settings.execution.deep_copy_facts,
        )

    @property
    def max_depth(self) -> int | None:
        """Configured bound on resolution depth, if any."""
        return self._max_depth

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, rule: Rule) -> Rule:
        """Inscribe a rule. Returns it so this can be used as a decorator."""
        self.registry.register(rule)
        return rule

    def register_fact(
        self,
        value: object,
        key: type | TypeKey | None = None,
        *,
        deep: bool | None = None,
    ) -> Fact:
        """Make *value* known, keyed by its class unless *key* is given."""
        return self.registry.register_fact(
            value,
            key,
            deep=self._deep_copy_facts if deep is None else deep,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, target: type | TypeKey) -> SearchResult:
        """Search for a plan for *target*, consulting the plan cache if enabled."""
        key = type_key(target)
        if not self._cache_plans:
            return self._search.search(key)

        if self._cache_revision != self.registry.revision:
            self._cache.clear()
            self._cache_revision = self.registry.revision
        cached = self._cache.get(key)
        if cached is None:
            cached = self._search.search(key)
            self._cache[key] = cached
        return cached

    def find_plan(self, target: type | TypeKey) -> Plan | None:
        """Plan producing *target*, or None when there is no solution."""
        return self.search(target).plan

    def execute(self, plan: Plan) -> ValueStore:
        """Run *plan* against a fresh value store."""
        return self._executor.run(plan)

    def preserve(self, target: type | TypeKey) -> ValueStore | None:
        """Run the plan for *target* and keep every intermediate material."""
        plan = self.find_plan(target)
        if plan is None:
            return None
        return self.execute(plan)

    @overload
    def summon[T](self, target: type[T]) -> T | None: ...

    @overload
    def summon[T, D](self, target: type[T], default: D) -> T | D: ...

    @overload
    def summon(self, target: TypeKey, default: Any = None) -> Any: ...

    def summon(self, target: type | TypeKey, default: Any = None) -> Any:
        """Give me what I want, or *default* if it cannot be produced."""
        materials = self.preserve(target)
        if materials is None:
            logger.debug("Nothing to summon for %s", type_key(target).name)
            return default
        return materials.extract(target)
