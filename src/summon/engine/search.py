"""Plan search — recursive backward chaining over the registry.

For a target key, candidates are tried in registry order (fewest
ingredients first). A candidate succeeds when every ingredient resolves;
its ingredient sub-plans are merged first-wins and the candidate appended.
The first successful candidate is final for that node: backtracking is
local to the node whose ingredient failed.

Local-only backtracking is sound here because sub-goals share no mutable
state: whether an ingredient resolves never depends on how a sibling
ingredient was resolved.

Cycles are pruned: a key already on the current resolution path fails
as a sub-goal, so the search always terminates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from summon.domain.keys import TypeKey, type_key
from summon.engine.plan import Plan, Recipe
from summon.engine.registry import Registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search, with diagnostics for failed branches.

    Attributes:
        target: The requested key.
        plan: The plan found, or None when the target is unsatisfiable.
        missing: Keys encountered that have no candidate rules.
        cycles: Resolution paths that closed a cycle, ending with the
            repeated key.
        depth_exceeded: Whether the depth budget cut any branch.
    """

    target: TypeKey
    plan: Plan | None
    missing: tuple[TypeKey, ...] = ()
    cycles: tuple[tuple[TypeKey, ...], ...] = ()
    depth_exceeded: bool = False

    @property
    def ok(self) -> bool:
        return self.plan is not None


@dataclass
class _Trace:
    path: list[TypeKey] = field(default_factory=list)
    missing: dict[TypeKey, None] = field(default_factory=dict)
    cycles: list[tuple[TypeKey, ...]] = field(default_factory=list)
    depth_exceeded: bool = False


class PlanSearch:
    """Depth-first plan search against a registry.

    Args:
        registry: Rules to search.
        detect_cycles: Prune keys already on the resolution path. When
            disabled, a cyclic registry recurses until ``RecursionError``.
        max_depth: Optional bound on resolution depth (the target is depth 0).
    """

    def __init__(
        self,
        registry: Registry,
        *,
        detect_cycles: bool = True,
        max_depth: int | None = None,
    ) -> None:
        self._registry = registry
        self._detect_cycles = detect_cycles
        self._max_depth = max_depth

    def find_plan(self, target: type | TypeKey) -> Plan | None:
        """Return a plan producing *target*, or None if there is no solution."""
        return self.search(target).plan

    def search(self, target: type | TypeKey) -> SearchResult:
        """Search for *target* and report why branches failed."""
        key = type_key(target)
        trace = _Trace()
        recipe = self._research(key, trace)
        plan = recipe.freeze(key) if recipe is not None else None
        if plan is None:
            logger.debug("No solution for %s", key.name)
        else:
            logger.debug("Found plan for %s with %d steps", key.name, len(plan))
        return SearchResult(
            target=key,
            plan=plan,
            missing=tuple(trace.missing),
            cycles=tuple(trace.cycles),
            depth_exceeded=trace.depth_exceeded,
        )

    def _research(self, key: TypeKey, trace: _Trace) -> Recipe | None:
        candidates = self._registry.candidates(key)
        if not candidates:
            trace.missing[key] = None
            return None
        if self._detect_cycles and key in trace.path:
            cycle = (*trace.path[trace.path.index(key) :], key)
            trace.cycles.append(cycle)
            logger.debug("Pruned cycle: %s", " -> ".join(k.name for k in cycle))
            return None
        if self._max_depth is not None and len(trace.path) > self._max_depth:
            trace.depth_exceeded = True
            return None

        trace.path.append(key)
        try:
            for rule in candidates:
                logger.debug("Trying %s for %s", rule.name, key.name)
                recipe = Recipe()
                for ingredient in rule.ingredients():
                    sub = self._research(ingredient, trace)
                    if sub is None:
                        break
                    recipe.join(sub)
                else:
                    recipe.add(rule)
                    return recipe
            return None
        finally:
            trace.path.pop()
