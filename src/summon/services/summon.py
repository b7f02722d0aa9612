"""SummonService — plan, conjure, list, and check over a Tome.

Unsatisfiable requests are reported as failed results with one of the
codes ``NO_SOLUTION``, ``CYCLIC_DEPENDENCY``, or ``DEPTH_EXCEEDED``.
Invariant violations raised while executing a plan propagate unchanged.
"""

from __future__ import annotations

from typing import Any

from summon.engine.search import PlanSearch, SearchResult
from summon.infrastructure.graph import RuleGraph
from summon.services.base import BaseService
from summon.services.result import ServiceResult
from summon.services.telemetry import trace_span, traced


def _unsatisfied(op: str, outcome: SearchResult) -> ServiceResult:
    detail: dict[str, Any] = {
        "target": outcome.target.name,
        "missing": [k.name for k in outcome.missing],
        "cycles": [[k.name for k in cycle] for cycle in outcome.cycles],
        "depth_exceeded": outcome.depth_exceeded,
    }
    name = outcome.target.short_name
    if outcome.cycles:
        code = "CYCLIC_DEPENDENCY"
        message = f"Cannot summon {name}: every route runs through a cycle or a missing type"
    elif outcome.depth_exceeded:
        code = "DEPTH_EXCEEDED"
        message = f"Cannot summon {name} within the configured search depth"
    else:
        code = "NO_SOLUTION"
        message = f"Cannot summon {name}: no rule chain supplies all ingredients"
    return ServiceResult.failure(op, code, message, **detail)


class SummonService(BaseService):
    """Read-only operations over the rules of a Tome."""

    @traced
    def plan(self, target: str) -> ServiceResult:
        """Find the plan for *target* without executing it."""
        op = "plan"
        key = self._lookup(op, target)
        if isinstance(key, ServiceResult):
            return key

        with trace_span("search") as span:
            outcome = self._tome.search(key)
            if span is not None:
                span.annotate("found", outcome.ok)

        if outcome.plan is None:
            return _unsatisfied(op, outcome)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "target": key.name,
                "count": len(outcome.plan),
                "steps": outcome.plan.describe(),
            },
        )

    @traced
    def conjure(self, target: str) -> ServiceResult:
        """Plan, execute, and extract *target*."""
        op = "conjure"
        key = self._lookup(op, target)
        if isinstance(key, ServiceResult):
            return key

        with trace_span("search"):
            outcome = self._tome.search(key)
        if outcome.plan is None:
            return _unsatisfied(op, outcome)

        with trace_span("execute") as span:
            store = self._tome.execute(outcome.plan)
            value = store.extract(key)
            if span is not None:
                span.annotate("steps", len(outcome.plan))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "target": key.name,
                "type": type(value).__qualname__,
                "value": repr(value),
                "steps": len(outcome.plan),
            },
        )

    @traced
    def list_rules(self, product: str | None = None) -> ServiceResult:
        """List registered rules in preference order, optionally for one product."""
        op = "rules"
        registry = self._tome.registry
        if product is None:
            rules = list(registry.rules())
        else:
            key = self._lookup(op, product)
            if isinstance(key, ServiceResult):
                return key
            rules = list(registry.candidates(key))

        items = [
            {
                "product": rule.product().name,
                "rule": rule.name,
                "ingredients": [k.name for k in rule.ingredients()],
            }
            for rule in rules
        ]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    @traced
    def check(self) -> ServiceResult:
        """Report cycles and products that can never be summoned.

        Satisfiability always prunes cycles, whatever the tome's own
        ``detect_cycles`` setting, so a cyclic registry is reported rather
        than recursed into.
        """
        op = "check"
        registry = self._tome.registry
        warnings: list[str] = []

        with trace_span("cycles"):
            cycles = RuleGraph.from_registry(registry).cycles()
        for cycle in cycles:
            warnings.append(f"Cycle: {' -> '.join([*cycle, cycle[0]])}")

        unsatisfiable: list[dict[str, Any]] = []
        searcher = PlanSearch(registry, max_depth=self._tome.max_depth)
        with trace_span("satisfiability") as span:
            for key in registry.products():
                outcome = searcher.search(key)
                if outcome.ok:
                    continue
                missing = [k.name for k in outcome.missing]
                unsatisfiable.append({"product": key.name, "missing": missing})
                warnings.append(f"Unsatisfiable: {key.name}")
            if span is not None:
                span.annotate("unsatisfiable", len(unsatisfiable))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(registry),
                "products": len(registry.products()),
                "unsatisfiable": unsatisfiable,
                "cycles": cycles,
            },
            warnings=warnings,
        )
