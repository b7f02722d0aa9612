"""Executor — runs a plan against a fresh value store.

A plan's ordering guarantees every ingredient is present when its rule
runs. A missing ingredient therefore means the plan was built wrongly and
is raised as :class:`~summon.domain.errors.MissingMaterialError`.
"""

from __future__ import annotations

import logging

from summon.domain.rules import Rule
from summon.engine.plan import Plan
from summon.engine.store import ValueStore

logger = logging.getLogger(__name__)


class Executor:
    """Stateless plan runner."""

    def run(self, plan: Plan) -> ValueStore:
        """Apply every step of *plan* in order and return the populated store."""
        store = ValueStore()
        for rule in plan:
            self.apply(store, rule)
        logger.debug("Executed %d steps for %s", len(plan), plan.target.name)
        return store

    def apply(self, store: ValueStore, rule: Rule) -> None:
        """Feed *rule* its ingredients from *store* and insert its product."""
        inputs = [store.get(ingredient) for ingredient in rule.ingredients()]
        store.insert(rule.product(), rule.transmute(inputs))
