"""RuleGraph — NetworkX view of a registry for static analysis.

Nodes are type keys; each rule contributes one edge per ingredient,
pointing from the ingredient to the rule's product. Built on demand,
never cached: the registry may still grow between builds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from summon.domain.keys import TypeKey
    from summon.engine.registry import Registry

type _Graph = nx.MultiDiGraph


def _canonical(cycle: list[TypeKey]) -> list[str]:
    """Rotate a cycle so it starts at its smallest name, for stable output."""
    names = [k.name for k in cycle]
    start = names.index(min(names))
    return names[start:] + names[:start]


class RuleGraph:
    """Ingredient -> product dependency graph."""

    def __init__(self, graph: _Graph) -> None:
        self._graph = graph

    @classmethod
    def from_registry(cls, registry: Registry) -> RuleGraph:
        g: _Graph = nx.MultiDiGraph()
        for rule in registry.rules():
            product = rule.product()
            g.add_node(product)
            for ingredient in rule.ingredients():
                g.add_edge(ingredient, product, rule=rule.name)
        return cls(g)

    @property
    def graph(self) -> _Graph:
        return self._graph

    def cycles(self) -> list[list[str]]:
        """Elementary cycles as key-name lists, sorted."""
        found = [_canonical(cycle) for cycle in nx.simple_cycles(self._graph)]
        unique = {tuple(c) for c in found}
        return [list(c) for c in sorted(unique)]

    def dependencies(self, key: TypeKey) -> list[str]:
        """Names of every key *key* could transitively be derived from."""
        if key not in self._graph:
            return []
        return sorted(k.name for k in nx.ancestors(self._graph, key))
