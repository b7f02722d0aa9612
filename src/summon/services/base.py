"""BaseService — foundation for all summon services.

Every service receives a :class:`Tome` at construction time and only reads
from it; services never register rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from summon.services.result import ServiceResult

if TYPE_CHECKING:
    from summon.domain.keys import TypeKey
    from summon.engine.tome import Tome


class BaseService:
    """Base for service-layer classes.

    Usage::

        class PlanService(BaseService):
            def plan(self, target: str) -> ServiceResult:
                key = self._lookup(target)
                ...
    """

    def __init__(self, tome: Tome) -> None:
        self._tome = tome

    def _lookup(self, op: str, name: str) -> TypeKey | ServiceResult:
        """Resolve a type name, or return an ``UNKNOWN_TYPE`` failure.

        An ambiguous short name fails with the full names it could mean
        listed under ``candidates``.
        """
        registry = self._tome.registry
        key = registry.lookup(name)
        if key is not None:
            return key
        candidates = [k.name for k in registry.matching(name)]
        if candidates:
            return ServiceResult.failure(
                op,
                "UNKNOWN_TYPE",
                f"Type name {name!r} is ambiguous; use one of: {', '.join(candidates)}",
                name=name,
                candidates=candidates,
            )
        return ServiceResult.failure(
            op,
            "UNKNOWN_TYPE",
            f"No rule produces or consumes a type named {name!r}",
            name=name,
        )
