"""ValueStore — per-execution container of produced materials.

Created empty for each execution, grown by exactly one insert per key,
and drained by a single extraction of the requested key.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, overload

from summon.domain.errors import (
    DuplicateMaterialError,
    MaterialTypeError,
    MissingMaterialError,
)
from summon.domain.keys import TypeKey, type_key


class ValueStore:
    """Type-keyed mapping of type-erased values."""

    def __init__(self) -> None:
        self._materials: dict[TypeKey, object] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._materials

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[TypeKey]:
        return iter(self._materials)

    def insert(self, key: TypeKey, value: object) -> None:
        """Store *value* under *key*.

        Raises:
            DuplicateMaterialError: If *key* already holds a value.
        """
        if key in self._materials:
            raise DuplicateMaterialError(key)
        self._materials[key] = value

    def get(self, key: TypeKey) -> object:
        """Return the value stored under *key* without removing it.

        Raises:
            MissingMaterialError: If nothing was stored under *key*.
        """
        try:
            return self._materials[key]
        except KeyError:
            raise MissingMaterialError(key) from None

    @overload
    def extract[T](self, target: type[T]) -> T: ...

    @overload
    def extract(self, target: TypeKey) -> Any: ...

    def extract(self, target: type | TypeKey) -> Any:
        """Remove and return the value for *target*, checked against its class.

        Raises:
            MissingMaterialError: If nothing was stored under the key.
            MaterialTypeError: If the stored value is not an instance of the
                key's class.
        """
        key = type_key(target)
        try:
            value = self._materials.pop(key)
        except KeyError:
            raise MissingMaterialError(key) from None
        if not key.accepts(value):
            raise MaterialTypeError(key, value)
        return value
