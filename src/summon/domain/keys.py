"""Type keys — opaque, interned tokens identifying semantic types.

Every value flowing through the engine is tagged with exactly one key.
The engine only compares and hashes keys; the class a key was minted for
is consulted solely when a value is finally extracted.

INVARIANT: ``type_key(cls) is type_key(cls)`` for the lifetime of the process.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field

_lock = threading.Lock()
_serials = itertools.count(1)
_interned: dict[type, TypeKey] = {}


@dataclass(frozen=True)
class TypeKey:
    """Process-wide unique token for one class.

    Attributes:
        serial: Registry-assigned number; the identity of the key.
        name: Display name (``module.QualName``).
        cls: The class the key was minted for.
    """

    serial: int
    name: str
    cls: type = field(compare=False, repr=False)

    @property
    def short_name(self) -> str:
        """Qualified class name without the module prefix."""
        return self.cls.__qualname__

    def accepts(self, value: object) -> bool:
        """Whether *value* conforms to the class behind this key."""
        return isinstance(value, self.cls)

    def __str__(self) -> str:
        return self.name


def type_key(cls: type | TypeKey) -> TypeKey:
    """Return the interned key for *cls*, minting it on first use.

    Existing keys pass through unchanged so callers may accept either.

    Raises:
        TypeError: If *cls* is neither a class nor a :class:`TypeKey`.
    """
    if isinstance(cls, TypeKey):
        return cls
    if not isinstance(cls, type):
        msg = f"type keys can only be minted for classes, got {cls!r}"
        raise TypeError(msg)
    key = _interned.get(cls)
    if key is not None:
        return key
    with _lock:
        key = _interned.get(cls)
        if key is None:
            key = TypeKey(
                serial=next(_serials),
                name=f"{cls.__module__}.{cls.__qualname__}",
                cls=cls,
            )
            _interned[cls] = key
    return key


def key_of(value: object) -> TypeKey:
    """Key of the runtime class of *value*."""
    return type_key(type(value))
