"""Authoring sugar for building rules.

``circle`` turns an annotated function into a :class:`FunctionRule`;
``fusion`` declares a tag-to-tag conversion between marker classes.
Neither is known to the engine: both only produce conforming rule objects.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from typing import Any, overload

from summon.domain.keys import TypeKey, type_key
from summon.domain.rules import FunctionRule

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _rule_from_signature(func: Callable[..., Any], name: str | None) -> FunctionRule:
    label = getattr(func, "__qualname__", repr(func))
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError) as exc:
        msg = f"cannot resolve annotations of {label}: {exc}"
        raise TypeError(msg) from exc

    ingredients: list[type] = []
    for param in inspect.signature(func).parameters.values():
        if param.kind not in _POSITIONAL:
            msg = f"{label}: parameter {param.name!r} must be positional"
            raise TypeError(msg)
        if param.name not in hints:
            msg = f"{label}: parameter {param.name!r} needs a type annotation"
            raise TypeError(msg)
        ingredients.append(hints[param.name])

    if "return" not in hints:
        msg = f"{label}: a return annotation naming the product is required"
        raise TypeError(msg)
    return FunctionRule(func, ingredients, hints["return"], name=name)


@overload
def circle(func: Callable[..., Any], /) -> FunctionRule: ...


@overload
def circle(*, name: str | None = None) -> Callable[[Callable[..., Any]], FunctionRule]: ...


def circle(
    func: Callable[..., Any] | None = None,
    /,
    *,
    name: str | None = None,
) -> FunctionRule | Callable[[Callable[..., Any]], FunctionRule]:
    """Build a rule from a function's annotations.

    Positional parameter annotations become the ingredients, in order; the
    return annotation becomes the product::

        @circle
        def double(n: Normal) -> Double:
            return Double(n.value * 2)

    Raises:
        TypeError: If a parameter or the return value is not annotated.
    """
    if func is not None:
        return _rule_from_signature(func, name)

    def decorate(f: Callable[..., Any]) -> FunctionRule:
        return _rule_from_signature(f, name)

    return decorate


def fusion(*ingredients: type | TypeKey, product: type) -> FunctionRule:
    """Conversion between marker classes: given the ingredients, make ``product()``.

    Useful for plain logic: ``fusion(A, B, product=C)`` reads "A and B imply C".
    """

    def fuse(*_inputs: object) -> object:
        return product()

    label = ", ".join(type_key(i).short_name for i in ingredients)
    return FunctionRule(fuse, ingredients, product, name=f"{label} => {product.__qualname__}")
