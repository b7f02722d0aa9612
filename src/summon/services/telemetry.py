"""Timing spans for service operations.

``--verbose`` switches telemetry on for the current context. Each
``@traced`` service call then records a tree of spans (``search``,
``execute``, ``satisfiability`` ...), attaches it to ``ServiceResult.meta``
under ``"telemetry"``, and logs one ``<op>.complete`` event carrying the
milliseconds spent in each phase. With telemetry off a traced call costs a
single ContextVar read.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any

import structlog

from summon.services.result import ServiceResult

logger = structlog.get_logger("summon.telemetry")

_enabled: ContextVar[bool] = ContextVar("summon_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("summon_span", default=None)


@dataclass
class Span:
    """One timed phase of a service call, with its sub-phases."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    ended: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.ended is None:
            return 0.0
        return (self.ended - self.started) * 1000

    def end(self) -> None:
        self.ended = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def child(self, name: str) -> Span:
        span = Span(name)
        self.children.append(span)
        return span

    def phases(self) -> dict[str, float]:
        """Milliseconds per direct child, keyed ``<name>_ms``; repeats are summed."""
        totals: dict[str, float] = {}
        for child in self.children:
            key = f"{child.name}_ms"
            totals[key] = totals.get(key, 0.0) + child.duration_ms
        return {key: round(ms, 2) for key, ms in totals.items()}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = self.annotations
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a phase under the active span.

    Yields None when telemetry is off or no traced call is running, so
    callers guard annotations with ``if span is not None``.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return

    span = parent.child(name)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


def _close(span: Span, token: Token[Span | None]) -> None:
    span.end()
    _current_span.reset(token)


def _report(span: Span, op: str, *, ok: bool, error: str | None = None) -> None:
    fields: dict[str, Any] = {"duration_ms": round(span.duration_ms, 2), "ok": ok}
    if error is not None:
        fields["error"] = error
    logger.debug(f"{op}.complete", **fields, **span.phases())


def traced[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Record a span tree around a service method.

    A returned :class:`ServiceResult` gets the tree under
    ``meta["telemetry"]``; its ``op`` names the completion event. Exceptions
    are reported under the function name and re-raised.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        token = _current_span.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            _close(span, token)
            _report(span, func.__name__, ok=False, error=type(exc).__name__)
            raise
        _close(span, token)

        if not isinstance(result, ServiceResult):
            _report(span, func.__name__, ok=True)
            return result
        _report(span, result.op, ok=result.ok, error=result.error.code if result.error else None)
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn span recording on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The span a ``trace_span`` block would nest under, if any."""
    if not _enabled.get():
        return None
    return _current_span.get()
