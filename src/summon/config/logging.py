"""Route summon's log records through structlog.

Engine code logs with plain ``logging.getLogger(__name__)``. The handler
installed by :func:`configure_logging` renders those records, and any
structlog events, as console lines or JSON on stderr. Records from
``summon.<layer>.*`` carry a ``layer`` field (``engine``, ``services`` ...)
so search and execution chatter can be filtered after the fact.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

HANDLER_NAME = "summon"


def _add_layer(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    parts = str(event_dict.get("logger", "")).split(".")
    if len(parts) > 2 and parts[0] == "summon":
        event_dict["layer"] = parts[1]
    return event_dict


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_layer,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _output_chain(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the summon stderr handler on the root logger.

    Calling it again replaces the previous summon handler; handlers
    installed by anything else are left alone.

    Args:
        verbose: Show ``summon.*`` DEBUG records (plan search steps,
            registrations, spellbook loads). Otherwise WARNING and up.
        log_json: One JSON object per line instead of console lines.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_output_chain(log_json),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger("summon").setLevel(logging.DEBUG if verbose else logging.WARNING)
