"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from summon.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from summon.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if result.op == "conjure":
        return str(result.data.get("value", ""))
    if result.op == "plan":
        return "\n".join(step["rule"] for step in result.data.get("steps", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="summon.ok"), Text(f"  {result.op}", style="summon.op"))


def _render_telemetry(console: Console, result: ServiceResult) -> None:
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    console.print(Text("telemetry", style="summon.key"))
    console.print(json.dumps(telemetry, indent=2))


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("WARNING", style="summon.warning"), warning)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    data = result.data
    console.print(
        Text("target ", style="summon.key"),
        Text(str(data.get("target", "")), style="summon.type"),
        Text(f"  ({data.get('count', 0)} steps)", style="summon.key"),
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Rule", style="summon.rule")
    table.add_column("Product", style="summon.type")
    if verbose:
        table.add_column("Ingredients")
    for step in data.get("steps", []):
        row = [str(step["index"]), step["rule"], step["product"]]
        if verbose:
            row.append(", ".join(step["ingredients"]) or "-")
        table.add_row(*row)
    console.print(table)
    if verbose:
        _render_telemetry(console, result)


def _render_conjure(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    data = result.data
    console.print(
        Text(str(data.get("type", "")), style="summon.type"),
        Text(" = "),
        Text(str(data.get("value", "")), style="summon.value"),
        sep="",
    )
    if verbose:
        console.print(Text(f"{data.get('steps', 0)} steps executed", style="summon.key"))
        _render_telemetry(console, result)


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Product", style="summon.type")
    table.add_column("Rule", style="summon.rule")
    table.add_column("Ingredients")
    for item in result.data.get("items", []):
        table.add_row(item["product"], item["rule"], ", ".join(item["ingredients"]) or "-")
    console.print(table)
    console.print(Text(f"{result.data.get('count', 0)} rules", style="summon.key"))


def _render_check(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    data = result.data
    console.print(
        Text(
            f"{data.get('count', 0)} rules, {data.get('products', 0)} products, "
            f"{len(data.get('unsatisfiable', []))} unsatisfiable, "
            f"{len(data.get('cycles', []))} cycles",
            style="summon.key",
        )
    )
    _render_warnings(console, result)
    if verbose:
        for item in data.get("unsatisfiable", []):
            missing = ", ".join(item["missing"]) or "-"
            console.print(f"  {item['product']}: missing {missing}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        console.print(Text(f"  {key}:", style="summon.key"), str(value))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    code = f" [{error.code}]" if error else ""
    console.print(
        Text("ERROR", style="summon.error"),
        Text(f"  {result.op}{code}", style="summon.op"),
        Text(f" {message}"),
    )
    if verbose and error and error.detail:
        console.print(json.dumps(error.detail, indent=2))


_OP_RENDERERS: dict[str, Callable[..., Any]] = {
    "plan": _render_plan,
    "conjure": _render_conjure,
    "rules": _render_rules,
    "check": _render_check,
}
