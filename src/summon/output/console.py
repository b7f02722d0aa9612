"""Rich Console factory and theme for summon output.

Consoles render into a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SUMMON_THEME = Theme(
    {
        "summon.ok": "bold green",
        "summon.error": "bold red",
        "summon.warning": "bold yellow",
        "summon.op": "bold cyan",
        "summon.key": "dim",
        "summon.type": "bold blue",
        "summon.rule": "bold",
        "summon.fact": "green",
        "summon.value": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SUMMON_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
