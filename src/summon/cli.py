"""Root CLI group for summon with global flags and command registration."""

from __future__ import annotations

import click

from summon import __version__
from summon.commands import register_commands
from summon.commands._base import SummonGroup
from summon.commands._context import AppContext
from summon.config.settings import SummonSettings


@click.group(cls=SummonGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="summon")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs and telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-s",
    "--spellbook",
    "spellbooks",
    multiple=True,
    help="Spellbook to load, as module or module:function. Repeatable.",
)
@click.option("--no-plugins", is_flag=True, help="Skip entry-point spellbook plugins.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    spellbooks: tuple[str, ...],
    no_plugins: bool,
) -> None:
    """summon — resolve a type from rules and facts, then produce it."""
    settings = SummonSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_plugins=no_plugins,
        **({"spellbooks": list(spellbooks)} if spellbooks else {}),
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
