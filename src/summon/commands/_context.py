"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the Tome lazily so ``--help`` and
``--version`` never import spellbooks.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click

from summon.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from summon.config.settings import SummonSettings
    from summon.engine.tome import Tome
    from summon.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Settings plus the lazily-built Tome, shared by every command."""

    def __init__(self, settings: SummonSettings) -> None:
        self.settings = settings
        self._tome: Tome | None = None
        self.load_warnings: list[str] = []

        from summon.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from summon.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def tome(self) -> Tome:
        """The configured Tome (built and inscribed on first access)."""
        if self._tome is None:
            self._tome = self._build_tome()
        return self._tome

    def _build_tome(self) -> Tome:
        from summon.domain.errors import SpellbookError
        from summon.engine.tome import Tome
        from summon.infrastructure.spellbook import load_spellbook

        tome = Tome.from_settings(self.settings)

        root = str(self.settings.project_root)
        if root not in sys.path:
            sys.path.insert(0, root)

        for reference in self.settings.spellbook_references:
            try:
                load_spellbook(reference, tome)
            except SpellbookError as exc:
                raise click.ClickException(str(exc)) from exc

        if self.settings.use_plugins:
            from summon.plugins.manager import PluginManager

            manager = PluginManager()
            names = manager.discover_and_load()
            self.load_warnings.extend(manager.inscribe(tome))
            logger.debug("Spellbook plugins: %s", names)

        return tome

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr outside JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        if self.load_warnings and not settings.json_output:
            for warning in self.load_warnings:
                click.echo(f"WARNING: {warning}", err=True)

        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and result.op != "check":
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
