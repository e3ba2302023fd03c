"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy ModelService initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from typemodel.output.formatters import format_result

if TYPE_CHECKING:
    from typemodel.config.settings import TypemodelSettings
    from typemodel.services.model import ModelService
    from typemodel.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is created on first use so ``--help`` and ``--version``
    never trigger plugin discovery.
    """

    def __init__(self, settings: TypemodelSettings) -> None:
        self.settings = settings
        self._service: ModelService | None = None

        from typemodel.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ModelService:
        """The model service (created lazily on first access)."""
        if self._service is None:
            from typemodel.services.model import ModelService

            self._service = ModelService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
