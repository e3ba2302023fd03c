"""Root CLI group for typemodel with global flags and command registration."""

from __future__ import annotations

import click

from typemodel import __version__
from typemodel.commands import register_commands
from typemodel.commands._context import AppContext
from typemodel.config.settings import TypemodelSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="typemodel")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--strict", is_flag=True, help="Fail on type names missing from the model.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    strict: bool,
    config_path: str | None,
) -> None:
    """typemodel — inspect domain type models and resolve result types."""
    ctx.ensure_object(dict)
    settings = TypemodelSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        strict=strict,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
