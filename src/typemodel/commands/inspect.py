"""Command: summarize an assembled type model."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from typemodel.commands._base import TypemodelCommand

if TYPE_CHECKING:
    from typemodel.commands._context import AppContext


@click.command(
    "inspect",
    cls=TypemodelCommand,
    examples="""\
  typemodel inspect model.json
  typemodel inspect extension.json --base core.json
  typemodel --json inspect model.json""",
)
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--base",
    "base_paths",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Base model document to layer DOCUMENT on (repeatable, applied in order).",
)
@click.pass_obj
def inspect_cmd(app: AppContext, document: Path, base_paths: tuple[Path, ...]) -> None:
    """List the types, functions and resolver coverage of DOCUMENT."""
    app.emit(app.service.inspect(document, base_paths))
