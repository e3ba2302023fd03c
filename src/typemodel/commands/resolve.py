"""Command group: resolve result types of operators, predicates and functions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from typemodel.commands._base import TypemodelGroup

if TYPE_CHECKING:
    from typemodel.commands._context import AppContext

_document_argument = click.argument(
    "document", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_base_option = click.option(
    "--base",
    "base_paths",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Base model document (repeatable, applied in order).",
)


@click.group(
    cls=TypemodelGroup,
    examples="""\
  typemodel resolve operation model.json Integer + Integer Long
  typemodel resolve predicate model.json String E String String
  typemodel resolve function model.json concat String String""",
)
def resolve() -> None:
    """Resolve result types without evaluating anything."""


@resolve.command()
@_document_argument
@click.argument("type_name")
@click.argument("operator")
@click.argument("operands", nargs=-1)
@_base_option
@click.pass_obj
def operation(
    app: AppContext,
    document: Path,
    type_name: str,
    operator: str,
    operands: tuple[str, ...],
    base_paths: tuple[Path, ...],
) -> None:
    """Resolve OPERATOR (name or code) through TYPE_NAME's resolver for OPERANDS."""
    app.emit(app.service.resolve_operation(document, type_name, operator, operands, base_paths))


@resolve.command()
@_document_argument
@click.argument("type_name")
@click.argument("predicate")
@click.argument("operands", nargs=-1)
@_base_option
@click.pass_obj
def predicate(
    app: AppContext,
    document: Path,
    type_name: str,
    predicate: str,
    operands: tuple[str, ...],
    base_paths: tuple[Path, ...],
) -> None:
    """Resolve PREDICATE (name or code) through TYPE_NAME's resolver for OPERANDS."""
    app.emit(app.service.resolve_predicate(document, type_name, predicate, operands, base_paths))


@resolve.command()
@_document_argument
@click.argument("function_name")
@click.argument("arguments", nargs=-1)
@_base_option
@click.pass_obj
def function(
    app: AppContext,
    document: Path,
    function_name: str,
    arguments: tuple[str, ...],
    base_paths: tuple[Path, ...],
) -> None:
    """Type-check FUNCTION_NAME called with ARGUMENTS (type names)."""
    app.emit(app.service.resolve_function(document, function_name, arguments, base_paths))
