"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from typemodel.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from typemodel.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="tm.ok"), Text(f"  {result.op}", style="tm.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "tm.result" if key == "result" else ""
    console.print(Text(f"  {key}: ", style="tm.key"), Text(str(value), style=style))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="tm.error")
    op = Text(f"  {result.op}", style="tm.op")
    console.print(label, op, " — ", Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value) or "-"
        _field(console, key, value)


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    operation_resolvers: dict[str, list[str]] = result.data.get("operation_resolvers", {})
    predicate_resolvers: dict[str, list[str]] = result.data.get("predicate_resolvers", {})

    types = Table(title="Types", show_header=True, pad_edge=False, expand=False)
    types.add_column("Name", style="tm.name", no_wrap=True)
    types.add_column("Kind")
    types.add_column("Operators")
    types.add_column("Predicates")
    if verbose:
        types.add_column("Documentation", style="dim")
    for item in result.data.get("types", []):
        name = item["name"]
        row = [
            Text(name),
            Text(item["kind"], style=style_for_kind(item["kind"])),
            _coverage(item["operators"], operation_resolvers.get(name, [])),
            _coverage(item["predicates"], predicate_resolvers.get(name, [])),
        ]
        if verbose:
            row.append(Text(item.get("documentation") or ""))
        types.add_row(*row)
    console.print(types)

    functions = Table(title="Functions", show_header=True, pad_edge=False, expand=False)
    functions.add_column("Signature", style="tm.name")
    functions.add_column("Result")
    functions.add_column("Resolver", style="dim")
    for item in result.data.get("functions", []):
        functions.add_row(
            Text(item["signature"]), Text(item.get("result_type") or "-"), item["resolver"]
        )
    console.print(functions)


def _coverage(enabled: list[str], resolved: list[str]) -> str:
    """List enabled entries; those without a resolver are marked with ``?``."""
    names = sorted(set(enabled) | set(resolved))
    return " ".join(name if name in resolved else f"{name}?" for name in names) or "-"


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "inspect": _render_inspect,
}
