"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from envbind.output.console import create_console, get_output, style_for_source

if TYPE_CHECKING:
    from rich.console import Console

    from envbind.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="env.ok")
    op = Text(f"  {result.op}", style="env.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="env.key")
    if key in ("name", "variable"):
        v = Text(str(value), style="env.variable")
    elif key == "source":
        v = Text(str(value), style=style_for_source(value))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="env.error")
    op = Text(f"  {result.op}", style="env.op")
    sep = Text(" - ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_read(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("name", "source", "value"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_load(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "target", result.data.get("target", ""))

    fields: dict[str, dict[str, Any]] = result.data.get("fields", {})
    if not fields:
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", no_wrap=True)
    table.add_column("Variable", style="env.variable", no_wrap=True)
    table.add_column("Source")
    table.add_column("Value")
    if verbose:
        table.add_column("Required", style="dim")

    for name, info in fields.items():
        source = info.get("source")
        value = info.get("value")
        row: list[Text] = [
            Text(name),
            Text(str(info.get("variable", ""))),
            Text(source or "unset", style=style_for_source(source)),
            Text(value if isinstance(value, str) else json.dumps(value)),
        ]
        if verbose:
            row.append(Text("yes" if info.get("required") else "no"))
        table.add_row(*row)
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "read": _render_read,
    "load": _render_load,
}
