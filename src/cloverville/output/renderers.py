"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cloverville.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cloverville.services.result import ServiceResult


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


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="clover.ok")
    op = Text(f"  {result.op}", style="clover.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="clover.key")
    if key in ("source", "output_file"):
        v = Text(str(value), style="clover.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _section_cell(count: int | None) -> Text:
    """Cell for a section outcome: card count, placeholder, or skipped."""
    if count is None:
        return Text("skipped", style="clover.skipped")
    if count == 0:
        return Text("placeholder", style="clover.placeholder")
    return Text(str(count), style="clover.count")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="clover.error")
    op = Text(f"  {result.op}", style="clover.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Page renderers ────────────────────────────────────────────────────


def _render_page(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render render_page results: load outcome, widgets, section table."""
    d = result.data
    _status_line(console, result)
    for key in ("source", "output_file", "navigation", "loaded"):
        if key in d:
            _field(console, key, d[key])

    widgets = d.get("widgets")
    if widgets:
        updated = [name for name, changed in widgets.items() if changed]
        _field(console, "widgets", ", ".join(updated) or "none")

    sections = d.get("sections")
    if sections:
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Section")
        table.add_column("Cards", justify="right")
        for key, count in sections.items():
            table.add_row(key.replace("_", " "), _section_cell(count))
        console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render inspect_data results: entry counts and points progress."""
    d = result.data
    _status_line(console, result)
    _field(console, "source", d.get("source", ""))

    progress = d.get("progress") or {}
    if progress:
        _field(console, "points", progress.get("label", ""))
        _field(console, "progress", f"{progress.get('percent', 0):.1f}%")

    counts = d.get("counts") or {}
    if counts:
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Field")
        table.add_column("Entries", justify="right")
        for key, count in counts.items():
            if key == "communityPoints":
                continue
            cell = Text("absent", style="clover.skipped") if count is None else Text(str(count))
            table.add_row(key, cell)
        console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "render_page": _render_page,
    "inspect_data": _render_inspect,
}
