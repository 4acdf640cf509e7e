"""Command: hydrate a page with village data."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import click

from cloverville.commands._base import CloverCommand

if TYPE_CHECKING:
    from cloverville.commands._context import AppContext


@click.command(
    cls=CloverCommand,
    examples="""\
  cloverville render pages/index.html
  cloverville render pages/index.html --output build/index.html
  cloverville render pages/market.html --data https://example.org/village.json""",
)
@click.argument("page", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--data", "source", default=None, help="Data source path or URL (overrides config).")
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write hydrated HTML here (omit to print to stdout).",
)
@click.pass_obj
def render(app: AppContext, page: Path, source: str | None, output_file: Path | None) -> None:
    """Fill PAGE's containers and widgets from the village data."""
    from cloverville.infrastructure.dom import Document
    from cloverville.services.page import PageService

    document = Document.from_html(page.read_text(encoding="utf-8"))
    hydrate = functools.partial(
        PageService(app.settings).hydrate,
        document,
        page_location=page,
        source=source,
    )
    result = anyio.run(hydrate)

    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(document.to_html(), encoding="utf-8")
        data = {**result.data, "output_file": str(output_file)}
        app.emit(result.model_copy(update={"data": data}))
    else:
        # Pipe-friendly: raw HTML to stdout
        app.emit_warnings(result)
        click.echo(document.to_html(), nl=False)
