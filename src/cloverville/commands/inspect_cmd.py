"""Command: load the village data and summarize it."""

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
    "inspect",
    cls=CloverCommand,
    examples="""\
  cloverville inspect --data village.json
  cloverville inspect --page pages/index.html
  cloverville --json inspect --data https://example.org/village.json""",
)
@click.option("--data", "source", default=None, help="Data source path or URL (overrides config).")
@click.option(
    "--page",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Resolve the data source relative to this page.",
)
@click.pass_obj
def inspect_cmd(app: AppContext, source: str | None, page: Path | None) -> None:
    """Report entry counts and points progress from the village data."""
    from cloverville.services.page import PageService

    result = anyio.run(functools.partial(PageService(app.settings).inspect, page, source=source))
    app.emit(result)
