"""Command base class with an ``--examples`` flag.

Usage examples live outside ``--help`` so the help text stays short;
``cloverville render --examples`` prints them and exits.
"""

from __future__ import annotations

from typing import Any

import click


class CloverCommand(click.Command):
    """Click command that grows an eager ``--examples`` flag when given examples."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
