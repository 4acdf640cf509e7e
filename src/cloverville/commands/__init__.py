"""Subcommand modules for cloverville.

Provides register_commands() which uses deferred imports to keep
``cloverville --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from cloverville.commands.inspect_cmd import inspect_cmd
    from cloverville.commands.render import render

    cli.add_command(render)
    cli.add_command(inspect_cmd)
