"""Subcommand modules for envbind.

Provides register_commands() which uses deferred imports to keep
``envbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from envbind.commands.load import load
    from envbind.commands.read import read

    cli.add_command(read)
    cli.add_command(load)
