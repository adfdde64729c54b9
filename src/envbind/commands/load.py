"""Command: populate a dataclass from the environment and report it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envbind.commands._base import EnvCommand

if TYPE_CHECKING:
    from envbind.commands._context import AppContext


@click.command(
    cls=EnvCommand,
    examples="""\
  envbind load myapp.config:Config
  envbind load myapp.config:Config --reveal
  envbind --json load myapp.config:settings""",
)
@click.argument("target")
@click.option("--reveal", is_flag=True, help="Show loaded values instead of masking them.")
@click.pass_obj
def load(app: AppContext, target: str, reveal: bool) -> None:
    """Populate TARGET (``module:Class`` or ``module:instance``) and report its fields."""
    from envbind.services.load import LoadService

    app.emit(LoadService().load_target(target, reveal=reveal))
