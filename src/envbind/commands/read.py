"""Command: resolve a single variable (``NAME`` or ``NAME_FILE``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from envbind.commands._base import EnvCommand

if TYPE_CHECKING:
    from envbind.commands._context import AppContext


@click.command(
    cls=EnvCommand,
    examples="""\
  envbind read DATABASE_URL
  envbind read DB_PASSWORD --raw
  DB_PASSWORD_FILE=/run/secrets/db envbind --json read DB_PASSWORD""",
)
@click.argument("name")
@click.option("--raw", is_flag=True, help="Print only the value, without a trailing newline.")
@click.pass_obj
def read(app: AppContext, name: str, raw: bool) -> None:
    """Resolve NAME, falling back to the file named by NAME_FILE."""
    from envbind.services.load import LoadService

    result = LoadService().read_variable(name)
    if raw and result.ok:
        click.echo(result.data["value"], nl=False)
        return
    app.emit(result)
