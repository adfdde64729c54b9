"""Command class shared by ``envbind read`` and ``envbind load``.

Each command declares sample invocations with ``examples=``. ``--help``
stays short and points at ``--examples``, which prints the samples plus
a reminder about the ``NAME_FILE`` fallback and exits.
"""

from __future__ import annotations

from typing import Any

import click

from envbind.infrastructure.resolver import FILE_SUFFIX

EXAMPLES_EPILOG = "Run with --examples for sample invocations."
FILE_FALLBACK_NOTE = f"Any NAME may also come from the file named by NAME{FILE_SUFFIX}."


class EnvCommand(click.Command):
    """Click command that carries sample invocations for ``--examples``."""

    def __init__(self, *args: Any, examples: str, **kwargs: Any) -> None:
        kwargs.setdefault("epilog", EXAMPLES_EPILOG)
        super().__init__(*args, **kwargs)
        self.examples = examples
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
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        click.echo(f"\n{FILE_FALLBACK_NOTE}")
        ctx.exit(0)
