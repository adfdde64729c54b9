"""Rich Console factory and theme for envbind output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ENVBIND_THEME = Theme(
    {
        "env.ok": "bold green",
        "env.error": "bold red",
        "env.op": "bold cyan",
        "env.key": "dim",
        "env.variable": "bold blue",
        "env.source.env": "green",
        "env.source.file": "magenta",
        "env.unset": "dim yellow",
    }
)

_SOURCE_STYLES: dict[str | None, str] = {
    "env": "env.source.env",
    "file": "env.source.file",
    None: "env.unset",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ENVBIND_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_source(source: str | None) -> str:
    """Return the Rich style name for a resolution source."""
    return _SOURCE_STYLES.get(source, "")
