"""Declarative field bindings.

A binding is attached to a dataclass field through its metadata::

    @dataclass
    class Config:
        token: str = field(default="", metadata={"env": "API_TOKEN,required"})

or, equivalently, ``token: str = env("API_TOKEN,required", default="")``.
The tag syntax is ``NAME`` or ``NAME,required``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from envbind.domain.errors import FieldNoBindingError

TAG_KEY = "env"
REQUIRED_FLAG = "required"


@dataclass(frozen=True)
class Binding:
    """The variable a field is bound to and whether it must be set."""

    variable: str
    required: bool = False


def parse_tag(tag: str) -> Binding:
    """Parse a ``NAME[,required]`` tag into a :class:`Binding`.

    Only an exact ``required`` second segment marks the field as
    mandatory; any other option is ignored. Nothing is trimmed.

    Raises:
        FieldNoBindingError: If *tag* is empty.

    Examples:
        >>> parse_tag("PORT")
        Binding(variable='PORT', required=False)
        >>> parse_tag("PORT,required")
        Binding(variable='PORT', required=True)
        >>> parse_tag("PORT,optional")
        Binding(variable='PORT', required=False)
    """
    if not tag:
        raise FieldNoBindingError
    parts = tag.split(",")
    required = len(parts) > 1 and parts[1] == REQUIRED_FLAG
    return Binding(variable=parts[0], required=required)


def env(tag: str, *, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
    """Shorthand for ``dataclasses.field(metadata={"env": tag}, ...)``.

    Extra keyword arguments (``default``, ``default_factory``...) are
    forwarded to :func:`dataclasses.field`.
    """
    merged = dict(metadata or {})
    merged[TAG_KEY] = tag
    return field(metadata=merged, **kwargs)
