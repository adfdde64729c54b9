"""Field type markers and decoder-key derivation.

Python has a single ``int`` and ``float``; fixed-width fields are declared
with the ``NewType`` markers below so the loader can range-check them::

    @dataclass
    class Limits:
        port: UInt16 = env("PORT", default=UInt16(8080))

A field annotation resolves to a :class:`FieldShape`: the shape kind
decides how the decoded value is assigned, the key selects the decoder.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NewType, Union, get_args, get_origin

Int8 = NewType("int8", int)
Int16 = NewType("int16", int)
Int32 = NewType("int32", int)
Int64 = NewType("int64", int)
UInt = NewType("uint", int)
UInt8 = NewType("uint8", int)
UInt16 = NewType("uint16", int)
UInt32 = NewType("uint32", int)
UInt64 = NewType("uint64", int)
Float32 = NewType("float32", float)
Float64 = NewType("float64", float)

SEQUENCE_PREFIX = "[]"


class Shape(StrEnum):
    """How a decoded value is written back into a field."""

    SCALAR = "scalar"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class FieldShape:
    kind: Shape
    key: str


def type_key(tp: Any) -> str:
    """Canonical decoder key for a single (non-wrapped) type.

    Builtins and ``NewType`` markers use their bare name (``str``,
    ``uint16``); other classes are module-qualified
    (``datetime.timedelta``). Anything else falls back to its ``repr``.
    """
    if isinstance(tp, NewType):
        return tp.__name__
    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__name__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def _strip_optional(annotation: Any) -> Any | None:
    """Return ``T`` for ``T | None`` / ``Optional[T]``, else None."""
    if get_origin(annotation) not in (Union, types.UnionType):
        return None
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(args) != 1 or len(get_args(annotation)) != 2:
        return None
    return args[0]


def resolve_shape(annotation: Any) -> FieldShape:
    """Classify a field annotation and derive its decoder key.

    ``list[T]`` yields ``"[]" + key(T)``; ``T | None`` yields the key of
    ``T`` with the optional wrapper stripped. An optional list is treated
    as a sequence: both leave the field untouched when the variable is
    absent.
    """
    inner = _strip_optional(annotation)
    if inner is not None:
        shape = resolve_shape(inner)
        if shape.kind is Shape.SEQUENCE:
            return shape
        return FieldShape(Shape.OPTIONAL, shape.key)

    if get_origin(annotation) is list:
        args = get_args(annotation)
        element = args[0] if args else Any
        return FieldShape(Shape.SEQUENCE, SEQUENCE_PREFIX + type_key(element))

    return FieldShape(Shape.SCALAR, type_key(annotation))
