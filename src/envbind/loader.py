"""Populate dataclass instances from the environment.

Each field opts in with an ``env`` tag in its metadata (see
:mod:`envbind.domain.tags`). Fields are processed in declaration order:

1. an unsettable field (leading underscore, frozen dataclass) fails;
2. an untagged field is skipped;
3. the variable is resolved (``NAME`` then ``NAME_FILE``); a missing
   variable fails when required and is otherwise left alone;
4. the value is decoded through :data:`~envbind.domain.decoders.DECODERS`;
5. the decoded value is written back.

INVARIANT: The first failure stops population. Fields assigned before it
keep their new values, the failing field and all later ones are untouched.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
from typing import Any, TypeVar, get_type_hints

from envbind.domain.decoders import DECODERS
from envbind.domain.errors import (
    FieldDecodeError,
    FieldNoBindingError,
    FieldRequiredError,
    FieldUnexportedError,
    FieldUnsupportedTypeError,
    NotPointerError,
    NotStructPointerError,
)
from envbind.domain.tags import TAG_KEY, Binding, parse_tag
from envbind.domain.types import FieldShape, Shape, resolve_shape
from envbind.infrastructure.resolver import read_source

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclasses.dataclass(frozen=True)
class FieldPlan:
    """Everything about a field that does not depend on the environment."""

    name: str
    settable: bool
    binding: Binding | None
    shape: FieldShape | None


@functools.lru_cache(maxsize=None)
def plan_fields(cls: type) -> tuple[FieldPlan, ...]:
    """Compute (once per class) the ordered field plans of dataclass *cls*."""
    try:
        hints = get_type_hints(cls)
    except NameError:
        logger.debug("Unresolvable annotations on %s", cls.__qualname__, exc_info=True)
        hints = {}

    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    plans: list[FieldPlan] = []
    for field in dataclasses.fields(cls):
        try:
            binding: Binding | None = parse_tag(field.metadata.get(TAG_KEY, ""))
        except FieldNoBindingError:
            binding = None
        shape = None
        if binding is not None:
            shape = resolve_shape(hints.get(field.name, field.type))
        plans.append(
            FieldPlan(
                name=field.name,
                settable=not (frozen or field.name.startswith("_")),
                binding=binding,
                shape=shape,
            )
        )
    return tuple(plans)


def _assign(target: Any, name: str, shape: FieldShape, value: Any) -> None:
    if shape.kind is Shape.SEQUENCE:
        # Always a fresh list: the previous one is replaced, never extended
        # or shared with the decoder's result.
        setattr(target, name, list(value))
    else:
        setattr(target, name, value)


def read_struct(target: _T) -> _T:
    """Fill the tagged fields of dataclass instance *target* from the environment.

    Returns *target* itself so construction and loading can be chained::

        config = read_struct(Config())

    Raises:
        NotPointerError: *target* is None or a class instead of an instance.
        NotStructPointerError: *target* is not a dataclass instance.
        FieldUnexportedError: A field cannot be assigned.
        FieldRequiredError: A required variable is not set.
        FieldUnsupportedTypeError: No decoder exists for a field's type.
        FieldDecodeError: A value could not be decoded.
    """
    if target is None or isinstance(target, type):
        raise NotPointerError
    if not dataclasses.is_dataclass(target):
        raise NotStructPointerError

    for plan in plan_fields(type(target)):
        if not plan.settable:
            raise FieldUnexportedError(plan.name)
        if plan.binding is None or plan.shape is None:
            continue

        variable = plan.binding.variable
        resolution = read_source(variable)
        if not resolution.found:
            if plan.binding.required:
                raise FieldRequiredError(plan.name, variable)
            logger.debug("Field %s: %s not set, keeping current value", plan.name, variable)
            continue

        key = plan.shape.key
        decoder = DECODERS.get(key)
        if decoder is None:
            raise FieldUnsupportedTypeError(plan.name, key)
        try:
            decoded = decoder(resolution.value)
        except ValueError as exc:
            raise FieldDecodeError(plan.name, key, str(exc)) from exc

        _assign(target, plan.name, plan.shape, decoded)
        logger.debug("Field %s: loaded from %s (%s)", plan.name, variable, resolution.source)

    return target
