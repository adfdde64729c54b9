"""Tests for decoder-key derivation from field annotations."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Optional, Union

import pytest

from envbind.domain.levels import LogLevel
from envbind.domain.types import (
    FieldShape,
    Float32,
    Int8,
    Shape,
    UInt8,
    UInt16,
    resolve_shape,
    type_key,
)


class TestTypeKey:
    @pytest.mark.parametrize(
        ("tp", "key"),
        [
            (str, "str"),
            (bytes, "bytes"),
            (int, "int"),
            (float, "float"),
            (bool, "bool"),
            (Int8, "int8"),
            (UInt16, "uint16"),
            (Float32, "float32"),
            (datetime, "datetime.datetime"),
            (timedelta, "datetime.timedelta"),
            (LogLevel, "envbind.domain.levels.LogLevel"),
        ],
    )
    def test_keys(self, tp: Any, key: str) -> None:
        assert type_key(tp) == key


class TestResolveShape:
    def test_scalar(self) -> None:
        assert resolve_shape(str) == FieldShape(Shape.SCALAR, "str")

    def test_sequence(self) -> None:
        assert resolve_shape(list[str]) == FieldShape(Shape.SEQUENCE, "[]str")

    def test_byte_sequence(self) -> None:
        assert resolve_shape(list[UInt8]) == FieldShape(Shape.SEQUENCE, "[]uint8")

    @pytest.mark.parametrize("annotation", [Optional[int], int | None, Union[None, int]])
    def test_optional_strips_wrapper(self, annotation: Any) -> None:
        assert resolve_shape(annotation) == FieldShape(Shape.OPTIONAL, "int")

    def test_optional_fixed_width(self) -> None:
        assert resolve_shape(UInt16 | None) == FieldShape(Shape.OPTIONAL, "uint16")

    def test_optional_sequence_is_sequence(self) -> None:
        assert resolve_shape(list[str] | None) == FieldShape(Shape.SEQUENCE, "[]str")

    def test_wider_union_is_scalar(self) -> None:
        shape = resolve_shape(int | str | None)
        assert shape.kind is Shape.SCALAR

    def test_bare_list_is_unsupported_scalar(self) -> None:
        assert resolve_shape(list) == FieldShape(Shape.SCALAR, "list")

    def test_sequence_of_any(self) -> None:
        assert resolve_shape(list[Any]).key == "[]typing.Any"
