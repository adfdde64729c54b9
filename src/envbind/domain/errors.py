"""Error taxonomy for struct population.

Every error raised by :func:`envbind.loader.read_struct` derives from
:class:`EnvError` and carries a stable ``code`` used by the CLI's
structured output. Field errors always name the offending field.

:class:`FieldNoBindingError` is an internal skip signal: the loader catches
it and moves on, so callers never see it.
"""

from __future__ import annotations


class EnvError(Exception):
    """Base class for all envbind errors."""

    code = "ENV_ERROR"


class InvalidTargetError(EnvError):
    """The destination is not a writable dataclass instance."""

    code = "INVALID_TARGET"


class NotPointerError(InvalidTargetError):
    """The destination is ``None`` or a class rather than an instance."""

    code = "NOT_POINTER"

    def __init__(self) -> None:
        super().__init__("not a pointer")


class NotStructPointerError(InvalidTargetError):
    """The destination is an instance, but not of a dataclass."""

    code = "NOT_STRUCT_POINTER"

    def __init__(self) -> None:
        super().__init__("not a pointer to struct")


class FieldError(EnvError):
    """An error attached to a single dataclass field.

    Attributes:
        field: Name of the dataclass field.
        reason: Short description without the field prefix.
    """

    code = "FIELD_ERROR"

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"field {field!r}: {reason}")


class FieldUnexportedError(FieldError):
    code = "FIELD_UNEXPORTED"

    def __init__(self, field: str) -> None:
        super().__init__(field, "field is unexported")


class FieldNoBindingError(FieldError):
    code = "FIELD_NO_BINDING"

    def __init__(self, field: str = "") -> None:
        super().__init__(field, "no env tag")


class FieldRequiredError(FieldError):
    """A required variable resolved to nothing (neither ``NAME`` nor ``NAME_FILE``)."""

    code = "FIELD_REQUIRED"

    def __init__(self, field: str, variable: str) -> None:
        self.variable = variable
        super().__init__(field, f"field is required ({variable})")


class FieldUnsupportedTypeError(FieldError):
    """No decoder is registered for the field's type key."""

    code = "FIELD_UNSUPPORTED_TYPE"

    def __init__(self, field: str, key: str) -> None:
        self.key = key
        super().__init__(field, f"unsupported field type: {key!r}")


class FieldDecodeError(FieldError):
    """The decoder rejected the raw value. The decoder's error is ``__cause__``."""

    code = "FIELD_DECODE"

    def __init__(self, field: str, key: str, detail: str) -> None:
        self.key = key
        super().__init__(field, f"field decode: {detail}")
