"""envbind — load configuration from environment variables and ``_FILE`` secrets.

Public API::

    from envbind import env, read, read_struct

    @dataclass
    class Config:
        port: UInt16 = env("PORT", default=UInt16(8080))
        password: str = env("DB_PASSWORD,required", default="")

    config = read_struct(Config())
"""

from __future__ import annotations

from envbind.domain.errors import (
    EnvError,
    FieldDecodeError,
    FieldError,
    FieldNoBindingError,
    FieldRequiredError,
    FieldUnexportedError,
    FieldUnsupportedTypeError,
    InvalidTargetError,
    NotPointerError,
    NotStructPointerError,
)
from envbind.domain.levels import InvalidLogLevelError, LogLevel
from envbind.domain.tags import Binding, env, parse_tag
from envbind.domain.types import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from envbind.infrastructure.resolver import Resolution, read, read_source
from envbind.loader import read_struct

__version__ = "0.1.0"

__all__ = [
    "Binding",
    "EnvError",
    "FieldDecodeError",
    "FieldError",
    "FieldNoBindingError",
    "FieldRequiredError",
    "FieldUnexportedError",
    "FieldUnsupportedTypeError",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidLogLevelError",
    "InvalidTargetError",
    "LogLevel",
    "NotPointerError",
    "NotStructPointerError",
    "Resolution",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "__version__",
    "env",
    "parse_tag",
    "read",
    "read_source",
    "read_struct",
]
