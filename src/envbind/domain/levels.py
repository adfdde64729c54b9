"""Log level enum decoded from environment strings.

Values match the stdlib :mod:`logging` levels so a decoded level can be
handed straight to ``logging.Logger.setLevel``.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class InvalidLogLevelError(ValueError):
    """Raised for an unrecognized level name.

    Attributes:
        raw: The offending string, exactly as read.
        fallback: The level a lenient caller may use instead.
    """

    def __init__(self, raw: str, fallback: LogLevel) -> None:
        self.raw = raw
        self.fallback = fallback
        super().__init__(f"invalid log level: {raw!r}")


class LogLevel(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def parse(cls, raw: str) -> LogLevel:
        """Match *raw* case-insensitively, ignoring surrounding whitespace.

        Raises:
            InvalidLogLevelError: If *raw* names no level. The error's
                ``fallback`` is :attr:`INFO`.
        """
        name = raw.strip().lower()
        for level in cls:
            if level.name.lower() == name:
                return level
        raise InvalidLogLevelError(raw, cls.INFO)
