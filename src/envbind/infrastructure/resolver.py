"""Environment lookup with ``NAME_FILE`` secret-file fallback.

Container orchestrators mount secrets as files and pass their location in
a companion variable. A variable ``NAME`` therefore resolves to:

1. the value of ``NAME`` when it is set (even to ``""``);
2. otherwise the full text of the file named by ``NAME_FILE``;
3. otherwise nothing.

An unreadable secret file counts as unset. The failure is logged at
DEBUG level so ``--verbose`` runs can still diagnose it. File contents
that are not valid UTF-8 are kept with ``surrogateescape``, the same way
:data:`os.environ` decodes values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

logger = logging.getLogger(__name__)

FILE_SUFFIX = "_FILE"

Source = Literal["env", "file"]


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one variable.

    Attributes:
        value: The resolved text, ``""`` when not found.
        found: Whether either ``NAME`` or a readable ``NAME_FILE`` was present.
        source: ``"env"``, ``"file"`` or None when not found.
    """

    value: str
    found: bool
    source: Source | None = None


_NOT_FOUND = Resolution(value="", found=False)


def _read_secret_file(path: str) -> str:
    # newline="" keeps the file byte-for-byte (no \r\n translation).
    with Path(path).open(encoding="utf-8", errors="surrogateescape", newline="") as fh:
        return fh.read()


def read_source(name: str) -> Resolution:
    """Resolve *name*, reporting where the value came from."""
    raw = os.environ.get(name)
    if raw is not None:
        return Resolution(value=raw, found=True, source="env")

    file_var = name + FILE_SUFFIX
    path = os.environ.get(file_var)
    if path is None:
        return _NOT_FOUND
    if not path:
        logger.debug("%s is set but empty; treating %s as unset", file_var, name)
        return _NOT_FOUND

    try:
        content = _read_secret_file(path)
    except OSError as exc:
        logger.debug("Cannot read %s=%s: %s", file_var, path, exc)
        return _NOT_FOUND
    return Resolution(value=content, found=True, source="file")


def read(name: str) -> tuple[str, bool]:
    """Return ``(value, found)`` for *name*, preferring the direct variable."""
    resolution = read_source(name)
    return resolution.value, resolution.found
