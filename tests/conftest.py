"""Shared pytest fixtures and test helpers for envbind tests."""

from __future__ import annotations

import logging
import os
import textwrap
import uuid
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

_ISOLATED_PREFIXES = ("TEST_", "ENVBIND_")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Start every test without ``TEST_*`` or ``ENVBIND_*`` variables.

    Tests bind only to ``TEST_*`` names so the rest of the process
    environment never leaks into assertions.
    """
    for key in list(os.environ):
        if key.startswith(_ISOLATED_PREFIXES):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logger state after each test (the CLI reconfigures logging)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    envbind_logger = logging.getLogger("envbind")
    envbind_level = envbind_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    envbind_logger.setLevel(envbind_level)


@pytest.fixture
def secret_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a secret file verbatim (no newline translation) and return its path."""

    def write(content: str, name: str = "secret") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return write


@pytest.fixture
def target_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str], str]:
    """Write *source* to a fresh importable module and return the module name."""

    def write(source: str) -> str:
        name = f"envbind_sample_{uuid.uuid4().hex[:12]}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        monkeypatch.syspath_prepend(str(tmp_path))
        return name

    return write
