"""LoadService — resolve single variables and populate dataclasses for the CLI."""

from __future__ import annotations

import importlib
import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from envbind.domain.errors import EnvError
from envbind.infrastructure.resolver import FILE_SUFFIX, read_source
from envbind.loader import plan_fields, read_struct
from envbind.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

MASK = "***"


def _display(value: Any) -> Any:
    """Convert a loaded field value into something JSON can carry."""
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    if isinstance(value, list):
        return [_display(item) for item in value]
    if value is None or isinstance(value, str | int | float):
        return value
    return str(value)


def _error_detail(exc: EnvError) -> dict[str, Any]:
    detail: dict[str, Any] = {}
    for attr in ("field", "variable", "key"):
        if hasattr(exc, attr):
            detail[attr] = getattr(exc, attr)
    if exc.__cause__ is not None:
        detail["cause"] = str(exc.__cause__)
    return detail


class LoadService:
    """Operations behind ``envbind read`` and ``envbind load``."""

    def read_variable(self, name: str) -> ServiceResult:
        """Resolve *name* (``NAME`` first, then ``NAME_FILE``)."""
        resolution = read_source(name)
        if not resolution.found:
            return ServiceResult(
                ok=False,
                op="read",
                error=ServiceError(
                    code="NOT_FOUND",
                    message=f"{name} is not set (checked {name} and {name}{FILE_SUFFIX})",
                    detail={"name": name},
                ),
            )
        return ServiceResult(
            ok=True,
            op="read",
            data={"name": name, "value": resolution.value, "source": resolution.source},
        )

    def load_target(self, spec: str, *, reveal: bool = False) -> ServiceResult:
        """Import ``module:attr``, populate it, and report its bound fields.

        A class is instantiated with no arguments first; any other object
        is populated in place. Values are masked unless *reveal* is set.
        """
        target, error = self._import_target(spec)
        if error is not None:
            return ServiceResult(ok=False, op="load", error=error)

        try:
            read_struct(target)
        except EnvError as exc:
            logger.debug("Loading %s failed", spec, exc_info=True)
            return ServiceResult(
                ok=False,
                op="load",
                error=ServiceError(code=exc.code, message=str(exc), detail=_error_detail(exc)),
            )

        fields: dict[str, dict[str, Any]] = {}
        warnings: list[str] = []
        for plan in plan_fields(type(target)):
            if plan.binding is None:
                continue
            source = read_source(plan.binding.variable).source
            value = getattr(target, plan.name)
            fields[plan.name] = {
                "variable": plan.binding.variable,
                "required": plan.binding.required,
                "source": source,
                "value": _display(value) if reveal or source is None else MASK,
            }
            if source is None:
                warnings.append(f"{plan.binding.variable} not set; {plan.name} keeps its default")
        return ServiceResult(
            ok=True,
            op="load",
            data={"target": spec, "fields": fields},
            warnings=warnings,
        )

    @staticmethod
    def _import_target(spec: str) -> tuple[Any, ServiceError | None]:
        module_name, sep, attr = spec.partition(":")
        if not sep or not module_name or not attr:
            return None, ServiceError(
                code="INVALID_TARGET_SPEC",
                message=f"Expected 'module:attribute', got {spec!r}",
            )
        try:
            module = importlib.import_module(module_name)
            obj = getattr(module, attr)
        except (ImportError, AttributeError) as exc:
            return None, ServiceError(
                code="INVALID_TARGET_SPEC",
                message=f"Cannot import {spec!r}: {exc}",
            )
        except Exception as exc:
            logger.debug("Importing %s raised", module_name, exc_info=True)
            return None, ServiceError(
                code="INVALID_TARGET_SPEC",
                message=f"Cannot import {spec!r}: {type(exc).__name__}: {exc}",
            )
        if not isinstance(obj, type):
            return obj, None
        try:
            return obj(), None
        except TypeError as exc:
            return None, ServiceError(
                code="INVALID_TARGET_SPEC",
                message=f"Cannot instantiate {spec!r} without arguments: {exc}",
            )
