"""Error helpers for the forza_dash command line tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping, Optional

__all__ = [
    "CliError",
    "ErrorPayload",
    "log_cli_error",
]


_CATEGORY_STATUS_CODES: Mapping[str, int] = {
    "runtime": 1,
    "usage": 2,
    "io": 3,
    "not_found": 4,
}

_DEFAULT_CATEGORY = "runtime"
_DEFAULT_LOGGER_NAME = "forza_dash.cli"


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    """Structured representation of an error emitted by the CLI."""

    status_code: int
    category: str
    message: str
    context: Mapping[str, Any]


def _normalise_context(context: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not context:
        return {}
    payload: MutableMapping[str, Any] = {}
    for key, value in context.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        else:
            payload[key] = str(value)
    return dict(payload)


def build_error_payload(
    message: str,
    *,
    category: str = _DEFAULT_CATEGORY,
    status_code: Optional[int] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> ErrorPayload:
    """Create a :class:`ErrorPayload` describing a CLI failure."""

    resolved_category = category or _DEFAULT_CATEGORY
    resolved_status = (
        status_code
        if status_code is not None
        else _CATEGORY_STATUS_CODES.get(resolved_category, _CATEGORY_STATUS_CODES[_DEFAULT_CATEGORY])
    )
    return ErrorPayload(
        status_code=resolved_status,
        category=resolved_category,
        message=message,
        context=_normalise_context(context),
    )


def log_cli_error(
    payload: ErrorPayload,
    *,
    logger: Optional[logging.Logger] = None,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Emit ``payload`` using ``logger.error`` with structured context."""

    target = logger or logging.getLogger(_DEFAULT_LOGGER_NAME)
    target.error(
        payload.message,
        extra={
            "event": "cli.error",
            "category": payload.category,
            "status_code": payload.status_code,
            "context": dict(payload.context),
        },
        exc_info=exc_info,
    )


class CliError(RuntimeError):
    """Consistent error type raised by CLI helpers."""

    def __init__(
        self,
        message: str,
        *,
        category: str = _DEFAULT_CATEGORY,
        status_code: Optional[int] = None,
        context: Optional[Mapping[str, Any]] = None,
        logged: bool = False,
    ) -> None:
        super().__init__(message)
        self.category = category or _DEFAULT_CATEGORY
        self._payload = build_error_payload(
            message,
            category=self.category,
            status_code=status_code,
            context=context,
        )
        self.status_code = self._payload.status_code
        self.context = dict(self._payload.context)
        self.logged = logged

    @property
    def payload(self) -> ErrorPayload:
        return self._payload
