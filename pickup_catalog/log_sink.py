"""
Pluggable log sinks for catalog client notifications.
"""

from typing import Any, Mapping, Optional, Protocol

import structlog

from shared.logging import get_logger


class LogSink(Protocol):
    """Anything exposing ``log``, ``error`` and ``debug`` can receive client notifications."""

    def log(self, message: Any, options: Optional[Any] = None) -> None: ...

    def error(self, message: Any, options: Optional[Any] = None) -> None: ...

    def debug(self, message: Any, options: Optional[Any] = None) -> None: ...


class StructlogSink:
    """Default sink forwarding notifications to a structlog logger."""

    def __init__(self, name: str = "pickup_catalog", logger: Optional[structlog.BoundLogger] = None):
        self._logger = logger or get_logger(name)

    def log(self, message: Any, options: Optional[Any] = None) -> None:
        self._emit("info", message, options)

    def error(self, message: Any, options: Optional[Any] = None) -> None:
        self._emit("error", message, options)

    def debug(self, message: Any, options: Optional[Any] = None) -> None:
        self._emit("debug", message, options)

    def _emit(self, level: str, message: Any, options: Optional[Any]) -> None:
        if options is None:
            fields = {}
        elif isinstance(options, Mapping):
            fields = dict(options)
        else:
            fields = {"options": options}

        if isinstance(message, BaseException):
            fields.setdefault("error_type", type(message).__name__)

        getattr(self._logger, level)(str(message), **fields)
