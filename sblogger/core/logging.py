"""
Structured Logging Facade
-------------------------
The leveled call surface applications use:

    log = build_logger(get_settings())
    log.info("Hello info", {"trace_id": "123", "stack": "NODE", "wret": "wert"})

Per call:
  1. merge bound defaults (see `Logger.bind`) under the call's metadata
  2. validate the envelope (`trace_id`, `stack`) → ContractViolation
  3. drop the call if it is below the configured threshold
  4. hand the record to the stdlib logger → SinkHandler → one line

There is no module-level logger instance. `build_logger` is called once by
the application's startup routine and the result is passed to call sites.
"""

import logging
from collections.abc import Mapping
from typing import Any, TextIO

from pydantic import ValidationError

from sblogger.core.config import Settings, get_settings
from sblogger.core.errors import ContractViolation
from sblogger.core.levels import stdlib_level
from sblogger.models.schemas import LogCall, LogMetadata
from sblogger.services.formatter import ConsoleFormatter, StructuredFormatter
from sblogger.services.sink import SinkHandler


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )


class Logger:
    def __init__(
        self,
        backend: logging.Logger,
        threshold: str,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self._backend = backend
        self.threshold = threshold
        self._defaults: dict[str, Any] = dict(defaults or {})

    @property
    def name(self) -> str:
        return self._backend.name

    def bind(self, **defaults: Any) -> "Logger":
        """Child logger whose calls inherit `defaults` as metadata. Call-site keys win."""
        return Logger(self._backend, self.threshold, {**self._defaults, **defaults})

    def is_enabled_for(self, level: str) -> bool:
        return self._backend.isEnabledFor(stdlib_level(level))

    def log(
        self,
        level: str,
        message: str,
        metadata: Mapping[str, Any] | LogMetadata | None = None,
    ) -> None:
        call = self._validate(message, metadata)

        levelno = stdlib_level(level)
        if not self._backend.isEnabledFor(levelno):
            return

        self._backend.log(
            levelno,
            call.message,
            extra={"log_level": level, "meta_data": call.meta_data.as_dict()},
        )

    def error(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log("error", message, metadata)

    def warn(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log("warn", message, metadata)

    warning = warn

    def info(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log("info", message, metadata)

    def debug(self, message: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.log("debug", message, metadata)

    def _validate(self, message: str, metadata: Any) -> LogCall:
        if isinstance(metadata, LogMetadata):
            metadata = metadata.as_dict()
        elif metadata is not None and not isinstance(metadata, Mapping):
            raise ContractViolation(
                f"Log metadata must be a mapping, got {type(metadata).__name__}."
            )

        merged = {**self._defaults, **(metadata or {})}
        try:
            return LogCall(message=message, meta_data=merged)
        except ValidationError as exc:
            raise ContractViolation(
                f"Invalid log call: {_describe(exc)}",
                internal=str(exc),
            ) from exc


def build_logger(
    settings: Settings | None = None,
    *,
    stream: TextIO | None = None,
    hostname: str | None = None,
) -> Logger:
    """
    Construct the process logger from resolved settings.
    `stream` defaults to stdout; `hostname` defaults to socket.gethostname().
    """
    settings = settings or get_settings()

    if settings.console_mode:
        formatter: logging.Formatter = ConsoleFormatter(color=settings.color)
    else:
        formatter = StructuredFormatter(
            settings.service_name,
            hostname=hostname,
            include_level_name=settings.include_level_name,
        )

    handler = SinkHandler(stream)
    handler.setFormatter(formatter)

    # Not registered with logging.getLogger: each facade owns its backend
    backend = logging.Logger(settings.service_name)
    backend.setLevel(stdlib_level(settings.log_level))
    backend.propagate = False
    backend.addHandler(handler)

    return Logger(backend, settings.log_level)
