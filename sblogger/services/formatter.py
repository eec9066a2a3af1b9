"""
Record Formatter
----------------
Turns one stdlib `logging.LogRecord` produced by the facade into one output
line. Two presentation modes, chosen once at startup:

  StructuredFormatter   strict single-line JSON for log aggregation
  ConsoleFormatter      colorized "<level>: <message> <metadata>" for humans

Schema emitted by StructuredFormatter (key order is stable):

  {"name": <service>, "hostname": <host>, "pid": <int>,
   "level": <code>, ["levelName": <name>,] "msg": <message>,
   "time": <ISO-8601 UTC, ms, Z>, "meta_data": {...caller metadata...}}

Caller metadata is always nested under `meta_data`, so reserved top-level
fields can never be overwritten by a metadata key of the same name.
"""

import json
import logging
import socket
import traceback
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any
from uuid import UUID

from sblogger.core.errors import FormatError
from sblogger.core.levels import severity_code


def format_timestamp(created: float) -> str:
    """`LogRecord.created` → ``2024-08-14T11:16:51.678Z``."""
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _serialize_exception(exc: BaseException) -> dict[str, Any]:
    # Same shape as bunyan's `err` serializer
    return {
        "name": type(exc).__name__,
        "message": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }


def _json_default(value: Any) -> Any:
    """Widen `json` to the handful of types that have one obvious encoding."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal, PurePath)):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, BaseException):
        return _serialize_exception(value)
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="python")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_json(value: Any, **kwargs: Any) -> str:
    """
    Serialize or raise FormatError. Never returns partial output:
    `json.dumps` builds the whole string before anything reaches a stream.
    """
    try:
        return json.dumps(
            value,
            default=_json_default,
            allow_nan=False,
            ensure_ascii=False,
            **kwargs,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise FormatError(
            "Log record contains a value that cannot be serialized to JSON.",
            internal=str(exc),
        ) from exc


def record_level(record: logging.LogRecord) -> str:
    name = getattr(record, "log_level", None)
    if name is None:
        name = record.levelname.lower()
        if name == "warning":
            name = "warn"
    return name


def record_metadata(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "meta_data", None) or {}


class StructuredFormatter(logging.Formatter):
    """Emit each facade record as a single compact JSON line."""

    def __init__(
        self,
        service_name: str,
        *,
        hostname: str | None = None,
        include_level_name: bool = False,
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.hostname = hostname if hostname is not None else socket.gethostname()
        self.include_level_name = include_level_name

    def build_record(self, record: logging.LogRecord) -> dict[str, Any]:
        level = record_level(record)
        entry: dict[str, Any] = {
            "name": self.service_name,
            "hostname": self.hostname,
            "pid": record.process,
            "level": severity_code(level),
        }
        if self.include_level_name:
            entry["levelName"] = level
        entry["msg"] = record.getMessage()
        entry["time"] = format_timestamp(record.created)
        entry["meta_data"] = record_metadata(record)
        return entry

    def format(self, record: logging.LogRecord) -> str:
        return render_json(self.build_record(record), separators=(",", ":"))


class ConsoleFormatter(logging.Formatter):
    """Human-oriented line; metadata is pretty-printed only when present."""

    COLORS = {
        "error": "\033[31m",
        "warn": "\033[33m",
        "info": "\033[32m",
        "debug": "\033[34m",
    }
    RESET = "\033[0m"

    def __init__(self, *, color: bool = True) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        level = record_level(record)
        label = level
        if self.color and level in self.COLORS:
            label = f"{self.COLORS[level]}{level}{self.RESET}"

        line = f"{label}: {record.getMessage()}"
        meta = record_metadata(record)
        if meta:
            line = f"{line} {render_json(meta, indent=2)}"
        return line
