"""
Error Contract
--------------
Every failure of a log call is typed. Each maps to a stable `error_code`
string and a deterministic process exit code (used by the CLI).

Errors surface synchronously to the caller of the log function. Nothing is
retried or swallowed inside the facade.
"""

from enum import Enum


class ErrorCode(str, Enum):
    # Caller broke the metadata envelope contract
    CONTRACT_VIOLATION = "contract_violation"

    # Record could not be serialized; nothing was written
    FORMAT_FAILED = "format_failed"

    # The sink rejected the write (closed stream, broken pipe)
    SINK_WRITE_FAILED = "sink_write_failed"


# Maps ErrorCode → process exit code for command-line callers
EXIT_CODE_MAP: dict[ErrorCode, int] = {
    ErrorCode.CONTRACT_VIOLATION: 2,
    ErrorCode.FORMAT_FAILED:      3,
    ErrorCode.SINK_WRITE_FAILED:  4,
}


class LoggingError(Exception):
    """Base exception for all errors raised by a log call."""

    code: ErrorCode = ErrorCode.FORMAT_FAILED

    def __init__(self, detail: str = "", *, internal: str = ""):
        self.detail = detail or self.code.value.replace("_", " ").capitalize()
        self.internal = internal  # diagnostic only, e.g. the offending value's repr
        super().__init__(self.detail)

    @property
    def exit_code(self) -> int:
        return EXIT_CODE_MAP.get(self.code, 1)

    def to_dict(self) -> dict:
        return {
            "error": self.code.value,
            "detail": self.detail,
        }


class ContractViolation(LoggingError):
    """Mandatory metadata (`trace_id` / `stack`) missing or malformed."""

    code = ErrorCode.CONTRACT_VIOLATION


class FormatError(LoggingError):
    """The record could not be rendered as a single line."""

    code = ErrorCode.FORMAT_FAILED


class SinkWriteError(LoggingError):
    """The output stream refused the line. The OS error is chained as __cause__."""

    code = ErrorCode.SINK_WRITE_FAILED
