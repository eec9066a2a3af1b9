"""
Output Sink
-----------
A `logging.StreamHandler` that reports failures to the caller instead of
routing them through `Handler.handleError` (which prints and carries on).

`Handler.handle` holds `self.lock` around `emit`, so "format then write" is
serialized per handler and concurrent threads never interleave a line.
Format runs before the first byte is written; a FormatError leaves the
stream untouched.
"""

import logging
import sys
from typing import TextIO

from sblogger.core.errors import SinkWriteError


class SinkHandler(logging.StreamHandler):
    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__(stream if stream is not None else sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        line = self.format(record)
        try:
            self.stream.write(line + self.terminator)
            self.flush()
        except (OSError, ValueError) as exc:
            # ValueError: write to a closed file object
            raise SinkWriteError(
                "Log sink rejected the write.",
                internal=repr(exc),
            ) from exc
