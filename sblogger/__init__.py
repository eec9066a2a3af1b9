__all__ = [
    "build_logger",
    "Logger",
    "Settings",
    "get_settings",
    "Stack",
    "LogMetadata",
    "severity_code",
    "LoggingError",
    "ContractViolation",
    "FormatError",
    "SinkWriteError",
]
__version__ = "0.1.0"

from .core.config import Settings, get_settings
from .core.errors import ContractViolation, FormatError, LoggingError, SinkWriteError
from .core.levels import severity_code
from .core.logging import Logger, build_logger
from .models.schemas import LogMetadata, Stack
