"""
Level Mapper
------------
Static lookup from symbolic level names to the numeric severity codes of the
output schema (bunyan-compatible: higher = more severe).

Lookup is case-sensitive. Names outside the table are passed through
uninterpreted so forward-compatible level names never fail a log call.
"""

import logging

LEVELS: tuple[str, ...] = ("error", "warn", "info", "debug")

LEVEL_CODES: dict[str, int] = {
    "error": 50,
    "warn": 40,
    "info": 30,
    "debug": 20,
}

# Threshold filtering rides on the stdlib logger
_STDLIB_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_THRESHOLD_ALIASES: dict[str, str] = {
    "warning": "warn",
}

DEFAULT_THRESHOLD = "info"


def severity_code(level: str) -> int | str:
    """Numeric code for a known level, otherwise the level itself."""
    return LEVEL_CODES.get(level, level)


def stdlib_level(level: str) -> int:
    # unknown names filter like info
    return _STDLIB_LEVELS.get(level, logging.INFO)


def parse_threshold(value: str) -> str:
    """
    Normalise a configured minimum level (``LOG_LEVEL``).
    Unlike `severity_code`, configuration is case-insensitive and strict:
    a misspelled threshold is a startup error, not a silent passthrough.
    """
    name = value.strip().lower()
    name = _THRESHOLD_ALIASES.get(name, name)
    if name not in LEVEL_CODES:
        raise ValueError(
            f"Unknown log level {value!r}. Expected one of: {', '.join(LEVELS)}."
        )
    return name
