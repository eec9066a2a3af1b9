"""
sblogger — command-line entry point
Emit one structured log line from shell scripts and CI jobs, using the same
settings (LOG_LEVEL, SERVICE_NAME, ENVIRONMENT, ...) as the library.

    sblogger emit --trace-id 123 --stack NODE "deploy finished" version=1.4.2 canary=true
"""

import json
from typing import Any, List, Optional

import typer

from sblogger.core.config import get_settings
from sblogger.core.errors import LoggingError
from sblogger.core.levels import LEVEL_CODES
from sblogger.core.logging import build_logger

app = typer.Typer(add_completion=False, help="Structured JSON logging facade.")


def _parse_field(pair: str) -> tuple[str, Any]:
    """`key=value` → (key, value). Values are decoded as JSON when they parse."""
    key, sep, raw = pair.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"Expected key=value, got {pair!r}.")
    try:
        return key, json.loads(raw)
    except json.JSONDecodeError:
        return key, raw


@app.command()
def emit(
    message: str = typer.Argument(..., help="Log message."),
    fields: Optional[List[str]] = typer.Argument(None, help="Extra metadata as key=value."),
    level: str = typer.Option("info", "--level", "-l", help="error | warn | info | debug"),
    trace_id: str = typer.Option(..., "--trace-id", envvar="TRACE_ID", help="Correlation id."),
    stack: str = typer.Option("NODE", "--stack", help="NODE | GRAPHQL | TEMPORAL | REDIS"),
) -> None:
    """Emit a single log record to stdout."""
    extra = dict(_parse_field(pair) for pair in fields or [])
    metadata = {**extra, "trace_id": trace_id, "stack": stack}

    try:
        logger = build_logger(get_settings())
        logger.log(level, message, metadata)
    except LoggingError as exc:
        typer.echo(f"{exc.code.value}: {exc.detail}", err=True)
        raise typer.Exit(code=exc.exit_code)


@app.command()
def levels() -> None:
    """Print the level → severity code table."""
    for name, code in LEVEL_CODES.items():
        typer.echo(f"{name}\t{code}")


if __name__ == "__main__":
    app()
