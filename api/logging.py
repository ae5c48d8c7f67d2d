"""Structured logging for the API process and command-line audit runs.

Both entry points log to stderr. `scripts/run_audit.py --json` writes the
audit result to stdout, and log lines must never end up inside it.
"""

import logging
import sys
from typing import Any

import structlog

from api.config import Settings, get_settings


def resolve_log_level(settings: Settings, quiet: bool = False) -> int:
    """Numeric level from settings; `quiet` raises it to at least WARNING."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    if quiet:
        level = max(level, logging.WARNING)
    return level


def _renderer(settings: Settings) -> Any:
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(settings: Settings | None = None, *, quiet: bool = False) -> None:
    """
    Configure structlog.

    Args:
        settings: Settings to read `log_level` and `env` from
        quiet: Only report warnings and errors, used by CLI runs
    """
    settings = settings or get_settings()
    level = resolve_log_level(settings, quiet=quiet)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.is_production:
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(_renderer(settings))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=not settings.is_test,
    )

    # uvicorn logs through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("uvicorn.access").setLevel(max(level, logging.WARNING))
