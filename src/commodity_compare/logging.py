"""Structured logging for comparison runs."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_NAME = "commodity-compare"

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# HTTP and font-cache chatter below WARNING drowns out collector events.
NOISY_LOGGERS = ("urllib3", "matplotlib", "PIL")


def resolve_level(level: str) -> int:
    """Map a level name onto its stdlib logging constant."""
    normalized = level.strip().lower()
    if normalized not in LOG_LEVELS:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.")
    return LOG_LEVELS[normalized]


def add_app_name(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Tag every event with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _processors(json_output: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_app_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        chain.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return chain


def configure_logging(level: str = "info", *, json_output: bool = False) -> None:
    """Route structlog events through stdlib logging on stderr.

    Console output suits interactive runs; JSON output suits scheduled
    refreshes whose logs are collected elsewhere. Third-party loggers listed in
    ``NOISY_LOGGERS`` never go below WARNING.
    """
    level_value = resolve_level(level)
    logging.basicConfig(level=level_value, format="%(message)s", stream=sys.stderr)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def run_context(**values: object) -> Iterator[None]:
    """Bind ``values`` (commodity, command, ...) to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield


__all__ = [
    "APP_NAME",
    "LOG_LEVELS",
    "NOISY_LOGGERS",
    "add_app_name",
    "configure_logging",
    "resolve_level",
    "run_context",
]
