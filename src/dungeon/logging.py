"""Structured logging for DungeonMini.

Game text owns stdout, so log events go to stderr or to a log file.
Every event carries the session context bound by ``bind_session``.
"""

import sys
import uuid
from pathlib import Path
from typing import Any, TextIO

import structlog

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}


def _render_processors(json_logs: bool, stream: TextIO) -> list[Any]:
    if json_logs:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=stream.isatty())]


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path | None = None,
    json_logs: bool = False,
) -> None:
    """Configure structlog for a console session."""
    stream = open(log_file, "a", encoding="utf-8") if log_file else sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_render_processors(json_logs, stream),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get(log_level.upper(), _LEVELS["WARNING"])
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def bind_session(player: str) -> str:
    """Tag all following log events with the player and a fresh session id."""
    session = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(session=session, player=player)
    return session


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
