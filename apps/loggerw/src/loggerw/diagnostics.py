"""
Diagnostic channel.

Failures that logging swallows (broken listeners, failing outputs, remote
collector errors) are reported here through structlog. This channel never
routes through a loggerw ``Logger``, so a failing sink cannot recurse into
itself.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured diagnostic logger."""
    return structlog.get_logger(_name=name or "loggerw")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Move the bound ``_name`` into the ``logger`` key."""
    event_dict["logger"] = event_dict.pop("_name", "loggerw")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


class DiagnosticRenderer:
    """Final processor: renders the event dict as an aligned line or as JSON."""

    def __init__(self, fmt: str = "console") -> None:
        self._fmt = fmt

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        if self._fmt == "json":
            return orjson.dumps(event_dict, default=str).decode()
        head = " | ".join(
            [
                str(event_dict.pop("timestamp", "")),
                f"{str(event_dict.pop('level', method_name)).upper():>8}",
                str(event_dict.pop("logger", "loggerw")),
                str(event_dict.pop("message", "")),
            ]
        )
        exception = event_dict.pop("exception", None)
        extras = " ".join(f"{k}={v}" for k, v in event_dict.items())
        line = f"{head} {extras}" if extras else head
        if exception:
            line = f"{line}\n{exception}"
        return line


def configure_diagnostics(
    *,
    level: str = "WARNING",
    fmt: str = "console",
    stream: TextIO | None = None,
) -> None:
    """Install the structlog pipeline used by the diagnostic channel.

    Args:
        level: Minimum diagnostic level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "console" for aligned text, "json" for one JSON object per line
        stream: Destination stream (default: stderr)
    """
    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_logger_name,
        rename_event_key,
        structlog.processors.format_exc_info,
        DiagnosticRenderer(fmt.lower()),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.WARNING)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
