"""
Log and output events.
"""

from __future__ import annotations

import traceback
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import TracebackType
from typing import Any, Callable, Optional, Union

import orjson

from .errors import InvalidErrorArgumentError, InvalidLevelError
from .levels import Level

StackTrace = Union[TracebackType, traceback.StackSummary, str]


def is_stack_trace(value: Any) -> bool:
    """Whether ``value`` is a trace object rather than an error."""
    return isinstance(value, (TracebackType, traceback.StackSummary))


def format_stack_trace(trace: Optional[StackTrace]) -> Optional[str]:
    """Render a traceback, stack summary or preformatted string to text."""
    if trace is None:
        return None
    if isinstance(trace, TracebackType):
        return "".join(traceback.format_tb(trace))
    if isinstance(trace, traceback.StackSummary):
        return "".join(trace.format())
    return str(trace)


def stringify_message(message: Any) -> str:
    """Turn an arbitrary message payload into display text.

    Callables are invoked lazily, mappings and iterables are pretty-printed as
    JSON, and everything else goes through ``str()``.
    """
    if callable(message):
        message = message()
    if isinstance(message, (str, bytes)):
        return message.decode(errors="replace") if isinstance(message, bytes) else message
    if isinstance(message, (Mapping, Iterable)):
        if not isinstance(message, (Mapping, list, tuple)):
            message = list(message)
        try:
            return orjson.dumps(
                message,
                default=str,
                option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS,
            ).decode()
        except orjson.JSONEncodeError:
            # e.g. integers wider than 64 bits
            return str(message)
    return str(message)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LogEvent:
    """One logging call.

    ``time`` defaults to the creation time. ``time_supplied`` remembers
    whether the caller passed an explicit time.
    """

    level: Level
    message: Any
    error: Optional[object] = None
    stack_trace: Optional[StackTrace] = None
    time: datetime = field(default_factory=_utcnow)
    time_supplied: bool = False

    def __post_init__(self) -> None:
        if self.level.is_sentinel:
            raise InvalidLevelError(
                f"Log events cannot have Level.{self.level.name}",
                level=self.level.name,
            )
        if is_stack_trace(self.error):
            raise InvalidErrorArgumentError(error_type=type(self.error).__name__)

    @classmethod
    def create(
        cls,
        level: Level,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> "LogEvent":
        if time is None:
            return cls(level, message, error=error, stack_trace=stack_trace)
        return cls(level, message, error=error, stack_trace=stack_trace, time=time, time_supplied=True)


@dataclass(frozen=True)
class OutputEvent:
    """Rendered lines for a log event that passed filtering."""

    origin: LogEvent
    lines: tuple[str, ...]

    @property
    def level(self) -> Level:
        return self.origin.level


LogCallback = Callable[[LogEvent], None]
OutputCallback = Callable[[OutputEvent], None]
