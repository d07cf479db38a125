"""
Log printers: turn a passed event into display lines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

import orjson

from .events import LogEvent, format_stack_trace, stringify_message
from .levels import Level

# =============================================================================
# Colors
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
}

LEVEL_COLORS = {
    Level.TRACE: "\033[90m",
    Level.DEBUG: "\033[36m",
    Level.INFO: "\033[32m",
    Level.WARNING: "\033[33m",
    Level.ERROR: "\033[31m",
    Level.FATAL: "\033[1;31m",
}

LEVEL_PREFIXES = {
    Level.TRACE: "[T]",
    Level.DEBUG: "[D]",
    Level.INFO: "[I]",
    Level.WARNING: "[W]",
    Level.ERROR: "[E]",
    Level.FATAL: "[FATAL]",
}


def colorize(text: str, color: str) -> str:
    """Apply an ANSI color code (or a named color) to text."""
    code = COLORS.get(color, color)
    return f"{code}{text}{COLORS['reset']}"


class LogPrinter(ABC):
    """Abstract base class for printers."""

    def init(self) -> None:
        pass

    @abstractmethod
    def log(self, event: LogEvent) -> list[str]:
        """Render ``event``; an empty list means nothing to emit."""
        ...

    async def destroy(self) -> None:
        pass


class PrettyPrinter(LogPrinter):
    """Human-readable aligned lines (fixed width, right-aligned level).

    The first line is ``timestamp | LEVEL | message``; error text and stack
    trace lines follow, indented under the message column.
    """

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    LEVEL_WIDTH = 7
    SEPARATOR = " | "

    def __init__(
        self,
        *,
        colors: bool = True,
        print_time: bool = True,
        method_count: int = 8,
        timestamp_format: str | None = None,
    ) -> None:
        self.colors = colors
        self.print_time = print_time
        self.method_count = method_count
        self.timestamp_format = timestamp_format or self.TIMESTAMP_FORMAT

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if len(text) > width:
            text = text[:width]
        return f"{text:>{width}}"

    def _format_time(self, time: datetime) -> str:
        # Naive times are local times.
        return time.astimezone().strftime(self.timestamp_format)

    def _color(self, text: str, level: Level) -> str:
        if not self.colors:
            return text
        return colorize(text, LEVEL_COLORS.get(level, ""))

    def _trace_lines(self, event: LogEvent) -> list[str]:
        text = format_stack_trace(event.stack_trace)
        if not text:
            return []
        lines = [line for line in text.splitlines() if line.strip()]
        # Each frame renders as a "File ..." line plus a source line.
        return lines[: self.method_count * 2] if self.method_count > 0 else []

    def log(self, event: LogEvent) -> list[str]:
        level_text = self._color(self._fit_right(event.level.name, self.LEVEL_WIDTH), event.level)
        head: list[str] = []
        if self.print_time:
            timestamp = self._format_time(event.time)
            head.append(colorize(timestamp, "timestamp") if self.colors else timestamp)
        head.append(level_text)

        message_lines = stringify_message(event.message).splitlines() or [""]
        prefix = self.SEPARATOR.join(head) + self.SEPARATOR
        indent = " " * (len(self.SEPARATOR.join(self._plain_head(event))) + len(self.SEPARATOR))

        lines = [prefix + message_lines[0]]
        lines.extend(indent + line for line in message_lines[1:])
        if event.error is not None:
            for line in str(event.error).splitlines() or [""]:
                lines.append(indent + self._color(line, Level.ERROR))
        for line in self._trace_lines(event):
            lines.append(indent + (colorize(line, "dim") if self.colors else line))
        return lines

    def _plain_head(self, event: LogEvent) -> list[str]:
        head = [self._format_time(event.time)] if self.print_time else []
        head.append(self._fit_right(event.level.name, self.LEVEL_WIDTH))
        return head


class SimplePrinter(LogPrinter):
    """Single compact line: ``[I] message``."""

    def __init__(self, *, colors: bool = False, print_time: bool = False) -> None:
        self.colors = colors
        self.print_time = print_time

    def log(self, event: LogEvent) -> list[str]:
        prefix = LEVEL_PREFIXES.get(event.level, f"[{event.level.name}]")
        if self.colors:
            prefix = colorize(prefix, LEVEL_COLORS.get(event.level, ""))
        parts = [prefix]
        if self.print_time:
            parts.append(f"TIME: {event.time.isoformat()}")
        parts.append(stringify_message(event.message))
        if event.error is not None:
            parts.append(f"ERROR: {event.error}")
        return [" ".join(parts)]


class JsonPrinter(LogPrinter):
    """One JSON object per event."""

    def log(self, event: LogEvent) -> list[str]:
        record: dict[str, Any] = {
            "timestamp": event.time,
            "level": event.level.name,
            "message": stringify_message(event.message),
        }
        if event.error is not None:
            record["error"] = str(event.error)
        trace = format_stack_trace(event.stack_trace)
        if trace:
            record["stack_trace"] = trace
        return [orjson_dumps(record)]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()
