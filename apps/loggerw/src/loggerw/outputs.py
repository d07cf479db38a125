"""
Log outputs (sinks for rendered lines).
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Iterable, Optional

from .diagnostics import get_logger
from .events import OutputEvent

logger = get_logger("loggerw.outputs")


# =============================================================================
# Output Abstraction (Strategy Pattern)
# =============================================================================


class LogOutput(ABC):
    """Abstract base class for outputs.

    ``output`` may raise; the owning ``Logger`` catches and reports it.
    """

    def init(self) -> None:
        pass

    @abstractmethod
    def output(self, event: OutputEvent) -> None:
        """Consume the rendered lines of ``event``."""
        ...

    async def destroy(self) -> None:
        pass


class ConsoleOutput(LogOutput):
    """Writes each line to a stream.

    Args:
        stream: Output stream (default: stdout, resolved at write time)
    """

    def __init__(self, stream: Any = None):
        self._stream = stream

    @property
    def stream(self) -> Any:
        return self._stream or sys.stdout

    def output(self, event: OutputEvent) -> None:
        stream = self.stream
        for line in event.lines:
            stream.write(line + "\n")
        stream.flush()


class MemoryOutput(LogOutput):
    """Keeps the most recent output events in memory.

    Useful for tests and for inspecting recent output without a console.
    """

    def __init__(self, buffer_size: int = 20, secondary: Optional[LogOutput] = None):
        self.buffer: deque[OutputEvent] = deque(maxlen=buffer_size)
        self._secondary = secondary

    def init(self) -> None:
        if self._secondary is not None:
            self._secondary.init()

    def output(self, event: OutputEvent) -> None:
        self.buffer.append(event)
        if self._secondary is not None:
            self._secondary.output(event)

    @property
    def lines(self) -> list[str]:
        return [line for event in self.buffer for line in event.lines]

    def clear(self) -> None:
        self.buffer.clear()

    async def destroy(self) -> None:
        if self._secondary is not None:
            await self._secondary.destroy()


class MultiOutput(LogOutput):
    """Fans out to several outputs; one failing output does not stop the others."""

    def __init__(self, outputs: Iterable[Optional[LogOutput]]):
        self._outputs = [o for o in outputs if o is not None]

    def init(self) -> None:
        for o in self._outputs:
            o.init()

    def output(self, event: OutputEvent) -> None:
        for o in self._outputs:
            try:
                o.output(event)
            except Exception:
                logger.warning("output_failed", output=type(o).__name__, exc_info=True)

    async def destroy(self) -> None:
        for o in self._outputs:
            await o.destroy()
