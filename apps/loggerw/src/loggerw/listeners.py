"""
Listener registries and process-wide logger defaults.

``defaults`` is the process-wide configuration shared by every ``Logger``
that is not given its own ``LoggerDefaults``. All reads and writes go
through a lock; callbacks are invoked on a snapshot outside the lock.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from .events import LogCallback, OutputCallback
from .filters import DevelopmentFilter, LogFilter
from .levels import Level
from .outputs import ConsoleOutput, LogOutput
from .printers import LogPrinter, PrettyPrinter

C = TypeVar("C", bound=Callable[..., None])

FilterFactory = Callable[[], LogFilter]
PrinterFactory = Callable[[], LogPrinter]
OutputFactory = Callable[[], LogOutput]

_MISSING = object()


class ListenerRegistry(Generic[C]):
    """Thread-safe set of callbacks; adding the same callback twice is a no-op."""

    def __init__(self) -> None:
        self._callbacks: dict[C, None] = {}
        self._lock = threading.Lock()

    def add(self, callback: C) -> None:
        with self._lock:
            self._callbacks.setdefault(callback, None)

    def remove(self, callback: C) -> bool:
        """Remove ``callback``; returns whether it was registered."""
        with self._lock:
            return self._callbacks.pop(callback, _MISSING) is not _MISSING

    def snapshot(self) -> tuple[C, ...]:
        with self._lock:
            return tuple(self._callbacks)

    def clear(self) -> None:
        with self._lock:
            self._callbacks.clear()

    def __contains__(self, callback: object) -> bool:
        with self._lock:
            return callback in self._callbacks

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)


class LoggerDefaults:
    """Default threshold, strategy factories and listener registries.

    Pass an explicit instance to ``Logger(defaults=...)`` to isolate a logger
    (typically in tests) from the process-wide ``defaults``.
    """

    def __init__(
        self,
        *,
        level: Level = Level.TRACE,
        filter_factory: FilterFactory = DevelopmentFilter,
        printer_factory: PrinterFactory = PrettyPrinter,
        output_factory: OutputFactory = ConsoleOutput,
    ) -> None:
        self._lock = threading.Lock()
        self._level = level
        self._filter_factory = filter_factory
        self._printer_factory = printer_factory
        self._output_factory = output_factory
        self.log_listeners: ListenerRegistry[LogCallback] = ListenerRegistry()
        self.output_listeners: ListenerRegistry[OutputCallback] = ListenerRegistry()

    @property
    def level(self) -> Level:
        with self._lock:
            return self._level

    @level.setter
    def level(self, value: Level) -> None:
        with self._lock:
            self._level = value

    @property
    def filter_factory(self) -> FilterFactory:
        with self._lock:
            return self._filter_factory

    @filter_factory.setter
    def filter_factory(self, factory: FilterFactory) -> None:
        with self._lock:
            self._filter_factory = factory

    @property
    def printer_factory(self) -> PrinterFactory:
        with self._lock:
            return self._printer_factory

    @printer_factory.setter
    def printer_factory(self, factory: PrinterFactory) -> None:
        with self._lock:
            self._printer_factory = factory

    @property
    def output_factory(self) -> OutputFactory:
        with self._lock:
            return self._output_factory

    @output_factory.setter
    def output_factory(self, factory: OutputFactory) -> None:
        with self._lock:
            self._output_factory = factory

    def reset(self) -> None:
        """Restore built-in defaults and drop every listener."""
        with self._lock:
            self._level = Level.TRACE
            self._filter_factory = DevelopmentFilter
            self._printer_factory = PrettyPrinter
            self._output_factory = ConsoleOutput
        self.log_listeners.clear()
        self.output_listeners.clear()


defaults = LoggerDefaults()
