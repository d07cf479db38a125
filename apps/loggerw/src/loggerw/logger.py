"""
The Logger orchestrator.

Pipeline per call::

    log() -> raw listeners -> filter -> printer -> output listeners + output
          -> remote sink (only for passed, non-empty events)

Contract violations raise before any work. Everything after event
construction is failure-isolated: a broken listener, output or collector is
reported on the diagnostic channel and never reaches the caller.
"""

from __future__ import annotations

import asyncio
import warnings
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from .config import LoggingSettings, PrinterKind, settings as global_settings
from .diagnostics import configure_diagnostics, get_logger
from .errors import InvalidErrorArgumentError, InvalidLevelError, LoggerClosedError
from .events import LogCallback, LogEvent, OutputCallback, OutputEvent, StackTrace, is_stack_trace
from .filters import LogFilter
from .levels import Level
from .listeners import FilterFactory, LoggerDefaults, OutputFactory, PrinterFactory, defaults as global_defaults
from .outputs import ConsoleOutput, LogOutput
from .printers import JsonPrinter, LogPrinter, PrettyPrinter, SimplePrinter
from .remote import RemoteSink

logger = get_logger("loggerw.logger")

T = TypeVar("T")


class Logger:
    """Leveled logging facade.

    Args:
        filter: Filter instance; defaults to the process-wide filter factory
        printer: Printer instance; defaults to the process-wide printer factory
        output: Output instance; defaults to the process-wide output factory
        level: Filter threshold; defaults to the process-wide default level
        remote_url: Collector URL; remote delivery is disabled when unset
        remote_timeout: Timeout for remote posts in seconds
        remote_sink: Prebuilt remote sink (takes precedence over ``remote_url``)
        defaults: Defaults and listener registries to use instead of the
            process-wide ones

    The filter, printer and output are owned by this logger and torn down by
    :meth:`close`. Call :meth:`close` at most once.
    """

    def __init__(
        self,
        *,
        filter: Optional[LogFilter] = None,
        printer: Optional[LogPrinter] = None,
        output: Optional[LogOutput] = None,
        level: Optional[Level] = None,
        remote_url: Optional[str] = None,
        remote_timeout: float = 10.0,
        remote_sink: Optional[RemoteSink] = None,
        defaults: Optional[LoggerDefaults] = None,
    ) -> None:
        self._defaults = defaults if defaults is not None else global_defaults
        self._filter = filter if filter is not None else self._defaults.filter_factory()
        self._printer = printer if printer is not None else self._defaults.printer_factory()
        self._output = output if output is not None else self._defaults.output_factory()
        if remote_sink is None and remote_url:
            remote_sink = RemoteSink(remote_url, timeout=remote_timeout)
        self._remote = remote_sink
        self._active = True
        self._pending: set[asyncio.Task[bool]] = set()

        self._filter.init()
        self._filter.level = level if level is not None else self._defaults.level
        self._printer.init()
        self._output.init()

    @classmethod
    def from_settings(
        cls,
        logging_settings: Optional[LoggingSettings] = None,
        **overrides: Any,
    ) -> "Logger":
        """Build a logger from ``LOGGERW_LOG_*`` settings.

        Also installs the diagnostic channel at the configured level and format.

        Keyword overrides are passed straight to the constructor.
        """
        cfg = logging_settings or global_settings.logging
        configure_diagnostics(level=cfg.diagnostics_level, fmt=cfg.diagnostics_format.value)
        if "printer" not in overrides:
            overrides["printer"] = _printer_for(cfg)
        if "level" not in overrides:
            overrides["level"] = Level.parse(cfg.level.value)
        if "remote_url" not in overrides and "remote_sink" not in overrides:
            overrides["remote_url"] = cfg.remote_url
            overrides.setdefault("remote_timeout", cfg.remote_timeout)
        return cls(**overrides)

    @property
    def remote_url(self) -> Optional[str]:
        return self._remote.url if self._remote is not None else None

    # =========================================================================
    # Convenience calls
    # =========================================================================

    async def v(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        """Log at TRACE. Deprecated, use :meth:`t`."""
        warnings.warn("Logger.v is deprecated in favor of Logger.t", DeprecationWarning, stacklevel=2)
        await self.log(Level.TRACE, message, time=time, error=error, stack_trace=stack_trace)

    async def t(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        await self.log(Level.TRACE, message, time=time, error=error, stack_trace=stack_trace)

    async def d(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        await self.log(Level.DEBUG, message, time=time, error=error, stack_trace=stack_trace)

    async def i(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        await self.log(Level.INFO, message, time=time, error=error, stack_trace=stack_trace)

    async def w(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        await self.log(Level.WARNING, message, time=time, error=error, stack_trace=stack_trace)

    async def e(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        await self.log(Level.ERROR, message, time=time, error=error, stack_trace=stack_trace)

    async def wtf(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        """Log at FATAL. Deprecated, use :meth:`f`."""
        warnings.warn("Logger.wtf is deprecated in favor of Logger.f", DeprecationWarning, stacklevel=2)
        await self.log(Level.FATAL, message, time=time, error=error, stack_trace=stack_trace)

    async def f(
        self,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        await self.log(Level.FATAL, message, time=time, error=error, stack_trace=stack_trace)

    # =========================================================================
    # Pipeline
    # =========================================================================

    async def log(
        self,
        level: Level,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> None:
        """Log ``message`` at ``level`` and await remote delivery, if any."""
        event = self._dispatch(level, message, time=time, error=error, stack_trace=stack_trace)
        if event is not None and self._remote is not None:
            await self._remote.send(event)

    def log_nowait(
        self,
        level: Level,
        message: Any,
        *,
        time: Optional[datetime] = None,
        error: Optional[object] = None,
        stack_trace: Optional[StackTrace] = None,
    ) -> Optional[asyncio.Task[bool]]:
        """Run the local pipeline now and schedule remote delivery in the background.

        Returns the delivery task, or ``None`` when nothing is sent remotely.
        Requires a running event loop when a remote target is configured.
        """
        loop = asyncio.get_running_loop() if self._remote is not None and self._active else None
        event = self._dispatch(level, message, time=time, error=error, stack_trace=stack_trace)
        if event is None or loop is None or self._remote is None:
            return None
        task = loop.create_task(self._remote.send(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _check_contract(self, level: Level, error: Optional[object]) -> None:
        if not self._active:
            raise LoggerClosedError()
        if error is not None and is_stack_trace(error):
            raise InvalidErrorArgumentError(error_type=type(error).__name__)
        if level == Level.ALL:
            raise InvalidLevelError("Log events cannot have Level.ALL", level="ALL")
        if level == Level.OFF:
            raise InvalidLevelError("Log events cannot have Level.OFF", level="OFF")

    def _dispatch(
        self,
        level: Level,
        message: Any,
        *,
        time: Optional[datetime],
        error: Optional[object],
        stack_trace: Optional[StackTrace],
    ) -> Optional[LogEvent]:
        """Run the local pipeline; returns the event when it is due for remote delivery."""
        self._check_contract(level, error)

        event = LogEvent.create(Level(level), message, time=time, error=error, stack_trace=stack_trace)
        for callback in self._defaults.log_listeners.snapshot():
            _guarded(callback, event, "log_listener_failed")

        if not self._filter.should_log(event):
            return None

        lines = self._printer.log(event)
        if not lines:
            return None

        output_event = OutputEvent(event, tuple(lines))
        for output_callback in self._defaults.output_listeners.snapshot():
            _guarded(output_callback, output_event, "output_listener_failed")
        _guarded(self._output.output, output_event, "output_failed")
        return event

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def is_closed(self) -> bool:
        return not self._active

    async def close(self) -> None:
        """Close the logger and release its filter, printer, output and remote sink."""
        self._active = False
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        await self._filter.destroy()
        await self._printer.destroy()
        await self._output.destroy()
        if self._remote is not None:
            await self._remote.aclose()

    # =========================================================================
    # Process-wide defaults and listeners
    # =========================================================================

    @staticmethod
    def get_default_level() -> Level:
        return global_defaults.level

    @staticmethod
    def set_default_level(level: Level) -> None:
        global_defaults.level = level

    @staticmethod
    def get_default_filter() -> FilterFactory:
        return global_defaults.filter_factory

    @staticmethod
    def set_default_filter(factory: FilterFactory) -> None:
        global_defaults.filter_factory = factory

    @staticmethod
    def get_default_printer() -> PrinterFactory:
        return global_defaults.printer_factory

    @staticmethod
    def set_default_printer(factory: PrinterFactory) -> None:
        global_defaults.printer_factory = factory

    @staticmethod
    def get_default_output() -> OutputFactory:
        return global_defaults.output_factory

    @staticmethod
    def set_default_output(factory: OutputFactory) -> None:
        global_defaults.output_factory = factory

    @staticmethod
    def add_log_listener(callback: LogCallback) -> None:
        """Register a callback invoked for every new ``LogEvent``."""
        global_defaults.log_listeners.add(callback)

    @staticmethod
    def remove_log_listener(callback: LogCallback) -> bool:
        """Remove a log callback; returns whether it was registered."""
        return global_defaults.log_listeners.remove(callback)

    @staticmethod
    def add_output_listener(callback: OutputCallback) -> None:
        """Register a callback invoked for every new ``OutputEvent``."""
        global_defaults.output_listeners.add(callback)

    @staticmethod
    def remove_output_listener(callback: OutputCallback) -> None:
        global_defaults.output_listeners.remove(callback)


def _guarded(callback: Callable[[T], None], event: T, failure: str) -> None:
    # Logging must never change the caller's control flow.
    try:
        callback(event)
    except Exception:
        logger.error(failure, callback=getattr(callback, "__qualname__", repr(callback)), exc_info=True)


def _printer_for(cfg: LoggingSettings) -> LogPrinter:
    if cfg.printer is PrinterKind.JSON:
        return JsonPrinter()
    colors = cfg.use_color
    if colors is None:
        colors = bool(getattr(ConsoleOutput().stream, "isatty", lambda: False)())
    if cfg.printer is PrinterKind.SIMPLE:
        return SimplePrinter(colors=colors)
    return PrettyPrinter(colors=colors)
