"""
loggerw: leveled logging facade with pluggable filters, printers and outputs.

Events flow through a filter, a printer and an output; passed events can
additionally be posted to a remote HTTP collector.

Design Pattern: Strategy Pattern for filter/printer/output.
Library: structlog for the internal diagnostic channel, orjson for JSON,
httpx for remote delivery, pydantic-settings for configuration.
"""

from .errors import (
    ContractViolation,
    InvalidErrorArgumentError,
    InvalidLevelError,
    LoggerClosedError,
    LoggerError,
)
from .events import LogCallback, LogEvent, OutputCallback, OutputEvent
from .filters import DevelopmentFilter, LogFilter, ProductionFilter
from .levels import Level
from .listeners import ListenerRegistry, LoggerDefaults, defaults
from .logger import Logger
from .outputs import ConsoleOutput, LogOutput, MemoryOutput, MultiOutput
from .printers import JsonPrinter, LogPrinter, PrettyPrinter, SimplePrinter
from .remote import RemoteLogRecord, RemoteSink

__version__ = "0.1.0"

__all__ = [
    "ConsoleOutput",
    "ContractViolation",
    "DevelopmentFilter",
    "InvalidErrorArgumentError",
    "InvalidLevelError",
    "JsonPrinter",
    "Level",
    "ListenerRegistry",
    "LogCallback",
    "LogEvent",
    "LogFilter",
    "LogOutput",
    "LogPrinter",
    "Logger",
    "LoggerClosedError",
    "LoggerDefaults",
    "LoggerError",
    "MemoryOutput",
    "MultiOutput",
    "OutputCallback",
    "OutputEvent",
    "PrettyPrinter",
    "ProductionFilter",
    "RemoteLogRecord",
    "RemoteSink",
    "SimplePrinter",
    "defaults",
]
