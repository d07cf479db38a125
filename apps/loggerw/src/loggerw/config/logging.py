"""
Logging Configuration.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"
    OFF = "OFF"
    # deprecated aliases, resolved by Level.parse
    VERBOSE = "VERBOSE"
    WTF = "WTF"
    NOTHING = "NOTHING"


class PrinterKind(str, Enum):
    PRETTY = "pretty"
    SIMPLE = "simple"
    JSON = "json"


class DiagnosticsFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Logger construction defaults and remote collector settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOGGERW_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.TRACE, description="Minimum level passed by the filter")
    printer: PrinterKind = Field(default=PrinterKind.PRETTY, description="Line renderer (pretty, simple, json)")
    use_color: Optional[bool] = Field(
        default=None,
        description="Force ANSI colors on or off; detected from the output stream when unset",
    )
    remote_url: Optional[str] = Field(default=None, description="Collector URL for remote delivery")
    remote_timeout: float = Field(default=10.0, gt=0, description="Remote POST timeout in seconds")
    diagnostics_level: str = Field(default="WARNING", description="Level of the internal diagnostic channel")
    diagnostics_format: DiagnosticsFormat = Field(
        default=DiagnosticsFormat.CONSOLE,
        description="Diagnostic channel output format",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("remote_url", mode="before")
    @classmethod
    def _blank_url_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value
