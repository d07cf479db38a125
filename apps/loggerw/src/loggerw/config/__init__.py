"""
loggerw Configuration Module.

One settings class per concern, each with its own environment variable prefix:

    LOGGERW_ENV          -> settings.environment.env
    LOGGERW_LOG_LEVEL    -> settings.logging.level
    LOGGERW_LOG_PRINTER  -> settings.logging.printer
    LOGGERW_LOG_REMOTE_URL, LOGGERW_LOG_REMOTE_TIMEOUT, ...

Usage:
    from loggerw.config import settings

    settings.environment.is_production
    settings.logging.remote_url
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import Environment, EnvironmentSettings
from .logging import DiagnosticsFormat, LoggingSettings, LogLevel, PrinterKind


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


settings = Settings()

__all__ = [
    "DiagnosticsFormat",
    "Environment",
    "EnvironmentSettings",
    "LogLevel",
    "LoggingSettings",
    "PrinterKind",
    "Settings",
    "settings",
]
