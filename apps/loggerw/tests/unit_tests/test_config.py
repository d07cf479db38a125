"""
Settings and Logger.from_settings tests.
"""

from __future__ import annotations

import io

import pytest
import structlog
from pydantic import ValidationError

from loggerw import JsonPrinter, Level, Logger, PrettyPrinter, SimplePrinter
from loggerw.config import EnvironmentSettings, LoggingSettings, PrinterKind
from loggerw.diagnostics import configure_diagnostics, get_logger


class TestLoggingSettings:
    def test_defaults(self) -> None:
        cfg = LoggingSettings()
        assert cfg.level.value == "TRACE"
        assert cfg.printer is PrinterKind.PRETTY
        assert cfg.remote_url is None
        assert cfg.remote_timeout == 10.0

    def test_environment_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGGERW_LOG_LEVEL", "warning")
        monkeypatch.setenv("LOGGERW_LOG_PRINTER", "json")
        monkeypatch.setenv("LOGGERW_LOG_REMOTE_URL", "https://collector.test/logs")
        cfg = LoggingSettings()
        assert cfg.level.value == "WARNING"
        assert cfg.printer is PrinterKind.JSON
        assert cfg.remote_url == "https://collector.test/logs"

    def test_blank_remote_url_disables_remote(self) -> None:
        assert LoggingSettings(remote_url="  ").remote_url is None

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(remote_timeout=0)

    def test_environment(self, monkeypatch) -> None:
        assert EnvironmentSettings().is_development
        monkeypatch.setenv("LOGGERW_ENV", "production")
        env = EnvironmentSettings()
        assert env.is_production
        assert not env.debug


class TestFromSettings:
    def test_installs_diagnostics_from_settings(self, isolated_defaults, monkeypatch) -> None:
        calls = []
        monkeypatch.setattr("loggerw.logger.configure_diagnostics", lambda **kwargs: calls.append(kwargs))
        cfg = LoggingSettings(diagnostics_level="ERROR", diagnostics_format="json", use_color=False)
        Logger.from_settings(cfg, defaults=isolated_defaults)
        assert calls == [{"level": "ERROR", "fmt": "json"}]

    def test_diagnostics_follow_settings(self, isolated_defaults, capsys) -> None:
        cfg = LoggingSettings(diagnostics_level="ERROR", diagnostics_format="json", use_color=False)
        Logger.from_settings(cfg, defaults=isolated_defaults)
        get_logger("loggerw.test").warning("hidden")
        get_logger("loggerw.test").error("shown")
        lines = capsys.readouterr().err.strip().splitlines()
        structlog.reset_defaults()
        assert len(lines) == 1
        assert '"message":"shown"' in lines[0]

    def test_alias_level_name_is_accepted(self, isolated_defaults, monkeypatch) -> None:
        monkeypatch.setenv("LOGGERW_LOG_LEVEL", "verbose")
        cfg = LoggingSettings(use_color=False)
        with pytest.warns(DeprecationWarning):
            logger = Logger.from_settings(cfg, defaults=isolated_defaults)
        assert logger._filter.level is Level.TRACE

    @pytest.mark.asyncio
    async def test_builds_logger(self, isolated_defaults) -> None:
        cfg = LoggingSettings(level="ERROR", printer="simple", use_color=False, remote_url="https://c.test/x")
        logger = Logger.from_settings(cfg, defaults=isolated_defaults)
        assert isinstance(logger._printer, SimplePrinter)
        assert logger._filter.level is Level.ERROR
        assert logger.remote_url == "https://c.test/x"
        await logger.close()

    @pytest.mark.parametrize("kind, expected", [("pretty", PrettyPrinter), ("json", JsonPrinter)])
    def test_printer_selection(self, isolated_defaults, kind, expected) -> None:
        logger = Logger.from_settings(LoggingSettings(printer=kind, use_color=False), defaults=isolated_defaults)
        assert isinstance(logger._printer, expected)
        assert logger.remote_url is None


class TestDiagnostics:
    def test_console_format(self) -> None:
        stream = io.StringIO()
        configure_diagnostics(level="INFO", stream=stream)
        get_logger("loggerw.test").info("remote_post_failed", status_code=500)
        line = stream.getvalue().strip()
        assert "INFO" in line
        assert "loggerw.test" in line
        assert "remote_post_failed" in line
        assert "status_code=500" in line

    def test_level_filtering_and_json(self) -> None:
        stream = io.StringIO()
        configure_diagnostics(level="WARNING", fmt="json", stream=stream)
        get_logger("loggerw.test").info("hidden")
        get_logger("loggerw.test").warning("shown")
        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert '"message":"shown"' in lines[0]
        structlog.reset_defaults()
