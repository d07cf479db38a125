import typing as t

import httpx
import pytest
import structlog

from loggerw import LogEvent, LogOutput, LogPrinter, LoggerDefaults, OutputEvent, ProductionFilter
from loggerw.listeners import defaults as global_defaults


class RecordingPrinter(LogPrinter):
    """Printer that renders ``message`` verbatim and remembers every call."""

    def __init__(self, lines: t.Optional[list[str]] = None, calls: t.Optional[list[str]] = None):
        self._lines = lines
        self.events: list[LogEvent] = []
        self.destroyed = 0
        self._calls = calls

    def log(self, event: LogEvent) -> list[str]:
        self.events.append(event)
        if self._calls is not None:
            self._calls.append("printer")
        if self._lines is not None:
            return list(self._lines)
        return [str(event.message)]

    async def destroy(self) -> None:
        self.destroyed += 1


class RecordingOutput(LogOutput):
    """Output that stores events and can be told to fail."""

    def __init__(self, fail: bool = False, calls: t.Optional[list[str]] = None):
        self.events: list[OutputEvent] = []
        self.fail = fail
        self.initialized = 0
        self.destroyed = 0
        self._calls = calls

    def init(self) -> None:
        self.initialized += 1

    def output(self, event: OutputEvent) -> None:
        if self._calls is not None:
            self._calls.append("output")
        if self.fail:
            raise RuntimeError("sink is broken")
        self.events.append(event)

    async def destroy(self) -> None:
        self.destroyed += 1


class RecordingFilter(ProductionFilter):
    def __init__(self, calls: t.Optional[list[str]] = None):
        super().__init__()
        self.destroyed = 0
        self._calls = calls

    def should_log(self, event: LogEvent) -> bool:
        if self._calls is not None:
            self._calls.append("filter")
        return super().should_log(event)

    async def destroy(self) -> None:
        self.destroyed += 1


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the process-wide state and environment identical for every test."""
    for name in ("LOGGERW_ENV", "LOGGERW_LOG_LEVEL", "LOGGERW_LOG_PRINTER", "LOGGERW_LOG_REMOTE_URL"):
        monkeypatch.delenv(name, raising=False)
    global_defaults.reset()
    yield
    global_defaults.reset()
    structlog.reset_defaults()


@pytest.fixture
def isolated_defaults() -> LoggerDefaults:
    return LoggerDefaults()


@pytest.fixture
def printer() -> RecordingPrinter:
    return RecordingPrinter()


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def collector():
    """Fake remote collector: returns (requests, client factory)."""
    requests: list[httpx.Request] = []

    def make_client(status_code: int = 200, exc: t.Optional[Exception] = None) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc
            return httpx.Response(status_code, json={"ok": status_code < 300})

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return requests, make_client
