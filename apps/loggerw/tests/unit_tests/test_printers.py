"""
Built-in printer tests.
"""

from __future__ import annotations

from datetime import datetime, timezone

import orjson

from loggerw import JsonPrinter, Level, LogEvent, PrettyPrinter, SimplePrinter

T = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestPrettyPrinter:
    def test_single_line_without_colors(self) -> None:
        lines = PrettyPrinter(colors=False, print_time=False).log(LogEvent.create(Level.INFO, "ready"))
        assert lines == ["   INFO | ready"]

    def test_error_and_multiline_message_are_indented(self) -> None:
        event = LogEvent.create(Level.ERROR, "first\nsecond", error=ValueError("bad"))
        lines = PrettyPrinter(colors=False, print_time=False).log(event)
        assert lines[0] == "  ERROR | first"
        assert lines[1] == "          second"
        assert lines[2] == "          bad"

    def test_naive_time_is_local(self) -> None:
        local = datetime(2024, 1, 2, 3, 4, 5)
        lines = PrettyPrinter(colors=False).log(LogEvent.create(Level.INFO, "x", time=local))
        assert lines[0] == "2024-01-02 03:04:05 |    INFO | x"

    def test_aware_time_is_shown_in_local_zone(self) -> None:
        lines = PrettyPrinter(colors=False).log(LogEvent.create(Level.INFO, "x", time=T))
        assert lines[0].startswith(T.astimezone().strftime("%Y-%m-%d %H:%M:%S"))

    def test_colors_wrap_level(self) -> None:
        lines = PrettyPrinter(colors=True, print_time=False).log(LogEvent.create(Level.WARNING, "w"))
        assert "\033[33m" in lines[0]
        assert lines[0].endswith("w")

    def test_stack_trace_respects_method_count(self) -> None:
        trace = "\n".join(f'File "m.py", line {i}, in f{i}\n    call()' for i in range(10))
        event = LogEvent.create(Level.ERROR, "boom", stack_trace=trace)
        lines = PrettyPrinter(colors=False, print_time=False, method_count=2).log(event)
        assert len(lines) == 1 + 4


class TestSimplePrinter:
    def test_prefix_and_error(self) -> None:
        event = LogEvent.create(Level.INFO, "hello", error="oops")
        assert SimplePrinter().log(event) == ["[I] hello ERROR: oops"]

    def test_time(self) -> None:
        event = LogEvent.create(Level.DEBUG, "x", time=T)
        assert SimplePrinter(print_time=True).log(event) == [f"[D] TIME: {T.isoformat()} x"]


class TestJsonPrinter:
    def test_one_json_line(self) -> None:
        event = LogEvent.create(Level.FATAL, {"k": "v"}, time=T, error=RuntimeError("down"))
        (line,) = JsonPrinter().log(event)
        record = orjson.loads(line)
        assert record["level"] == "FATAL"
        assert record["timestamp"] == "2024-01-02T03:04:05Z"
        assert record["error"] == "down"
        assert orjson.loads(record["message"]) == {"k": "v"}
