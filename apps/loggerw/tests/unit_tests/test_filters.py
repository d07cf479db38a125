"""
Filter unit tests: threshold gating and environment suppression.
"""

from __future__ import annotations

import itertools

import pytest

from loggerw import DevelopmentFilter, Level, LogEvent, ProductionFilter
from loggerw.levels import EVENT_LEVELS

THRESHOLDS = list(Level)


class TestThreshold:
    @pytest.mark.parametrize("level, threshold", list(itertools.product(EVENT_LEVELS, THRESHOLDS)))
    def test_passes_iff_weight_at_least_threshold(self, level: Level, threshold: Level) -> None:
        f = ProductionFilter(threshold)
        assert f.should_log(LogEvent.create(level, "m")) is (level.weight >= threshold.weight)

    def test_threshold_is_settable(self) -> None:
        f = ProductionFilter()
        f.level = Level.ERROR
        assert not f.should_log(LogEvent.create(Level.WARNING, "m"))
        assert f.should_log(LogEvent.create(Level.ERROR, "m"))

    def test_unset_threshold_passes_everything(self) -> None:
        assert ProductionFilter().should_log(LogEvent.create(Level.TRACE, "m"))


class TestDevelopmentFilter:
    def test_follows_threshold_outside_production(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGGERW_ENV", "development")
        f = DevelopmentFilter(Level.INFO)
        f.init()
        assert f.should_log(LogEvent.create(Level.INFO, "m"))
        assert not f.should_log(LogEvent.create(Level.DEBUG, "m"))

    def test_suppresses_everything_in_production(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGGERW_ENV", "production")
        f = DevelopmentFilter(Level.ALL)
        f.init()
        assert not f.should_log(LogEvent.create(Level.FATAL, "m"))

    def test_explicit_enabled_overrides_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGGERW_ENV", "production")
        f = DevelopmentFilter(Level.ALL, enabled=True)
        f.init()
        assert f.should_log(LogEvent.create(Level.TRACE, "m"))
