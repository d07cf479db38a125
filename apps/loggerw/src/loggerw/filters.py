"""
Log filters.

A filter decides whether an event is recorded. Every filter compares weights
the same way: higher weight is more severe, and the threshold is inclusive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .config import EnvironmentSettings
from .events import LogEvent
from .levels import Level


class LogFilter(ABC):
    """Abstract base class for filters.

    The owning ``Logger`` calls :meth:`init` once at construction, assigns
    :attr:`level`, and awaits :meth:`destroy` once on close.
    """

    def __init__(self, level: Optional[Level] = None) -> None:
        self._level = level

    @property
    def level(self) -> Optional[Level]:
        return self._level

    @level.setter
    def level(self, value: Optional[Level]) -> None:
        self._level = value

    def init(self) -> None:
        pass

    def passes_threshold(self, event: LogEvent) -> bool:
        threshold = self._level if self._level is not None else Level.ALL
        return event.level.weight >= threshold.weight

    @abstractmethod
    def should_log(self, event: LogEvent) -> bool:
        """Whether ``event`` should be rendered and delivered."""
        ...

    async def destroy(self) -> None:
        pass


class ProductionFilter(LogFilter):
    """Threshold-only filter, active in every environment."""

    def should_log(self, event: LogEvent) -> bool:
        return self.passes_threshold(event)


class DevelopmentFilter(LogFilter):
    """Threshold filter that suppresses everything in production.

    Args:
        level: Initial threshold (normally assigned by the Logger)
        enabled: Force the filter on or off; when unset it follows
            ``LOGGERW_ENV`` and is enabled outside production.
    """

    def __init__(self, level: Optional[Level] = None, *, enabled: Optional[bool] = None) -> None:
        super().__init__(level)
        self._enabled = enabled

    def init(self) -> None:
        if self._enabled is None:
            self._enabled = EnvironmentSettings().debug

    def should_log(self, event: LogEvent) -> bool:
        if self._enabled is None:
            self.init()
        if not self._enabled:
            return False
        return self.passes_threshold(event)
