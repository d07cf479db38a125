"""
Severity levels.

Levels are integer-comparable thresholds. ``ALL`` and ``OFF`` are sentinels
that only make sense as filter thresholds, never as the level of an event.
"""

from __future__ import annotations

import warnings
from enum import IntEnum

from .errors import InvalidLevelError

# Deprecated spellings and the canonical level they resolve to.
_DEPRECATED_ALIASES = {
    "VERBOSE": "TRACE",
    "WTF": "FATAL",
    "NOTHING": "OFF",
}


class Level(IntEnum):
    """Ordered log severities.

    Aliases share the weight of their canonical level, so ``Level.VERBOSE``
    is ``Level.TRACE`` and reports ``TRACE`` as its name.
    """

    ALL = 0
    TRACE = 1000
    VERBOSE = 1000  # deprecated, use TRACE
    DEBUG = 2000
    INFO = 3000
    WARNING = 4000
    ERROR = 5000
    FATAL = 6000
    WTF = 6000  # deprecated, use FATAL
    OFF = 10000
    NOTHING = 10000  # deprecated, use OFF

    @property
    def weight(self) -> int:
        return int(self)

    @property
    def canonical(self) -> Level:
        """The canonical level; aliases already resolve to it."""
        return Level(self.value)

    @property
    def is_sentinel(self) -> bool:
        return self in (Level.ALL, Level.OFF)

    @classmethod
    def parse(cls, name: str | Level) -> Level:
        """Resolve a case-insensitive level name.

        Deprecated alias names still resolve but emit a ``DeprecationWarning``.
        """
        if isinstance(name, Level):
            return name
        key = str(name).strip().upper()
        if key in _DEPRECATED_ALIASES:
            warnings.warn(
                f"Level.{key} is deprecated in favor of Level.{_DEPRECATED_ALIASES[key]}",
                DeprecationWarning,
                stacklevel=2,
            )
        try:
            return cls[key]
        except KeyError:
            raise InvalidLevelError(f"Unknown log level: {name!r}", level=str(name)) from None


# Real (non-sentinel) levels in ascending order.
EVENT_LEVELS: tuple[Level, ...] = tuple(level for level in Level if not level.is_sentinel)
