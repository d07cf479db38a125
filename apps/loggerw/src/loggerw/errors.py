"""
Exception hierarchy for loggerw.

Only caller contract violations ever reach the caller. Failures inside
listeners, outputs or the remote sink are reported on the diagnostic channel
and suppressed.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LoggerError(Exception):
    """Root of all loggerw errors.

    Carries a stable ``code`` and a ``details`` mapping for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


# ================================
# Contract violations
# The call is rejected before any event is built or any listener runs
# ================================


class ContractViolation(LoggerError, ValueError):
    """A logging call broke the caller contract."""

    pass


class LoggerClosedError(ContractViolation):
    """Raised when logging through a logger that has been closed."""

    def __init__(self) -> None:
        super().__init__("Logger has already been closed.", code="LOGGER_CLOSED")


class InvalidLevelError(ContractViolation):
    """Raised for sentinel levels used as event levels, or unknown level names."""

    def __init__(self, message: str, *, level: str) -> None:
        super().__init__(message, code="INVALID_LEVEL", details={"level": level})


class InvalidErrorArgumentError(ContractViolation):
    """Raised when a stack trace is passed as the ``error`` argument."""

    def __init__(self, *, error_type: str) -> None:
        super().__init__(
            "Error parameter cannot take a stack trace!",
            code="ERROR_IS_STACK_TRACE",
            details={"error_type": error_type},
        )
