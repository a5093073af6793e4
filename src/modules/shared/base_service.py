"""
Base Service Foundation

Purpose
-------
Common ground for the services that sit on top of the pure engines. A
service enforces the rules the engines leave to callers (claim once, equip
only unlocked cosmetics) and is the only layer that logs.

Design Notes
------------
- Each service gets a logger named after its own module.
- ``log_error`` picks the log level from the exception's severity: a
  refused craft is INFO, an unexpected bug is ERROR.
- Services neither persist nor publish. They return new records plus
  ``DomainEvent`` objects and the caller decides what to do with them.

Usage
-----
    class ProgressionService(BaseService):
        def award_xp(self, progress, amount):
            self.log_operation("award_xp", amount=amount)
            ...
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from src.core.logging.logger import get_logger

from .exceptions import ErrorSeverity, get_error_severity

_LEVEL_FOR_SEVERITY = {severity: getattr(logging, severity.name) for severity in ErrorSeverity}


class BaseService:
    """Shared logging helpers; pass ``logger`` to inject a test double."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.log = logger or get_logger(type(self).__module__)

    def log_operation(self, operation: str, **context: Any) -> None:
        self.log.info(
            f"Service operation: {operation}",
            extra={"operation": operation, **context},
        )

    def log_error(self, operation: str, error: Exception, **context: Any) -> None:
        """Log ``error`` at the level matching its severity, with the failing operation attached."""
        self.log.log(
            _LEVEL_FOR_SEVERITY[get_error_severity(error)],
            f"Service error during {operation}: {error}",
            extra={
                "operation": operation,
                "error_type": type(error).__name__,
                "error_message": str(error),
                **context,
            },
        )
