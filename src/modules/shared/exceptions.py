"""
Domain exceptions for the Alchemy Table gamification core.

Purpose
-------
The errors the engines and the progression service raise. An application
layer turns them into 4xx-style payloads through the template registry in
``src.domain.exceptions``.

Design Notes
------------
- ``StructuredError`` holds the shared metadata (message, details,
  severity, is_retryable, error_code). Domain errors and the
  infrastructure errors in ``src.core.exceptions`` both build on it, so one
  log handler can render either.
- The pure engines raise exactly one kind: ``InvalidArgumentError``. It
  names the offending field and, when known, the offending value; callers
  branch on ``exc.field`` rather than on message text.
- ``InvalidOperationError`` (a rule refused the action) and
  ``NotFoundError`` (unknown content id) come from the service and the
  content layer only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional


class ErrorSeverity(Enum):
    """How loudly an error should be logged, and whether anyone gets paged."""

    DEBUG = "debug"
    INFO = "info"  # bad input, refused actions
    WARNING = "warning"
    ERROR = "error"  # bugs
    CRITICAL = "critical"  # broken deployment


_ALERTING = frozenset({ErrorSeverity.ERROR, ErrorSeverity.CRITICAL})

_UNSET: Any = object()


class StructuredError(Exception):
    """Exception with machine-readable metadata attached."""

    DEFAULT_SEVERITY: ClassVar[ErrorSeverity] = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        is_retryable: Optional[bool] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details) if details else {}
        self.severity = self.DEFAULT_SEVERITY if severity is None else severity
        self.is_retryable = self.DEFAULT_RETRYABLE if is_retryable is None else is_retryable
        self.error_code = error_code or type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
        }

    def _details_suffix(self) -> str:
        return f" | Details: {self.details}" if self.details else ""

    def __str__(self) -> str:
        return f"{self.message} [{self.error_code}]{self._details_suffix()}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, details={self.details!r}, "
            f"severity={self.severity.value!r}, is_retryable={self.is_retryable!r})"
        )


class AlchemyDomainException(StructuredError):
    """
    Base class for every gameplay-level error.

    Example:
        >>> raise AlchemyDomainException("Craft refused", {"recipe_id": "calm-tea"})
    """


class InvalidArgumentError(AlchemyDomainException):
    """
    An engine precondition does not hold.

    Raised before any computation, so a partial result never escapes.
    It points at malformed stored data or a caller bug, so retrying is
    pointless.

    Args:
        field: Offending argument or record field, e.g. ``"player_level"``
        message: e.g. "Player level must be a positive number, got -1"
        value: Offending value; omit when there is nothing to show.
            ``None`` is a legitimate value to report.
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, field: str, message: str, value: Any = _UNSET) -> None:
        self.field = field
        self.has_value = value is not _UNSET
        self.value = value if self.has_value else None

        details: Dict[str, Any] = {"field": field}
        if self.has_value:
            details["value"] = value
        super().__init__(message, details=details, error_code="INVALID_ARGUMENT")


class InvalidOperationError(AlchemyDomainException):
    """
    A game rule refused the player's action.

    Level too low, ingredients short, reward already claimed, cosmetic
    still locked. ``error_code`` is ``INVALID_<ACTION>``.

    Example:
        >>> raise InvalidOperationError("craft", "Level 3 required")
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, action: str, reason: str) -> None:
        self.action = action
        self.reason = reason
        super().__init__(
            f"Invalid operation '{action}': {reason}",
            details={"action": action, "reason": reason},
            error_code=f"INVALID_{action.upper()}",
        )


class NotFoundError(AlchemyDomainException):
    """No content entry with the requested id (``resource_type`` is e.g. "Recipe")."""

    DEFAULT_SEVERITY = ErrorSeverity.INFO

    def __init__(self, resource_type: str, identifier: Optional[Any] = None) -> None:
        self.resource_type = resource_type
        self.identifier = identifier

        message = f"{resource_type} not found"
        if identifier is not None:
            message += f": {identifier}"

        super().__init__(
            message,
            details={"resource_type": resource_type, "identifier": identifier},
            error_code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
        )


# ============================================================================
# Helpers for handlers
# ============================================================================


def is_transient_error(exc: Exception) -> bool:
    """True only for structured errors flagged as retryable."""
    return isinstance(exc, StructuredError) and exc.is_retryable


def get_error_severity(exc: Exception) -> ErrorSeverity:
    """
    Severity carried by ``exc``.

    Anything exposing an ``ErrorSeverity`` as ``severity`` is honoured,
    infrastructure errors included. Everything else is an unexpected ERROR.
    """
    severity = getattr(exc, "severity", None)
    return severity if isinstance(severity, ErrorSeverity) else ErrorSeverity.ERROR


def should_alert(exc: Exception) -> bool:
    return get_error_severity(exc) in _ALERTING
