"""
Exception response templates for Alchemy Table.

Purpose
-------
Maps each exception type to the error payload an application layer (the
web service) should return: title, description, status code. Call sites
raise structured errors and never build user-facing text themselves.

Design Notes
------------
- ``template`` is a ``str.format`` pattern over the exception's
  ``details`` plus its ``message``. When a placeholder is missing the
  description falls back to ``str(exc)``.
- Lookup walks the MRO: a subclass without an entry of its own uses its
  nearest registered ancestor.
- Anything unregistered renders through ``DEFAULT_TEMPLATE`` (500) and never
  leaks its message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.core.exceptions import ConfigurationError
from src.modules.shared.exceptions import (
    AlchemyDomainException,
    ErrorSeverity,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    StructuredError,
)


@dataclass(frozen=True)
class ExceptionTemplate:
    title: str
    template: str
    status_code: int
    help_text: Optional[str] = None
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def format(self, exception: Exception) -> Dict[str, Any]:
        """Build the payload: title, description, status_code, error_code, help_text, severity."""
        fields: Dict[str, Any] = {}
        error_code = "INTERNAL_ERROR"
        if isinstance(exception, StructuredError):
            fields = {"message": exception.message, **exception.details}
            error_code = exception.error_code

        try:
            description = self.template.format(**fields)
        except (KeyError, IndexError, ValueError):
            description = str(exception)

        return {
            "title": self.title,
            "description": description,
            "status_code": self.status_code,
            "error_code": error_code,
            "help_text": self.help_text,
            "severity": self.severity.value,
        }


EXCEPTION_TEMPLATES: Dict[type, ExceptionTemplate] = {
    InvalidArgumentError: ExceptionTemplate(
        title="Invalid Input",
        template="{field}: {message}",
        status_code=400,
        help_text="Check the request data and try again.",
        severity=ErrorSeverity.INFO,
    ),
    InvalidOperationError: ExceptionTemplate(
        title="Action Not Allowed",
        template="{reason}",
        status_code=422,
        severity=ErrorSeverity.INFO,
    ),
    NotFoundError: ExceptionTemplate(
        title="Not Found",
        template="{resource_type} not found.",
        status_code=404,
        severity=ErrorSeverity.INFO,
    ),
    AlchemyDomainException: ExceptionTemplate(
        title="Request Failed",
        template="{message}",
        status_code=400,
        severity=ErrorSeverity.WARNING,
    ),
    ConfigurationError: ExceptionTemplate(
        title="Configuration Error",
        template="A system configuration error occurred. Please contact support.",
        status_code=500,
        help_text="Error code: CONFIG_ERROR",
        severity=ErrorSeverity.CRITICAL,
    ),
}

DEFAULT_TEMPLATE = ExceptionTemplate(
    title="Internal Error",
    template="An unexpected error occurred. Please try again later.",
    status_code=500,
)


def get_exception_template(exception: Exception) -> Optional[ExceptionTemplate]:
    """Nearest registered template along the MRO, or None."""
    return next(
        (EXCEPTION_TEMPLATES[cls] for cls in type(exception).__mro__ if cls in EXCEPTION_TEMPLATES),
        None,
    )


def format_exception(exception: Exception) -> Dict[str, Any]:
    return (get_exception_template(exception) or DEFAULT_TEMPLATE).format(exception)
