"""
Domain exceptions package for Alchemy Table.

Purpose
-------
Re-export the domain exception hierarchy and the response template
registry that maps each exception type to a title, message and status
code.

Exports
-------
- Domain exception classes (defined in src/modules/shared/exceptions.py)
- EXCEPTION_TEMPLATES: Registry mapping exception types to templates
- format_exception: Render any exception as an error payload
"""

from src.modules.shared.exceptions import (
    AlchemyDomainException,
    ErrorSeverity,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    get_error_severity,
    is_transient_error,
    should_alert,
)

from .registry import (
    DEFAULT_TEMPLATE,
    EXCEPTION_TEMPLATES,
    ExceptionTemplate,
    format_exception,
    get_exception_template,
)

__all__ = [
    # Exception classes
    "AlchemyDomainException",
    "InvalidArgumentError",
    "InvalidOperationError",
    "NotFoundError",
    "ErrorSeverity",
    # Utilities
    "is_transient_error",
    "get_error_severity",
    "should_alert",
    # Registry
    "ExceptionTemplate",
    "EXCEPTION_TEMPLATES",
    "DEFAULT_TEMPLATE",
    "get_exception_template",
    "format_exception",
]
