"""
Infrastructure exceptions for Alchemy Table.

Purpose
-------
Errors that mean the deployment is broken rather than that a player asked
for something odd: unreadable or malformed content packs, invalid settings.
They need engineering attention.

Design Notes
------------
- Built on ``StructuredError`` like the domain errors, so they carry the
  same metadata and the same ``ErrorSeverity`` scale.
- Kept outside the domain hierarchy: ``except AlchemyDomainException``
  never swallows a broken deployment.
- ``str()`` puts the code first, ``[CONFIG_ERROR] ...``, which is how these
  show up in logs.
"""

from __future__ import annotations

from src.modules.shared.exceptions import ErrorSeverity, StructuredError


class AlchemyInfrastructureException(StructuredError):
    """
    Base class for infrastructure errors.

    Example:
        >>> raise AlchemyInfrastructureException(
        ...     "Content directory unreadable", {"path": "config/content"}
        ... )
    """

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}{self._details_suffix()}"


class ConfigurationError(AlchemyInfrastructureException):
    """
    A setting or content file is missing or invalid.

    Args:
        config_key: Setting name or content file at fault
        message: What is wrong with it
    """

    DEFAULT_SEVERITY = ErrorSeverity.CRITICAL

    def __init__(self, config_key: str, message: str) -> None:
        self.config_key = config_key
        self.reason = message
        super().__init__(
            f"Configuration error for {config_key}: {message}",
            details={"config_key": config_key, "message": message},
            error_code="CONFIG_ERROR",
        )
