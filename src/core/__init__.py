"""
Core infrastructure layer for Alchemy Table.

Purpose
-------
Provide a single import surface for the infrastructure subsystems:

- Configuration (Config, Environment)
- Logging (structured logging, logger factory, LogContext)
- Infrastructure exceptions (AlchemyInfrastructureException hierarchy)

Design Decisions
----------------
- This module is intentionally thin: no logic, no I/O beyond what the
  submodules perform at import.
- Public API is explicit via __all__.
"""

from __future__ import annotations

from src.core.config import Config, Environment
from src.core.exceptions import AlchemyInfrastructureException, ConfigurationError
from src.core.logging import LogContext, get_logger, setup_logging, shutdown_logging

__all__ = [
    # Configuration
    "Config",
    "Environment",
    # Exceptions
    "AlchemyInfrastructureException",
    "ConfigurationError",
    # Logging
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "LogContext",
]
