"""
Alchemy Shared Module

Purpose
-------
Provides domain-level foundations for all gamification modules:
- Domain exceptions and error handling
- Base service pattern
- Gameplay constants
- Domain validation utilities

Design Notes
------------
- Only BaseService touches infrastructure (the core logger)
- Engines (xp, crafting, quests, cosmetics) use validators and constants
- Services use BaseService for structured logging

Usage
-----
    from src.modules.shared import (
        BaseService,
        InvalidArgumentError,
        require_positive_level,
    )
"""

from __future__ import annotations

# Base patterns
from .base_service import BaseService

# Domain exceptions
from .exceptions import (
    AlchemyDomainException,
    ErrorSeverity,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    StructuredError,
    get_error_severity,
    is_transient_error,
    should_alert,
)

# Domain constants
from .constants import (
    BASE_XP,
    CRAFT_INGREDIENTS_REASON,
    CRAFT_LEVEL_REASON,
    CRAFT_RESULT_QUANTITY,
    MAX_LEVEL,
    MAX_TOTAL_XP,
    MIN_PLAYER_LEVEL,
    XP_EXPONENT,
)

# Validators
from .validators import (
    is_finite_number,
    is_number,
    is_sequence,
    require_finite_number,
    require_identifier,
    require_non_negative_quantity,
    require_positive_level,
    require_present,
    require_sequence,
)

__all__ = [
    # Base patterns
    "BaseService",
    # Exceptions
    "AlchemyDomainException",
    "ErrorSeverity",
    "InvalidArgumentError",
    "InvalidOperationError",
    "NotFoundError",
    "StructuredError",
    "is_transient_error",
    "get_error_severity",
    "should_alert",
    # Constants
    "BASE_XP",
    "XP_EXPONENT",
    "MIN_PLAYER_LEVEL",
    "MAX_LEVEL",
    "MAX_TOTAL_XP",
    "CRAFT_LEVEL_REASON",
    "CRAFT_INGREDIENTS_REASON",
    "CRAFT_RESULT_QUANTITY",
    # Validators
    "is_number",
    "is_finite_number",
    "is_sequence",
    "require_present",
    "require_sequence",
    "require_finite_number",
    "require_positive_level",
    "require_non_negative_quantity",
    "require_identifier",
]
