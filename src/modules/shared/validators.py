"""
Alchemy Table Domain Validators

Purpose
-------
Precondition checks shared by the XP, crafting, quest and cosmetics
engines. Every check raises `InvalidArgumentError` naming the offending
field and value; none of them log or coerce.

Design Notes
------------
Validators:
- Accept the value to validate plus the field name and a display label
- Raise on failure, return None on success (raise-on-error pattern)
- Treat only `int` and `float` as numbers; `bool` is rejected even though
  it subclasses `int`
- Treat only `list` and `tuple` as sequences; strings never qualify
- Are called up front, presence checks before type checks before range
  checks, so an engine fails on the first violation and never midway

Usage
-----
    from src.modules.shared.validators import require_positive_level

    require_positive_level(player_level, "player_level", "Player level")
    # Raises InvalidArgumentError("player_level", "Player level must be a positive number, got 0", 0)
"""

from __future__ import annotations

import math
from typing import Any

from .constants import MIN_PLAYER_LEVEL
from .exceptions import InvalidArgumentError


def is_number(value: Any) -> bool:
    """True for int/float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    """True for numbers that are neither NaN nor infinite."""
    return is_number(value) and math.isfinite(value)


def is_sequence(value: Any) -> bool:
    """True for list or tuple values."""
    return isinstance(value, (list, tuple))


def require_present(value: Any, field: str, label: str) -> None:
    """
    Validate that a required argument was supplied.

    Args:
        value: Argument to check
        field: Field name reported on the error
        label: Display name, e.g. "Recipe"

    Raises:
        InvalidArgumentError: If value is None
    """
    if value is None:
        raise InvalidArgumentError(field, f"{label} is required")


def require_sequence(value: Any, field: str, label: str) -> None:
    """
    Validate that a collection argument is present and is a list or tuple.

    Raises:
        InvalidArgumentError: "<label> list is required" when None,
            "<label> must be a list" for any other non-sequence
    """
    if value is None:
        raise InvalidArgumentError(field, f"{label} list is required")
    if not is_sequence(value):
        raise InvalidArgumentError(field, f"{label} must be a list, got {value}", value)


def require_finite_number(value: Any, field: str, label: str) -> None:
    """
    Validate that a value is a finite number.

    Raises:
        InvalidArgumentError: If value is not an int/float, or is NaN/inf
    """
    if not is_finite_number(value):
        raise InvalidArgumentError(
            field, f"{label} must be a finite number, got {value}", value
        )


def require_positive_level(value: Any, field: str, label: str) -> None:
    """
    Validate a player or requirement level: a finite number >= 1.

    Raises:
        InvalidArgumentError: If value is not a finite number or is below 1
    """
    if not is_finite_number(value) or value < MIN_PLAYER_LEVEL:
        raise InvalidArgumentError(
            field, f"{label} must be a positive number, got {value}", value
        )


def require_non_negative_quantity(value: Any, field: str, label: str) -> None:
    """
    Validate an item or reward quantity: a finite number >= 0.

    Raises:
        InvalidArgumentError: If value is not a finite number or is negative
    """
    if not is_finite_number(value) or value < 0:
        raise InvalidArgumentError(
            field, f"{label} must be a non-negative number, got {value}", value
        )


def require_identifier(value: Any, field: str, label: str) -> None:
    """
    Validate that an identifier is a non-empty string.

    Raises:
        InvalidArgumentError: "<label> must have a valid <field>" otherwise
    """
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(field, f"{label} must have a valid {field}", value)
