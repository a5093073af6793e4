"""
Alchemy Table XP Engine

Purpose
-------
Pure functions mapping total experience points to player levels and
applying XP deltas. Every other system reads "player level" from here.

Design Notes
------------
Leveling curve:
- cost(level) = floor(BASE_XP * level ** XP_EXPONENT) is the XP needed to
  go from ``level - 1`` to ``level``; cost(1) = 0
- threshold(level) = sum(cost(i) for i in 2..level) is the lifetime XP
  needed to reach ``level``
- The inverse (total XP -> level) walks the curve upward instead of
  inverting the closed form. cost() uses a fractional exponent, and a
  closed-form inverse would need a float root whose rounding can disagree
  with cost() at exact boundaries. Walking the same cost() guarantees
  that threshold(level) always classifies as ``level``.
- The walk stops when the next threshold is strictly greater than the
  total, so a total equal to a threshold belongs to the higher level.
- Levels are capped at MAX_LEVEL, which bounds every loop.

All functions:
- Validate every input before computing and raise InvalidArgumentError
- Never log and never mutate anything

Usage
-----
    from src.modules.xp import add_xp, get_level_from_total_xp

    get_level_from_total_xp(282)  # 2
    gain = add_xp(current_total_xp=250, xp_to_add=40)
    gain.leveled_up  # True
"""

from __future__ import annotations

import math

from src.domain.models.game import XpGain, XpProgress
from src.modules.shared.constants import (
    BASE_XP,
    MAX_LEVEL,
    MAX_TOTAL_XP,
    MIN_PLAYER_LEVEL,
    XP_EXPONENT,
)
from src.modules.shared.exceptions import InvalidArgumentError
from src.modules.shared.validators import require_finite_number


# ============================================================================
# INPUT VALIDATION
# ============================================================================


def _validate_level(level: float) -> None:
    require_finite_number(level, "level", "Level")
    if level < MIN_PLAYER_LEVEL:
        raise InvalidArgumentError(
            "level", f"Level must be at least {MIN_PLAYER_LEVEL}, got {level}", level
        )
    if level > MAX_LEVEL:
        raise InvalidArgumentError(
            "level", f"Level cannot exceed {MAX_LEVEL}, got {level}", level
        )


def _validate_total_xp(total_xp: float, field: str = "total_xp", label: str = "Total XP") -> None:
    require_finite_number(total_xp, field, label)
    if total_xp < 0:
        raise InvalidArgumentError(field, f"{label} cannot be negative, got {total_xp}", total_xp)
    if total_xp > MAX_TOTAL_XP:
        raise InvalidArgumentError(
            field, f"{label} exceeds maximum safe value, got {total_xp}", total_xp
        )


def _level_cost(level: float) -> int:
    # Unchecked; callers validate first.
    if level <= MIN_PLAYER_LEVEL:
        return 0
    return math.floor(BASE_XP * level**XP_EXPONENT)


def _level_threshold(level: float) -> int:
    return sum(_level_cost(i) for i in range(2, math.floor(level) + 1))


def _level_for(total_xp: float) -> int:
    level = MIN_PLAYER_LEVEL
    accumulated = 0
    while level < MAX_LEVEL:
        next_cost = _level_cost(level + 1)
        if accumulated + next_cost > total_xp:
            break
        accumulated += next_cost
        level += 1
    return level


# ============================================================================
# PUBLIC API
# ============================================================================


def get_xp_for_level(level: float) -> int:
    """
    XP cost of the single level transition ending at ``level``.

    Args:
        level: Target level, 1..MAX_LEVEL

    Returns:
        floor(100 * level ** 1.5), or 0 for level 1

    Raises:
        InvalidArgumentError: If level is not a finite number or out of range

    Example:
        >>> get_xp_for_level(2)
        282
    """
    _validate_level(level)
    return _level_cost(level)


def get_total_xp_for_level(level: float) -> int:
    """
    Lifetime XP needed to reach ``level`` from zero.

    Sums the cost of every transition from level 2 up to ``level``
    (fractional levels are truncated).

    Raises:
        InvalidArgumentError: If level is not a finite number or out of range

    Example:
        >>> get_total_xp_for_level(3)
        801
    """
    _validate_level(level)
    return _level_threshold(level)


def get_level_from_total_xp(total_xp: float) -> int:
    """
    Highest level whose lifetime threshold does not exceed ``total_xp``.

    Args:
        total_xp: Lifetime XP, 0..MAX_TOTAL_XP

    Returns:
        Level in 1..MAX_LEVEL (0 XP is level 1)

    Raises:
        InvalidArgumentError: If total_xp is not finite, negative, or above
            MAX_TOTAL_XP
    """
    _validate_total_xp(total_xp)
    return _level_for(total_xp)


def get_xp_progress_in_level(total_xp: float) -> XpProgress:
    """
    Locate ``total_xp`` inside its level.

    At MAX_LEVEL there is no next level: ``xp_needed_for_next_level`` is 0
    and ``progress_percent`` is 100.

    Raises:
        InvalidArgumentError: Same conditions as get_level_from_total_xp
    """
    _validate_total_xp(total_xp)
    current_level = _level_for(total_xp)
    xp_in_level = total_xp - _level_threshold(current_level)

    if current_level >= MAX_LEVEL:
        return XpProgress(
            current_level=current_level,
            xp_in_level=xp_in_level,
            xp_needed_for_next_level=0,
            progress_percent=100.0,
        )

    xp_needed = _level_cost(current_level + 1)
    return XpProgress(
        current_level=current_level,
        xp_in_level=xp_in_level,
        xp_needed_for_next_level=xp_needed,
        progress_percent=100 * xp_in_level / xp_needed,
    )


def add_xp(current_total_xp: float, xp_to_add: float) -> XpGain:
    """
    Apply an XP delta and report the level change.

    ``xp_to_add`` may be negative (penalties) as long as the result stays
    within 0..MAX_TOTAL_XP. Multi-level jumps are reported as one gain.

    Args:
        current_total_xp: Lifetime XP before the change
        xp_to_add: Delta to apply

    Returns:
        XpGain with the new total, new and previous level, and leveled_up

    Raises:
        InvalidArgumentError: If either input is not finite, the current
            total is out of range, or the result is negative or too large
    """
    _validate_total_xp(current_total_xp, "current_total_xp", "Current total XP")
    require_finite_number(xp_to_add, "xp_to_add", "XP to add")

    new_total_xp = current_total_xp + xp_to_add
    if new_total_xp < 0:
        raise InvalidArgumentError(
            "xp_to_add",
            "Resulting total XP cannot be negative. "
            f"Current: {current_total_xp}, adding: {xp_to_add}",
            xp_to_add,
        )
    if new_total_xp > MAX_TOTAL_XP:
        raise InvalidArgumentError(
            "xp_to_add",
            f"Resulting total XP exceeds maximum safe value, got {new_total_xp}",
            xp_to_add,
        )

    previous_level = _level_for(current_total_xp)
    new_level = _level_for(new_total_xp)
    return XpGain(
        new_total_xp=new_total_xp,
        new_level=new_level,
        previous_level=previous_level,
        leveled_up=new_level > previous_level,
    )
