"""
Alchemy Table Domain Constants

Purpose
-------
Provide domain-level constants for the gamification engines: the leveling
curve, its bounds, and the canonical refusal reasons returned by crafting
checks.

IMPORTANT:
This module contains GAMEPLAY constants only. Environment and logging
settings belong in src/core/config.

Design Notes
------------
- Values are annotated with typing.Final to signal immutability
- Grouped by game system
- No side effects at import time
"""

from __future__ import annotations

from typing import Final

# ============================================================================
# LEVELING CURVE
# ============================================================================

BASE_XP: Final[int] = 100  # XP cost scale of a single level transition
XP_EXPONENT: Final[float] = 1.5  # cost(level) = floor(BASE_XP * level ** XP_EXPONENT)

MIN_PLAYER_LEVEL: Final[int] = 1
MAX_LEVEL: Final[int] = 1000  # Keeps curve iteration bounded

# Largest integer an IEEE-754 double holds exactly (2**53 - 1).
MAX_TOTAL_XP: Final[int] = 9_007_199_254_740_991

# ============================================================================
# CRAFTING
# ============================================================================

CRAFT_LEVEL_REASON: Final[str] = "Level {required_level} required"
CRAFT_INGREDIENTS_REASON: Final[str] = "Missing required ingredients"
CRAFT_RESULT_QUANTITY: Final[int] = 1  # Items produced by one craft
