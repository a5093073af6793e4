"""XP engine: leveling curve and XP deltas."""

from .xp_logic import (
    add_xp,
    get_level_from_total_xp,
    get_total_xp_for_level,
    get_xp_for_level,
    get_xp_progress_in_level,
)

__all__ = [
    "get_xp_for_level",
    "get_total_xp_for_level",
    "get_level_from_total_xp",
    "get_xp_progress_in_level",
    "add_xp",
]
