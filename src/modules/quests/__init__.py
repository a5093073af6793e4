"""Quest eligibility and reward totals."""

from .quest_logic import (
    calculate_quest_xp_reward,
    get_available_quests,
    is_quest_eligible,
)

__all__ = [
    "is_quest_eligible",
    "get_available_quests",
    "calculate_quest_xp_reward",
]
