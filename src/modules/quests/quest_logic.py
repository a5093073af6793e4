"""
Alchemy Table Quest Eligibility

Purpose
-------
Filter quests by player level and total their XP rewards.

Design Notes
------------
- A quest is eligible when ``player_level >= quest.required_level``
- Filtering preserves input order
- List arguments are validated (present, list or tuple) before any
  element is inspected; a malformed element aborts the whole call

Usage
-----
    from src.modules.quests import get_available_quests

    available = get_available_quests(all_quests, player_level=5)
"""

from __future__ import annotations

from typing import List, Sequence

from src.domain.models.game import Quest
from src.modules.shared.exceptions import InvalidArgumentError
from src.modules.shared.validators import (
    require_non_negative_quantity,
    require_positive_level,
    require_present,
    require_sequence,
)


def is_quest_eligible(quest: Quest, player_level: float) -> bool:
    """
    Check whether the player's level unlocks ``quest``.

    Raises:
        InvalidArgumentError: If quest is missing, or either level is not a
            finite number >= 1
    """
    require_present(quest, "quest", "Quest")
    require_positive_level(player_level, "player_level", "Player level")
    require_positive_level(
        getattr(quest, "required_level", None), "required_level", "Quest required level"
    )
    return player_level >= quest.required_level


def get_available_quests(quests: Sequence[Quest], player_level: float) -> List[Quest]:
    """
    Return the quests the player can take, in input order.

    Raises:
        InvalidArgumentError: If quests is not a list, player_level is
            invalid, or any quest fails is_quest_eligible validation
    """
    require_sequence(quests, "quests", "Quests")
    require_positive_level(player_level, "player_level", "Player level")
    return [quest for quest in quests if is_quest_eligible(quest, player_level)]


def calculate_quest_xp_reward(quests: Sequence[Quest]) -> float:
    """
    Sum ``xp_reward`` across ``quests``.

    Raises:
        InvalidArgumentError: If quests is not a list, an element is None,
            or any reward is not a finite number >= 0
    """
    require_sequence(quests, "quests", "Quests")
    for quest in quests:
        if quest is None:
            raise InvalidArgumentError("quests", "Quest in list cannot be None")
        require_non_negative_quantity(
            getattr(quest, "xp_reward", None), "xp_reward", "Quest XP reward"
        )
    return sum(quest.xp_reward for quest in quests)
