"""
Alchemy Table Cosmetics Unlock Engine

Purpose
-------
Decide whether a player may use a table theme or table skin.

Design Notes
------------
Themes and skins share one rule, evaluated in this order:
1. Already in the player's unlocked list -> usable (skips every other
   check, including level)
2. Player level below the required level -> not usable
3. Required quest not in the completed quest ids -> not usable
4. ``is_purchased`` explicitly False -> not usable (None means the item
   is not sold and does not block)
5. Otherwise usable

All arguments are validated before the rule runs. The player's cosmetics
record is only read, never changed.

Usage
-----
    from src.modules.cosmetics import can_use_theme

    if can_use_theme(theme, player_level, cosmetics, completed_quest_ids):
        ...
"""

from __future__ import annotations

from typing import Any, List, Sequence

from src.domain.models.game import PlayerCosmetics, TableSkin, Theme
from src.modules.shared.exceptions import InvalidArgumentError
from src.modules.shared.validators import (
    is_sequence,
    require_positive_level,
    require_present,
    require_sequence,
)


# ============================================================================
# INPUT VALIDATION
# ============================================================================


def _validate_player(
    player_level: Any,
    player_cosmetics: Any,
    completed_quest_ids: Any,
    owned_field: str,
) -> None:
    require_positive_level(player_level, "player_level", "Player level")
    require_present(player_cosmetics, "player_cosmetics", "Player cosmetics")
    owned = getattr(player_cosmetics, owned_field, None)
    if not is_sequence(owned):
        raise InvalidArgumentError(
            owned_field, f"Player cosmetics {owned_field} must be a list, got {owned}", owned
        )
    require_sequence(completed_quest_ids, "completed_quest_ids", "Completed quest IDs")


def _is_usable(
    item: Any,
    owned: Sequence[str],
    player_level: float,
    completed_quest_ids: Sequence[str],
) -> bool:
    if item.id in owned:
        return True
    if player_level < item.required_level:
        return False
    if item.required_quest_id and item.required_quest_id not in completed_quest_ids:
        return False
    if item.is_purchased is False:
        return False
    return True


# ============================================================================
# THEMES
# ============================================================================


def can_use_theme(
    theme: Theme,
    player_level: float,
    player_cosmetics: PlayerCosmetics,
    completed_quest_ids: Sequence[str],
) -> bool:
    """
    Decide whether the player may use ``theme``.

    Args:
        theme: Theme to check
        player_level: Current player level
        player_cosmetics: Player's owned and equipped cosmetics
        completed_quest_ids: Ids of quests the player has completed

    Returns:
        True if the theme is owned or every unlock condition holds

    Raises:
        InvalidArgumentError: If any argument is missing or malformed
    """
    require_present(theme, "theme", "Theme")
    _validate_player(player_level, player_cosmetics, completed_quest_ids, "unlocked_themes")
    require_positive_level(
        getattr(theme, "required_level", None), "required_level", "Theme required level"
    )
    return _is_usable(theme, player_cosmetics.unlocked_themes, player_level, completed_quest_ids)


def get_unlockable_themes(
    themes: Sequence[Theme],
    player_level: float,
    player_cosmetics: PlayerCosmetics,
    completed_quest_ids: Sequence[str],
) -> List[Theme]:
    """
    Filter ``themes`` down to those ``can_use_theme`` accepts, in order.

    Raises:
        InvalidArgumentError: If themes is not a list, or any theme or
            player argument is malformed
    """
    require_sequence(themes, "themes", "Themes")
    _validate_player(player_level, player_cosmetics, completed_quest_ids, "unlocked_themes")
    return [
        theme
        for theme in themes
        if can_use_theme(theme, player_level, player_cosmetics, completed_quest_ids)
    ]


# ============================================================================
# TABLE SKINS
# ============================================================================


def can_use_skin(
    skin: TableSkin,
    player_level: float,
    player_cosmetics: PlayerCosmetics,
    completed_quest_ids: Sequence[str],
) -> bool:
    """Same rule as can_use_theme, checked against ``unlocked_skins``."""
    require_present(skin, "skin", "Table skin")
    _validate_player(player_level, player_cosmetics, completed_quest_ids, "unlocked_skins")
    require_positive_level(
        getattr(skin, "required_level", None), "required_level", "Skin required level"
    )
    return _is_usable(skin, player_cosmetics.unlocked_skins, player_level, completed_quest_ids)


def get_unlockable_skins(
    skins: Sequence[TableSkin],
    player_level: float,
    player_cosmetics: PlayerCosmetics,
    completed_quest_ids: Sequence[str],
) -> List[TableSkin]:
    """Filter ``skins`` down to those ``can_use_skin`` accepts, in order."""
    require_sequence(skins, "skins", "Skins")
    _validate_player(player_level, player_cosmetics, completed_quest_ids, "unlocked_skins")
    return [
        skin
        for skin in skins
        if can_use_skin(skin, player_level, player_cosmetics, completed_quest_ids)
    ]
