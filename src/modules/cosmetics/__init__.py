"""Cosmetics unlock engine for table themes and skins."""

from .cosmetics_logic import (
    can_use_skin,
    can_use_theme,
    get_unlockable_skins,
    get_unlockable_themes,
)

__all__ = [
    "can_use_theme",
    "can_use_skin",
    "get_unlockable_themes",
    "get_unlockable_skins",
]
