"""
Domain models package for Alchemy Table.

Purpose
-------
Immutable records shared by the gamification engines and the progression
service. Records carry data only; game rules live in ``src/modules``.
"""

from .base import DomainEvent
from .game import (
    CraftCheck,
    IngredientReward,
    InventoryItem,
    PlayerCosmetics,
    PlayerProgress,
    Quest,
    Recipe,
    RecipeIngredient,
    TableSkin,
    Theme,
    XpGain,
    XpProgress,
)

__all__ = [
    # Events
    "DomainEvent",
    # Content
    "Recipe",
    "RecipeIngredient",
    "Quest",
    "IngredientReward",
    "Theme",
    "TableSkin",
    # Player state
    "InventoryItem",
    "PlayerProgress",
    "PlayerCosmetics",
    # Engine results
    "XpProgress",
    "XpGain",
    "CraftCheck",
]
