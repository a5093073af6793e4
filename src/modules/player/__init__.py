"""Player progression: XP awards, quest claims, crafting and cosmetics."""

from .progression_service import ProgressionService, QuestClaim, XpAward

__all__ = [
    "ProgressionService",
    "XpAward",
    "QuestClaim",
]
