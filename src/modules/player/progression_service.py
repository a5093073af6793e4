"""
Player Progression Service
==========================

Purpose
-------
Compose the XP, quest, crafting and cosmetics engines into the player
actions the web service exposes: awarding XP, claiming a quest, crafting
a recipe and equipping cosmetics.

Domain
------
- XP awards keep ``level == get_level_from_total_xp(total_xp)``
- Quest claims grant XP, ingredients and themes exactly once
- Crafting is always checked before the inventory is transformed
- Cosmetics are equipped only when the unlock rule allows it

Design Notes
------------
- Takes the player's current values and returns new values; nothing is
  persisted or mutated here. The caller stores the result inside its own
  transaction.
- Business refusals raise InvalidOperationError; malformed input raises
  InvalidArgumentError from the engines. Both are logged through
  ``log_error`` and re-raised unchanged.
- State changes worth publishing are returned as DomainEvent records.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from src.domain.models.base import DomainEvent
from src.domain.models.game import (
    IngredientReward,
    InventoryItem,
    PlayerCosmetics,
    PlayerProgress,
    Quest,
    Recipe,
    TableSkin,
    Theme,
    XpGain,
)
from src.modules.cosmetics.cosmetics_logic import can_use_skin, can_use_theme
from src.modules.crafting.crafting_logic import can_craft_recipe, craft_recipe
from src.modules.quests.quest_logic import calculate_quest_xp_reward, is_quest_eligible
from src.modules.shared.base_service import BaseService
from src.modules.shared.exceptions import InvalidArgumentError, InvalidOperationError
from src.modules.shared.validators import (
    is_sequence,
    require_identifier,
    require_non_negative_quantity,
    require_present,
    require_sequence,
)
from src.modules.xp.xp_logic import add_xp, get_level_from_total_xp, get_xp_progress_in_level


def _require_level_matches_total_xp(progress: PlayerProgress) -> None:
    """Level gates trust ``progress.level``, so a stale record is rejected."""
    expected = get_level_from_total_xp(progress.total_xp)
    if progress.level != expected:
        raise InvalidArgumentError(
            "level",
            f"Player level {progress.level} does not match total XP "
            f"{progress.total_xp} (expected level {expected})",
            progress.level,
        )


# ============================================================================
# Results
# ============================================================================


@dataclass(frozen=True)
class XpAward:
    """New progress after an XP award, plus the engine's gain report."""

    progress: PlayerProgress
    gain: XpGain
    events: Tuple[DomainEvent, ...] = ()


@dataclass(frozen=True)
class QuestClaim:
    """Everything a quest claim changes, ready to persist."""

    progress: PlayerProgress
    inventory: List[InventoryItem]
    cosmetics: PlayerCosmetics
    completed_quest_ids: Tuple[str, ...]
    gain: XpGain
    events: Tuple[DomainEvent, ...] = ()


# ============================================================================
# Service
# ============================================================================


class ProgressionService(BaseService):
    """
    Player progression orchestration over the pure engines.

    Example:
        >>> service = ProgressionService()
        >>> award = service.award_xp(PlayerProgress(), 300)
        >>> award.progress.level
        2
    """

    @contextmanager
    def _operation(self, operation: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except Exception as exc:
            self.log_error(operation, exc, **context)
            raise

    # ------------------------------------------------------------------
    # XP
    # ------------------------------------------------------------------

    def award_xp(self, progress: PlayerProgress, amount: float) -> XpAward:
        """
        Add ``amount`` XP (negative for penalties) to the player's progress.

        Returns:
            XpAward with recomputed level and in-level XP, and a
            ``player.leveled_up`` event when the level rose

        Raises:
            InvalidArgumentError: If progress is missing or the XP values
                are invalid
        """
        with self._operation("award_xp", amount=amount):
            require_present(progress, "progress", "Player progress")
            award = self._apply_xp(progress, amount)

        self.log_operation(
            "award_xp",
            amount=amount,
            new_total_xp=award.gain.new_total_xp,
            new_level=award.gain.new_level,
            leveled_up=award.gain.leveled_up,
        )
        return award

    def _apply_xp(self, progress: PlayerProgress, amount: float) -> XpAward:
        gain = add_xp(progress.total_xp, amount)
        position = get_xp_progress_in_level(gain.new_total_xp)
        new_progress = PlayerProgress(
            level=position.current_level,
            xp=position.xp_in_level,
            total_xp=gain.new_total_xp,
        )

        events: List[DomainEvent] = []
        if gain.leveled_up:
            events.append(
                DomainEvent(
                    "player.leveled_up",
                    {
                        "old_level": gain.previous_level,
                        "new_level": gain.new_level,
                        "levels_gained": gain.levels_gained,
                        "total_xp": gain.new_total_xp,
                    },
                )
            )
        return XpAward(progress=new_progress, gain=gain, events=tuple(events))

    # ------------------------------------------------------------------
    # Quests
    # ------------------------------------------------------------------

    def claim_quest(
        self,
        progress: PlayerProgress,
        inventory: Sequence[InventoryItem],
        cosmetics: PlayerCosmetics,
        quest: Quest,
        completed_quest_ids: Sequence[str],
    ) -> QuestClaim:
        """
        Grant a quest's rewards once.

        Adds ``quest.xp_reward`` to the player's XP, merges ingredient
        rewards into the inventory (adding to existing stacks), unlocks
        cosmetic rewards as themes and records the quest as completed.

        Raises:
            InvalidOperationError: If the player's level is below the
                quest's requirement, or the quest was already claimed
            InvalidArgumentError: If any input is missing or malformed, or
                the stored level disagrees with total_xp
        """
        quest_id = getattr(quest, "id", None)
        with self._operation("claim_quest", quest_id=quest_id):
            require_present(progress, "progress", "Player progress")
            require_present(cosmetics, "cosmetics", "Player cosmetics")
            require_sequence(completed_quest_ids, "completed_quest_ids", "Completed quest IDs")
            _require_level_matches_total_xp(progress)

            if not is_quest_eligible(quest, progress.level):
                raise InvalidOperationError(
                    "claim_quest", f"Level {quest.required_level} required"
                )
            if quest.id in completed_quest_ids:
                raise InvalidOperationError("claim_quest", "Quest reward already claimed")

            xp_reward = calculate_quest_xp_reward([quest])
            new_inventory = self._merge_rewards(inventory, quest.ingredient_rewards)
            new_cosmetics = self._unlock_themes(cosmetics, quest.cosmetic_rewards)
            award = self._apply_xp(progress, xp_reward)

        events = (
            DomainEvent(
                "quest.claimed",
                {
                    "quest_id": quest.id,
                    "xp_reward": xp_reward,
                    "ingredient_rewards": [r.to_dict() for r in quest.ingredient_rewards],
                    "cosmetic_rewards": list(quest.cosmetic_rewards),
                },
            ),
        ) + award.events

        self.log_operation(
            "claim_quest",
            quest_id=quest.id,
            xp_reward=xp_reward,
            new_level=award.gain.new_level,
        )
        return QuestClaim(
            progress=award.progress,
            inventory=new_inventory,
            cosmetics=new_cosmetics,
            completed_quest_ids=tuple(completed_quest_ids) + (quest.id,),
            gain=award.gain,
            events=events,
        )

    @staticmethod
    def _merge_rewards(
        inventory: Sequence[InventoryItem], rewards: Sequence[IngredientReward]
    ) -> List[InventoryItem]:
        require_present(inventory, "inventory", "Inventory")
        if not is_sequence(inventory):
            raise InvalidArgumentError("inventory", f"Inventory must be a list, got {inventory}", inventory)
        require_sequence(rewards, "ingredient_rewards", "Quest ingredient rewards")

        quantities: Dict[str, float] = {}
        for item in inventory:
            require_identifier(getattr(item, "item_id", None), "item_id", "Inventory item")
            require_non_negative_quantity(
                getattr(item, "quantity", None), "quantity", "Inventory item quantity"
            )
            quantities[item.item_id] = quantities.get(item.item_id, 0) + item.quantity

        for reward in rewards:
            require_identifier(
                getattr(reward, "ingredient_id", None), "ingredient_id", "Ingredient reward"
            )
            require_non_negative_quantity(
                getattr(reward, "quantity", None), "quantity", "Ingredient reward quantity"
            )
            quantities[reward.ingredient_id] = (
                quantities.get(reward.ingredient_id, 0) + reward.quantity
            )

        return [
            InventoryItem(item_id=item_id, quantity=quantity)
            for item_id, quantity in quantities.items()
            if quantity > 0
        ]

    @staticmethod
    def _unlock_themes(cosmetics: PlayerCosmetics, theme_ids: Sequence[str]) -> PlayerCosmetics:
        require_sequence(cosmetics.unlocked_themes, "unlocked_themes", "Player cosmetics unlocked_themes")
        require_sequence(theme_ids, "cosmetic_rewards", "Quest cosmetic rewards")

        unlocked = list(cosmetics.unlocked_themes)
        for theme_id in theme_ids:
            if theme_id not in unlocked:
                unlocked.append(theme_id)
        return replace(cosmetics, unlocked_themes=tuple(unlocked))

    # ------------------------------------------------------------------
    # Crafting
    # ------------------------------------------------------------------

    def craft(
        self, recipe: Recipe, player_level: float, inventory: Sequence[InventoryItem]
    ) -> List[InventoryItem]:
        """
        Craft ``recipe`` once, refusing when ``can_craft_recipe`` says no.

        Returns:
            The new inventory

        Raises:
            InvalidOperationError: With the refusal reason ("Level N
                required" or "Missing required ingredients")
            InvalidArgumentError: If any input is missing or malformed
        """
        recipe_id = getattr(recipe, "id", None)
        with self._operation("craft", recipe_id=recipe_id, player_level=player_level):
            check = can_craft_recipe(recipe, player_level, inventory)
            if not check.can_craft:
                raise InvalidOperationError("craft", check.reason)
            new_inventory = craft_recipe(recipe, inventory)

        self.log_operation("craft", recipe_id=recipe_id, result_item_id=recipe.result_item_id)
        return new_inventory

    # ------------------------------------------------------------------
    # Cosmetics
    # ------------------------------------------------------------------

    def equip_theme(
        self,
        theme: Theme,
        player_level: float,
        cosmetics: PlayerCosmetics,
        completed_quest_ids: Sequence[str],
    ) -> PlayerCosmetics:
        """
        Make ``theme`` the active theme, unlocking it on first use.

        Raises:
            InvalidOperationError: If the theme is still locked
            InvalidArgumentError: If any input is missing or malformed
        """
        theme_id = getattr(theme, "id", None)
        with self._operation("equip_theme", theme_id=theme_id):
            if not can_use_theme(theme, player_level, cosmetics, completed_quest_ids):
                raise InvalidOperationError("equip_theme", f"Theme '{theme.id}' is locked")

        unlocked = cosmetics.unlocked_themes
        if theme.id not in unlocked:
            unlocked = tuple(unlocked) + (theme.id,)

        self.log_operation("equip_theme", theme_id=theme.id)
        return replace(cosmetics, unlocked_themes=tuple(unlocked), active_theme_id=theme.id)

    def equip_skin(
        self,
        skin: TableSkin,
        player_level: float,
        cosmetics: PlayerCosmetics,
        completed_quest_ids: Sequence[str],
    ) -> PlayerCosmetics:
        """Make ``skin`` the active table skin, unlocking it on first use."""
        skin_id = getattr(skin, "id", None)
        with self._operation("equip_skin", skin_id=skin_id):
            if not can_use_skin(skin, player_level, cosmetics, completed_quest_ids):
                raise InvalidOperationError("equip_skin", f"Table skin '{skin.id}' is locked")

        unlocked = cosmetics.unlocked_skins
        if skin.id not in unlocked:
            unlocked = tuple(unlocked) + (skin.id,)

        self.log_operation("equip_skin", skin_id=skin.id)
        return replace(cosmetics, unlocked_skins=tuple(unlocked), active_table_skin_id=skin.id)
