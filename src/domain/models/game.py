"""
Gamification Domain Records for Alchemy Table.

Purpose
-------
Immutable value records consumed and produced by the gamification engines:
content configuration (recipes, quests, themes, table skins), player-owned
state (progress, inventory, cosmetics) and the result shapes returned by
the XP and crafting engines.

Responsibilities
----------------
- Hold plain data with no behaviour beyond conversion
- Convert to and from the camelCase mappings persisted by the web service
- Keep collections as tuples so records stay hashable and frozen

Non-Responsibilities
--------------------
- Validation (the engines validate every input before computing)
- Persistence (callers read and write these records)
- Business rules (see src/modules/xp, crafting, quests, cosmetics)

Design Notes
------------
``from_dict`` accepts camelCase keys and falls back to snake_case, so the
same records load from web-service JSON and from the YAML content packs.
Values are passed through untouched: a malformed level or quantity reaches
the engine as-is and is reported there with its field name.

Usage Example
-------------
>>> recipe = Recipe.from_dict({
...     "id": "calm-tea",
...     "name": "Calm Tea",
...     "requiredLevel": 3,
...     "ingredients": [{"ingredientId": "chamomile", "quantity": 2}],
...     "resultItemId": "calm-tea-cup",
... })
>>> recipe.ingredients[0].quantity
2
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

R = TypeVar("R")

_MISSING: Any = object()


def _pick(data: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a key by its camelCase name, falling back to snake_case."""
    value = data.get(camel, _MISSING)
    if value is _MISSING:
        value = data.get(snake, default)
    return value


def _records(raw: Any, record_type: Type[R]) -> Any:
    """
    Convert a list of mappings into a tuple of records.

    Non-list values are returned unchanged so the engines can reject them
    with a field-specific error; non-mapping entries are kept as-is.
    """
    if not isinstance(raw, (list, tuple)):
        return raw
    return tuple(
        record_type.from_dict(item) if isinstance(item, Mapping) else item  # type: ignore[attr-defined]
        for item in raw
    )


def _strings(raw: Any) -> Any:
    if not isinstance(raw, (list, tuple)):
        return raw
    return tuple(raw)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


# ============================================================================
# CONTENT RECORDS
# ============================================================================


@dataclass(frozen=True)
class RecipeIngredient:
    """One ingredient line of a recipe."""

    ingredient_id: str
    quantity: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecipeIngredient":
        return cls(
            ingredient_id=_pick(data, "ingredientId", "ingredient_id"),
            quantity=_pick(data, "quantity", "quantity"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"ingredientId": self.ingredient_id, "quantity": self.quantity}


@dataclass(frozen=True)
class Recipe:
    """
    Crafting recipe.

    Attributes
    ----------
    id : str
        Recipe identifier
    name : str
        Display name
    required_level : int
        Minimum player level to craft
    ingredients : Tuple[RecipeIngredient, ...]
        Ingredients consumed by one craft
    result_item_id : str
        Inventory item produced by one craft
    description : str
        Flavour text
    """

    id: str
    name: str
    required_level: int
    ingredients: Tuple[RecipeIngredient, ...]
    result_item_id: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Recipe":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            required_level=_pick(data, "requiredLevel", "required_level"),
            ingredients=_records(data.get("ingredients"), RecipeIngredient),
            result_item_id=_pick(data, "resultItemId", "result_item_id"),
            description=data.get("description", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "requiredLevel": self.required_level,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "resultItemId": self.result_item_id,
        }


@dataclass(frozen=True)
class IngredientReward:
    """Ingredient granted by a quest."""

    ingredient_id: str
    quantity: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IngredientReward":
        return cls(
            ingredient_id=_pick(data, "ingredientId", "ingredient_id"),
            quantity=_pick(data, "quantity", "quantity"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"ingredientId": self.ingredient_id, "quantity": self.quantity}


@dataclass(frozen=True)
class Quest:
    """
    Quest definition.

    ``cosmetic_rewards`` holds theme ids unlocked when the quest is claimed.
    """

    id: str
    name: str
    required_level: int
    xp_reward: int
    description: str = ""
    ingredient_rewards: Tuple[IngredientReward, ...] = ()
    cosmetic_rewards: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Quest":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            required_level=_pick(data, "requiredLevel", "required_level"),
            xp_reward=_pick(data, "xpReward", "xp_reward"),
            ingredient_rewards=_records(
                _pick(data, "ingredientRewards", "ingredient_rewards", ()),
                IngredientReward,
            ),
            cosmetic_rewards=_strings(
                _pick(data, "cosmeticRewards", "cosmetic_rewards", ())
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "requiredLevel": self.required_level,
            "xpReward": self.xp_reward,
            "ingredientRewards": [reward.to_dict() for reward in self.ingredient_rewards],
            "cosmeticRewards": list(self.cosmetic_rewards),
        }


@dataclass(frozen=True)
class Theme:
    """
    Table theme.

    ``is_purchased`` is tri-state: ``None`` means the theme is not sold,
    ``False`` means it is sold and not yet bought.
    """

    id: str
    name: str
    required_level: int
    required_quest_id: Optional[str] = None
    is_purchased: Optional[bool] = None
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Theme":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            required_level=_pick(data, "requiredLevel", "required_level"),
            required_quest_id=_pick(data, "requiredQuestId", "required_quest_id"),
            is_purchased=_pick(data, "isPurchased", "is_purchased"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "requiredLevel": self.required_level,
            "requiredQuestId": self.required_quest_id,
            "isPurchased": self.is_purchased,
        })


@dataclass(frozen=True)
class TableSkin:
    """Table skin; same unlock rules as Theme, bound to a parent theme."""

    id: str
    name: str
    theme_id: str
    required_level: int
    required_quest_id: Optional[str] = None
    is_purchased: Optional[bool] = None
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TableSkin":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            theme_id=_pick(data, "themeId", "theme_id"),
            required_level=_pick(data, "requiredLevel", "required_level"),
            required_quest_id=_pick(data, "requiredQuestId", "required_quest_id"),
            is_purchased=_pick(data, "isPurchased", "is_purchased"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "themeId": self.theme_id,
            "requiredLevel": self.required_level,
            "requiredQuestId": self.required_quest_id,
            "isPurchased": self.is_purchased,
        })


# ============================================================================
# PLAYER STATE
# ============================================================================


@dataclass(frozen=True)
class InventoryItem:
    """Inventory entry; ``item_id`` is unique within one inventory."""

    item_id: str
    quantity: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InventoryItem":
        return cls(
            item_id=_pick(data, "itemId", "item_id"),
            quantity=_pick(data, "quantity", "quantity"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"itemId": self.item_id, "quantity": self.quantity}


@dataclass(frozen=True)
class PlayerProgress:
    """
    Player level and XP state.

    Attributes
    ----------
    level : int
        Current level, always ``get_level_from_total_xp(total_xp)``
    xp : int
        XP earned inside the current level
    total_xp : int
        Lifetime XP
    """

    level: int = 1
    xp: int = 0
    total_xp: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlayerProgress":
        return cls(
            level=data.get("level", 1),
            xp=data.get("xp", 0),
            total_xp=_pick(data, "totalXp", "total_xp", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "xp": self.xp, "totalXp": self.total_xp}


@dataclass(frozen=True)
class PlayerCosmetics:
    """Cosmetics a player owns and has equipped."""

    unlocked_themes: Tuple[str, ...] = ()
    unlocked_skins: Tuple[str, ...] = ()
    active_theme_id: Optional[str] = None
    active_table_skin_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlayerCosmetics":
        return cls(
            unlocked_themes=_strings(_pick(data, "unlockedThemes", "unlocked_themes", ())),
            unlocked_skins=_strings(_pick(data, "unlockedSkins", "unlocked_skins", ())),
            active_theme_id=_pick(data, "activeThemeId", "active_theme_id"),
            active_table_skin_id=_pick(data, "activeTableSkinId", "active_table_skin_id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "unlockedThemes": list(self.unlocked_themes),
            "unlockedSkins": list(self.unlocked_skins),
            "activeThemeId": self.active_theme_id,
            "activeTableSkinId": self.active_table_skin_id,
        })


# ============================================================================
# ENGINE RESULTS
# ============================================================================


@dataclass(frozen=True)
class XpProgress:
    """Position of a total XP value inside its level."""

    current_level: int
    xp_in_level: int
    xp_needed_for_next_level: int
    progress_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentLevel": self.current_level,
            "xpInLevel": self.xp_in_level,
            "xpNeededForNextLevel": self.xp_needed_for_next_level,
            "progressPercent": self.progress_percent,
        }


@dataclass(frozen=True)
class XpGain:
    """Outcome of applying an XP delta."""

    new_total_xp: int
    new_level: int
    previous_level: int
    leveled_up: bool

    @property
    def levels_gained(self) -> int:
        return max(0, self.new_level - self.previous_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "newTotalXp": self.new_total_xp,
            "newLevel": self.new_level,
            "previousLevel": self.previous_level,
            "leveledUp": self.leveled_up,
        }


@dataclass(frozen=True)
class CraftCheck:
    """Craft feasibility; ``reason`` is set only when ``can_craft`` is False."""

    can_craft: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({"canCraft": self.can_craft, "reason": self.reason})
