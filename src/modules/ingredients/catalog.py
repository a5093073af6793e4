"""
Alchemy Table Ingredient Catalog

Purpose
-------
Static tea-blending ingredients referenced by recipes and quest rewards,
with category metadata for display and default blending amounts.

Design Notes
------------
- Base teas form the foundation of a blend; everything else is an add-in
- Catalog order is display order; lookups preserve it
- Amounts are grams. An ingredient may override the defaults.

Usage
-----
    from src.modules.ingredients import get_ingredient_by_id

    lavender = get_ingredient_by_id("lavender")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class IngredientCategory(str, Enum):
    BASE = "base"
    FLORAL = "floral"
    FRUIT = "fruit"
    HERBAL = "herbal"
    SPICE = "spice"
    SPECIAL = "special"


@dataclass(frozen=True)
class Ingredient:
    """
    Catalog ingredient.

    Attributes
    ----------
    id : str
        Stable identifier used by recipes and inventories
    name : str
        Display name
    category : IngredientCategory
        Blend category
    description : str
        Short flavour note
    tags : Tuple[str, ...]
        Flavour and effect tags
    emoji : str
        Display glyph
    is_base : bool
        True for base teas
    badges : Tuple[str, ...]
        Rarity badges ("Rare", "Epic", "Premium")
    base_amount : Optional[float]
        Starting grams, overriding DEFAULT_BASE_AMOUNT
    increment_amount : Optional[float]
        Grams added per step, overriding the base amount and default
    """

    id: str
    name: str
    category: IngredientCategory
    description: str
    tags: Tuple[str, ...]
    emoji: str
    is_base: bool = False
    badges: Tuple[str, ...] = ()
    base_amount: Optional[float] = None
    increment_amount: Optional[float] = None


@dataclass(frozen=True)
class CategoryInfo:
    title: str
    description: str
    emoji: str
    color: str


# ============================================================================
# BLENDING AMOUNTS
# ============================================================================

DEFAULT_BASE_AMOUNT: float = 5  # grams
DEFAULT_INCREMENT_AMOUNT: float = 1  # grams


# ============================================================================
# CATALOG
# ============================================================================

_CAT = IngredientCategory

INGREDIENTS: Tuple[Ingredient, ...] = (
    # Base teas
    Ingredient("green-tea", "Green Tea", _CAT.BASE, "Light and refreshing base", ("antioxidant", "energizing"), "🍵", is_base=True),
    Ingredient("black-tea", "Black Tea", _CAT.BASE, "Bold and robust base", ("strong", "classic"), "☕", is_base=True),
    Ingredient("white-tea", "White Tea", _CAT.BASE, "Delicate and subtle base", ("mild", "premium"), "🫖", is_base=True),
    Ingredient("oolong-tea", "Oolong Tea", _CAT.BASE, "Balanced and complex base", ("traditional", "aromatic"), "🍃", is_base=True),
    # Floral
    Ingredient("lavender", "Lavender", _CAT.FLORAL, "Calming floral notes", ("relaxing", "aromatic"), "🌸"),
    Ingredient("chamomile", "Chamomile", _CAT.FLORAL, "Soothing and gentle", ("calming", "bedtime"), "🌼"),
    Ingredient("rose", "Rose Petals", _CAT.FLORAL, "Elegant and fragrant", ("romantic", "luxurious"), "🌹"),
    Ingredient("hibiscus", "Hibiscus", _CAT.FLORAL, "Tart and vibrant", ("tangy", "colorful"), "🌺"),
    # Fruit
    Ingredient("lemon", "Lemon Peel", _CAT.FRUIT, "Bright and citrusy", ("refreshing", "zesty"), "🍋"),
    Ingredient("orange", "Orange Peel", _CAT.FRUIT, "Sweet citrus notes", ("uplifting", "sweet"), "🍊"),
    Ingredient("berry-mix", "Berry Mix", _CAT.FRUIT, "Mixed berries blend", ("fruity", "antioxidant"), "🫐"),
    Ingredient("apple", "Dried Apple", _CAT.FRUIT, "Sweet and crisp", ("comforting", "mild"), "🍎"),
    # Herbal
    Ingredient("mint", "Peppermint", _CAT.HERBAL, "Cool and invigorating", ("refreshing", "digestive"), "🌿"),
    Ingredient("ginger", "Ginger Root", _CAT.HERBAL, "Warming and spicy", ("warming", "energizing"), "🫚"),
    Ingredient("lemongrass", "Lemongrass", _CAT.HERBAL, "Fresh and citrusy", ("cleansing", "aromatic"), "🌾"),
    Ingredient("echinacea", "Echinacea", _CAT.HERBAL, "Immune support", ("wellness", "earthy"), "🌻"),
    # Spice
    Ingredient("cinnamon", "Cinnamon", _CAT.SPICE, "Warm and sweet", ("cozy", "sweet"), "🪵"),
    Ingredient("cardamom", "Cardamom", _CAT.SPICE, "Aromatic and complex", ("exotic", "warming"), "🫘"),
    Ingredient("vanilla", "Vanilla Bean", _CAT.SPICE, "Sweet and creamy", ("dessert", "smooth"), "🍦"),
    Ingredient("clove", "Clove", _CAT.SPICE, "Bold and aromatic", ("intense", "warming"), "🌰"),
    # Special
    Ingredient("honey-dust", "Honey Dust", _CAT.SPECIAL, "Natural sweetener", ("sweet", "soothing"), "🍯", badges=("Rare",)),
    Ingredient("butterfly-pea", "Butterfly Pea Flower", _CAT.SPECIAL, "Color-changing magic", ("magical", "visual"), "🦋", badges=("Epic",)),
    Ingredient("matcha", "Matcha Powder", _CAT.SPECIAL, "Concentrated energy", ("energizing", "premium"), "🍃✨", badges=("Premium",)),
    Ingredient("edible-flowers", "Edible Flowers", _CAT.SPECIAL, "Beautiful and delicate", ("aesthetic", "elegant"), "🌸✨", badges=("Rare",)),
)

CATEGORY_INFO: Dict[IngredientCategory, CategoryInfo] = {
    _CAT.BASE: CategoryInfo("Base Tea", "Choose your foundation", "🍵", "emerald"),
    _CAT.FLORAL: CategoryInfo("Floral", "Delicate petals and blooms", "🌸", "pink"),
    _CAT.FRUIT: CategoryInfo("Fruit", "Sweet and tangy additions", "🍊", "orange"),
    _CAT.HERBAL: CategoryInfo("Herbal", "Natural herbs and roots", "🌿", "green"),
    _CAT.SPICE: CategoryInfo("Spice", "Warm and aromatic spices", "🪵", "amber"),
    _CAT.SPECIAL: CategoryInfo("Special", "Rare and magical ingredients", "✨", "purple"),
}

_BY_ID: Dict[str, Ingredient] = {ingredient.id: ingredient for ingredient in INGREDIENTS}


# ============================================================================
# LOOKUPS
# ============================================================================


def get_ingredients_by_category(category: str) -> List[Ingredient]:
    """Ingredients in ``category`` (enum member or its string value)."""
    return [ingredient for ingredient in INGREDIENTS if ingredient.category == category]


def get_ingredient_by_id(ingredient_id: str) -> Optional[Ingredient]:
    """Catalog entry for ``ingredient_id``, or None when unknown."""
    return _BY_ID.get(ingredient_id)


def get_base_teas() -> List[Ingredient]:
    return [ingredient for ingredient in INGREDIENTS if ingredient.is_base]


def get_add_ins() -> List[Ingredient]:
    return [ingredient for ingredient in INGREDIENTS if not ingredient.is_base]


def get_ingredient_base_amount(ingredient: Ingredient) -> float:
    """Starting grams for ``ingredient``."""
    if ingredient.base_amount is not None:
        return ingredient.base_amount
    return DEFAULT_BASE_AMOUNT


def get_ingredient_increment_amount(ingredient: Ingredient) -> float:
    """
    Grams added per step for ``ingredient``.

    Falls back to the ingredient's own base amount, then to
    DEFAULT_INCREMENT_AMOUNT.
    """
    if ingredient.increment_amount is not None:
        return ingredient.increment_amount
    if ingredient.base_amount is not None:
        return ingredient.base_amount
    return DEFAULT_INCREMENT_AMOUNT
