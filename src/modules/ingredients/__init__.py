"""Tea-blending ingredient catalog."""

from .catalog import (
    CATEGORY_INFO,
    DEFAULT_BASE_AMOUNT,
    DEFAULT_INCREMENT_AMOUNT,
    INGREDIENTS,
    CategoryInfo,
    Ingredient,
    IngredientCategory,
    get_add_ins,
    get_base_teas,
    get_ingredient_base_amount,
    get_ingredient_by_id,
    get_ingredient_increment_amount,
    get_ingredients_by_category,
)

__all__ = [
    "Ingredient",
    "IngredientCategory",
    "CategoryInfo",
    "INGREDIENTS",
    "CATEGORY_INFO",
    "DEFAULT_BASE_AMOUNT",
    "DEFAULT_INCREMENT_AMOUNT",
    "get_ingredients_by_category",
    "get_ingredient_by_id",
    "get_base_teas",
    "get_add_ins",
    "get_ingredient_base_amount",
    "get_ingredient_increment_amount",
]
