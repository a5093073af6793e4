"""Crafting validator: recipe feasibility and craft application."""

from .crafting_logic import (
    can_craft_recipe,
    craft_recipe,
    has_required_ingredients,
    meets_level_requirement,
)

__all__ = [
    "has_required_ingredients",
    "meets_level_requirement",
    "can_craft_recipe",
    "craft_recipe",
]
