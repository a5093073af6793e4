"""
Alchemy Table Crafting Validator

Purpose
-------
Decide whether a player can craft a recipe, and apply a craft to an
inventory by producing a new inventory.

Design Notes
------------
- Inventories are sequences of InventoryItem; lookups go through a dict
  keyed by item id, so entry order never affects the answer
- ``can_craft_recipe`` checks the level before the ingredients and reports
  the first failing reason
- ``craft_recipe`` is the unchecked mutation: it deducts and grants without
  asking ``can_craft_recipe``. Entries that end at or below zero are
  dropped from the result, so an under-stocked craft silently succeeds.
  Callers that need the checked path use ProgressionService.craft.
- Inputs are never mutated; the result is a fresh list

Usage
-----
    from src.modules.crafting import can_craft_recipe, craft_recipe

    check = can_craft_recipe(recipe, player_level=3, inventory=inventory)
    if check.can_craft:
        inventory = craft_recipe(recipe, inventory)
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from src.domain.models.game import CraftCheck, InventoryItem, Recipe
from src.modules.shared.constants import (
    CRAFT_INGREDIENTS_REASON,
    CRAFT_LEVEL_REASON,
    CRAFT_RESULT_QUANTITY,
)
from src.modules.shared.exceptions import InvalidArgumentError
from src.modules.shared.validators import (
    is_sequence,
    require_identifier,
    require_non_negative_quantity,
    require_positive_level,
    require_present,
)


# ============================================================================
# INPUT VALIDATION
# ============================================================================


def _validate_recipe(recipe: Any) -> None:
    require_present(recipe, "recipe", "Recipe")
    ingredients = getattr(recipe, "ingredients", None)
    if not is_sequence(ingredients):
        raise InvalidArgumentError(
            "ingredients", "Recipe must have a valid ingredients list", ingredients
        )
    for ingredient in ingredients:
        require_identifier(
            getattr(ingredient, "ingredient_id", None), "ingredient_id", "Recipe ingredient"
        )
        require_non_negative_quantity(
            getattr(ingredient, "quantity", None), "quantity", "Recipe ingredient quantity"
        )


def _validate_inventory(inventory: Any) -> None:
    require_present(inventory, "inventory", "Inventory")
    if not is_sequence(inventory):
        raise InvalidArgumentError("inventory", f"Inventory must be a list, got {inventory}", inventory)
    for item in inventory:
        require_identifier(getattr(item, "item_id", None), "item_id", "Inventory item")
        require_non_negative_quantity(
            getattr(item, "quantity", None), "quantity", "Inventory item quantity"
        )


def _validate_levels(recipe: Any, player_level: Any) -> None:
    require_present(recipe, "recipe", "Recipe")
    require_positive_level(player_level, "player_level", "Player level")
    require_positive_level(
        getattr(recipe, "required_level", None), "required_level", "Recipe required level"
    )


def _quantities(inventory: Sequence[InventoryItem]) -> Dict[str, float]:
    """Map item id -> quantity, merging duplicate entries."""
    quantities: Dict[str, float] = {}
    for item in inventory:
        quantities[item.item_id] = quantities.get(item.item_id, 0) + item.quantity
    return quantities


def _has_ingredients(recipe: Recipe, quantities: Dict[str, float]) -> bool:
    return all(
        quantities.get(ingredient.ingredient_id, 0) >= ingredient.quantity
        for ingredient in recipe.ingredients
    )


# ============================================================================
# PUBLIC API
# ============================================================================


def has_required_ingredients(recipe: Recipe, inventory: Sequence[InventoryItem]) -> bool:
    """
    Check that the inventory holds every ingredient the recipe consumes.

    Items the recipe does not use are ignored; ingredients missing from the
    inventory count as quantity 0.

    Raises:
        InvalidArgumentError: If recipe or inventory is missing or malformed
    """
    _validate_recipe(recipe)
    _validate_inventory(inventory)
    return _has_ingredients(recipe, _quantities(inventory))


def meets_level_requirement(recipe: Recipe, player_level: float) -> bool:
    """
    Check ``player_level >= recipe.required_level``.

    Raises:
        InvalidArgumentError: If either level is not a finite number >= 1
    """
    _validate_levels(recipe, player_level)
    return player_level >= recipe.required_level


def can_craft_recipe(
    recipe: Recipe, player_level: float, inventory: Sequence[InventoryItem]
) -> CraftCheck:
    """
    Decide whether the recipe can be crafted right now.

    All inputs are validated before either rule is evaluated. The level
    rule is reported first ("Level N required"), then the ingredient rule
    ("Missing required ingredients").

    Returns:
        CraftCheck(can_craft=True) or CraftCheck(False, reason)

    Raises:
        InvalidArgumentError: If any input is missing or malformed
    """
    _validate_recipe(recipe)
    _validate_levels(recipe, player_level)
    _validate_inventory(inventory)

    if player_level < recipe.required_level:
        return CraftCheck(
            can_craft=False,
            reason=CRAFT_LEVEL_REASON.format(required_level=recipe.required_level),
        )
    if not _has_ingredients(recipe, _quantities(inventory)):
        return CraftCheck(can_craft=False, reason=CRAFT_INGREDIENTS_REASON)
    return CraftCheck(can_craft=True)


def craft_recipe(recipe: Recipe, inventory: Sequence[InventoryItem]) -> List[InventoryItem]:
    """
    Apply one craft and return the new inventory.

    Deducts every ingredient, adds one ``result_item_id`` (incrementing an
    existing entry or appending a new one) and drops entries whose quantity
    is zero or below. Feasibility is NOT checked here.

    Args:
        recipe: Recipe to apply
        inventory: Current inventory (left untouched)

    Returns:
        New inventory list in first-seen item order

    Raises:
        InvalidArgumentError: If recipe or inventory is missing or malformed,
            or the recipe has no result_item_id
    """
    _validate_recipe(recipe)
    _validate_inventory(inventory)
    require_identifier(
        getattr(recipe, "result_item_id", None), "result_item_id", "Recipe"
    )

    quantities = _quantities(inventory)
    for ingredient in recipe.ingredients:
        if ingredient.ingredient_id in quantities:
            quantities[ingredient.ingredient_id] -= ingredient.quantity

    quantities[recipe.result_item_id] = (
        quantities.get(recipe.result_item_id, 0) + CRAFT_RESULT_QUANTITY
    )

    return [
        InventoryItem(item_id=item_id, quantity=quantity)
        for item_id, quantity in quantities.items()
        if quantity > 0
    ]
