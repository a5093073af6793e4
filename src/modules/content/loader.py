"""
Alchemy Table Content Packs

Purpose
-------
Load the read-only game content (recipes, quests, themes, table skins) that
the engines evaluate, from YAML files in a content directory.

Design Notes
------------
- One file per kind: recipes.yaml, quests.yaml, themes.yaml, skins.yaml.
  Each holds a mapping with a top-level list under the matching key
  (``recipes:``, ``quests:``, ``themes:``, ``skins:``).
- Entries are converted with the records' ``from_dict``; camelCase and
  snake_case keys are both accepted.
- A broken pack is a deployment problem, not a player problem, so every
  structural issue raises ConfigurationError. Value ranges (levels,
  quantities) are left to the engines, which report them per field.
- Cross references are checked after loading: skins must name a known
  theme, quest cosmetic rewards must name known themes, and
  ``required_quest_id`` must name a known quest.

Usage
-----
    from src.modules.content import load_content_pack

    pack = load_content_pack()            # Config.CONTENT_DIR
    recipe = pack.get_recipe("calm-tea")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

import yaml

from src.core.config.config import Config
from src.core.exceptions import ConfigurationError
from src.core.logging.logger import get_logger
from src.domain.models.game import IngredientReward, Quest, Recipe, TableSkin, Theme
from src.modules.shared.exceptions import NotFoundError

logger = get_logger(__name__)

T = TypeVar("T")

PACK_FILES: Dict[str, str] = {
    "recipes": "recipes.yaml",
    "quests": "quests.yaml",
    "themes": "themes.yaml",
    "skins": "skins.yaml",
}


@dataclass(frozen=True)
class ContentPack:
    """Immutable set of game content loaded from one directory."""

    recipes: Tuple[Recipe, ...] = ()
    quests: Tuple[Quest, ...] = ()
    themes: Tuple[Theme, ...] = ()
    skins: Tuple[TableSkin, ...] = ()
    source: Optional[Path] = None

    @staticmethod
    def _find(entries: Sequence[T], resource_type: str, identifier: str) -> T:
        for entry in entries:
            if entry.id == identifier:  # type: ignore[attr-defined]
                return entry
        raise NotFoundError(resource_type, identifier)

    def get_recipe(self, recipe_id: str) -> Recipe:
        return self._find(self.recipes, "Recipe", recipe_id)

    def get_quest(self, quest_id: str) -> Quest:
        return self._find(self.quests, "Quest", quest_id)

    def get_theme(self, theme_id: str) -> Theme:
        return self._find(self.themes, "Theme", theme_id)

    def get_skin(self, skin_id: str) -> TableSkin:
        return self._find(self.skins, "Table skin", skin_id)

    def skins_for_theme(self, theme_id: str) -> List[TableSkin]:
        """Table skins belonging to ``theme_id``, in pack order."""
        return [skin for skin in self.skins if skin.theme_id == theme_id]


# ============================================================================
# LOADING
# ============================================================================


def _read_entries(path: Path, key: str) -> List[Dict[str, Any]]:
    if not path.is_file():
        raise ConfigurationError(str(path), f"Content file {path.name} not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(str(path), f"Invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(str(path), f"Expected a mapping with a '{key}' list")

    entries = data.get(key)
    if not isinstance(entries, list):
        raise ConfigurationError(str(path), f"'{key}' must be a list")

    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(str(path), f"{key}[{index}] must be a mapping")
        if not isinstance(entry.get("id"), str) or not entry["id"]:
            raise ConfigurationError(str(path), f"{key}[{index}] is missing an id")

    return entries


def _build(
    path: Path, key: str, factory: Callable[[Dict[str, Any]], T]
) -> Tuple[T, ...]:
    entries = _read_entries(path, key)

    seen: Dict[str, int] = {}
    for index, entry in enumerate(entries):
        entry_id = entry["id"]
        if entry_id in seen:
            raise ConfigurationError(
                str(path),
                f"Duplicate id '{entry_id}' at {key}[{seen[entry_id]}] and {key}[{index}]",
            )
        seen[entry_id] = index

    return tuple(factory(entry) for entry in entries)


def _reference_shape_issues(pack: ContentPack) -> List[str]:
    issues: List[str] = []

    for quest in pack.quests:
        rewards = quest.cosmetic_rewards
        if not isinstance(rewards, tuple):
            issues.append(f"quest '{quest.id}' cosmeticRewards must be a list of theme ids")
        elif not all(isinstance(theme_id, str) for theme_id in rewards):
            issues.append(f"quest '{quest.id}' cosmeticRewards must only hold theme ids")
        if not isinstance(quest.ingredient_rewards, tuple):
            issues.append(f"quest '{quest.id}' ingredientRewards must be a list")
        elif not all(isinstance(reward, IngredientReward) for reward in quest.ingredient_rewards):
            issues.append(f"quest '{quest.id}' ingredientRewards entries must be mappings")

    for skin in pack.skins:
        if not isinstance(skin.theme_id, str):
            issues.append(f"skin '{skin.id}' themeId must be a theme id")
    for item in (*pack.themes, *pack.skins):
        if item.required_quest_id is not None and not isinstance(item.required_quest_id, str):
            issues.append(f"'{item.id}' requiredQuestId must be a quest id")

    return issues


def _check_references(pack: ContentPack) -> None:
    issues = _reference_shape_issues(pack)
    if issues:
        raise ConfigurationError(str(pack.source), "; ".join(issues))

    theme_ids = {theme.id for theme in pack.themes}
    quest_ids = {quest.id for quest in pack.quests}
    issues = []

    for skin in pack.skins:
        if skin.theme_id not in theme_ids:
            issues.append(f"skin '{skin.id}' references unknown theme '{skin.theme_id}'")
    for quest in pack.quests:
        for theme_id in quest.cosmetic_rewards:
            if theme_id not in theme_ids:
                issues.append(f"quest '{quest.id}' rewards unknown theme '{theme_id}'")
    for item in (*pack.themes, *pack.skins):
        if item.required_quest_id and item.required_quest_id not in quest_ids:
            issues.append(
                f"'{item.id}' requires unknown quest '{item.required_quest_id}'"
            )

    if issues:
        raise ConfigurationError(str(pack.source), "; ".join(issues))


def load_content_pack(directory: Optional[Union[str, Path]] = None) -> ContentPack:
    """
    Load every content file from ``directory``.

    Args:
        directory: Content directory; defaults to Config.CONTENT_DIR

    Returns:
        ContentPack with recipes, quests, themes and skins in file order

    Raises:
        ConfigurationError: If the directory or a file is missing, a file
            is not valid YAML or has the wrong shape, an id repeats, or a
            cross reference is broken
    """
    root = Path(directory) if directory is not None else Path(Config.CONTENT_DIR)
    if not root.is_dir():
        raise ConfigurationError("CONTENT_DIR", f"Content directory {root} does not exist")

    pack = ContentPack(
        recipes=_build(root / PACK_FILES["recipes"], "recipes", Recipe.from_dict),
        quests=_build(root / PACK_FILES["quests"], "quests", Quest.from_dict),
        themes=_build(root / PACK_FILES["themes"], "themes", Theme.from_dict),
        skins=_build(root / PACK_FILES["skins"], "skins", TableSkin.from_dict),
        source=root,
    )
    _check_references(pack)

    logger.info(
        f"Loaded content pack from {root}",
        extra={
            "recipes": len(pack.recipes),
            "quests": len(pack.quests),
            "themes": len(pack.themes),
            "skins": len(pack.skins),
        },
    )
    return pack
