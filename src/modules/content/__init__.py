"""YAML content packs: recipes, quests, themes and table skins."""

from .loader import PACK_FILES, ContentPack, load_content_pack

__all__ = [
    "ContentPack",
    "PACK_FILES",
    "load_content_pack",
]
