"""
Pytest Configuration and Fixtures for Alchemy Table Tests
=========================================================

Purpose
-------
Centralized test fixtures and configuration for the test suite.

Responsibilities
----------------
- Force a quiet, file-free testing environment before src is imported
- Register markers
- Provide domain record factories (recipes, inventories, quests, cosmetics)
- Provide service instances with real or mocked loggers
"""

from __future__ import annotations

import os

# Must run before src.core.config is imported anywhere.
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_JSON"] = "false"

from pathlib import Path  # noqa: E402
from typing import List  # noqa: E402

import pytest  # noqa: E402

from src.domain.models.game import (  # noqa: E402
    InventoryItem,
    PlayerCosmetics,
    PlayerProgress,
    Quest,
    Recipe,
    RecipeIngredient,
    TableSkin,
    Theme,
)
from src.modules.player.progression_service import ProgressionService  # noqa: E402

PROJECT_ROOT = Path(__file__).resolve().parents[1]


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "domain: pure domain logic tests")
    config.addinivalue_line("markers", "service: service orchestration tests")


# ============================================================================
# CRAFTING FIXTURES
# ============================================================================


@pytest.fixture
def potion_recipe() -> Recipe:
    """Level 3 recipe consuming 2 herb-1 and 1 water-1 into a potion."""
    return Recipe(
        id="recipe-1",
        name="Healing Potion",
        required_level=3,
        ingredients=(
            RecipeIngredient(ingredient_id="herb-1", quantity=2),
            RecipeIngredient(ingredient_id="water-1", quantity=1),
        ),
        result_item_id="potion",
    )


@pytest.fixture
def exact_inventory() -> List[InventoryItem]:
    """Exactly enough for potion_recipe."""
    return [
        InventoryItem(item_id="herb-1", quantity=2),
        InventoryItem(item_id="water-1", quantity=1),
    ]


@pytest.fixture
def rich_inventory() -> List[InventoryItem]:
    """More than enough for potion_recipe, plus an unrelated item."""
    return [
        InventoryItem(item_id="herb-1", quantity=5),
        InventoryItem(item_id="water-1", quantity=3),
        InventoryItem(item_id="crystal", quantity=1),
    ]


# ============================================================================
# QUEST FIXTURES
# ============================================================================


def make_quest(quest_id: str, required_level: int, xp_reward: int = 100, **kwargs) -> Quest:
    return Quest(
        id=quest_id,
        name=quest_id.replace("-", " ").title(),
        required_level=required_level,
        xp_reward=xp_reward,
        **kwargs,
    )


@pytest.fixture
def tiered_quests() -> List[Quest]:
    """Quests requiring levels 1, 3 and 10."""
    return [
        make_quest("quest-lvl-1", 1, 100),
        make_quest("quest-lvl-3", 3, 250),
        make_quest("quest-lvl-10", 10, 1000),
    ]


# ============================================================================
# COSMETICS FIXTURES
# ============================================================================


@pytest.fixture
def empty_cosmetics() -> PlayerCosmetics:
    return PlayerCosmetics()


@pytest.fixture
def premium_theme() -> Theme:
    return Theme(id="premium", name="Premium", required_level=10)


@pytest.fixture
def quest_skin() -> TableSkin:
    return TableSkin(
        id="moonlit-slate",
        name="Moonlit Slate",
        theme_id="moonlit",
        required_level=5,
        required_quest_id="night-harvest",
    )


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def new_player() -> PlayerProgress:
    return PlayerProgress(level=1, xp=0, total_xp=0)


@pytest.fixture
def mock_logger(mocker):
    """Mock logger for asserting service log calls."""
    return mocker.MagicMock()


@pytest.fixture
def progression_service(mock_logger) -> ProgressionService:
    return ProgressionService(logger=mock_logger)


@pytest.fixture
def content_dir() -> Path:
    """The sample content pack shipped with the project."""
    return PROJECT_ROOT / "config" / "content"
