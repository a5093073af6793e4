"""
Unit tests for ProgressionService.

Purpose
-------
Validate the player actions composed from the pure engines: XP awards,
quest claims, checked crafting and cosmetic equipping.

Test Coverage
-------------
- award_xp: recomputed progress, level-up events, penalties
- claim_quest: XP, ingredient and theme rewards, completion tracking,
  refusal when under-levelled or already claimed
- craft: checked crafting with refusal reasons
- equip_theme / equip_skin: unlock on first use, refusal when locked
- Logging: operations at INFO, refusals and bad input logged then re-raised

Testing Strategy
----------------
- Service receives a MagicMock logger (see conftest.progression_service)
- One caplog test exercises the real logger wiring
"""

import logging

import pytest

from src.domain.models.game import (
    IngredientReward,
    InventoryItem,
    PlayerCosmetics,
    PlayerProgress,
    TableSkin,
    Theme,
)
from src.modules.player import ProgressionService, QuestClaim, XpAward
from src.modules.shared.exceptions import InvalidArgumentError, InvalidOperationError
from tests.conftest import make_quest


# ============================================================================
# XP AWARDS
# ============================================================================


@pytest.mark.unit
@pytest.mark.service
class TestAwardXp:
    """Test XP awards."""

    def test_award_without_level_up(self, progression_service, new_player):
        # Act
        award = progression_service.award_xp(new_player, 100)

        # Assert
        assert isinstance(award, XpAward)
        assert award.progress == PlayerProgress(level=1, xp=100, total_xp=100)
        assert award.gain.leveled_up is False
        assert award.events == ()

    def test_award_with_level_up_emits_event(self, progression_service, new_player):
        award = progression_service.award_xp(new_player, 300)

        assert award.progress == PlayerProgress(level=2, xp=18, total_xp=300)
        assert len(award.events) == 1
        event = award.events[0]
        assert event.event_name == "player.leveled_up"
        assert event.payload == {
            "old_level": 1,
            "new_level": 2,
            "levels_gained": 1,
            "total_xp": 300,
        }

    def test_multi_level_award(self, progression_service, new_player):
        award = progression_service.award_xp(new_player, 2000)

        assert award.progress.level == 4
        assert award.progress.xp == 2000 - 1601
        assert award.events[0].payload["levels_gained"] == 3

    def test_penalty(self, progression_service):
        progress = PlayerProgress(level=2, xp=18, total_xp=300)

        award = progression_service.award_xp(progress, -100)

        assert award.progress == PlayerProgress(level=1, xp=200, total_xp=200)
        assert award.events == ()

    def test_input_progress_is_unchanged(self, progression_service, new_player):
        progression_service.award_xp(new_player, 5000)

        assert new_player == PlayerProgress()

    def test_logs_operation(self, progression_service, mock_logger, new_player):
        progression_service.award_xp(new_player, 300)

        mock_logger.info.assert_called_once()
        args, kwargs = mock_logger.info.call_args
        assert args[0] == "Service operation: award_xp"
        assert kwargs["extra"]["operation"] == "award_xp"
        assert kwargs["extra"]["leveled_up"] is True

    def test_invalid_amount_is_logged_and_reraised(self, progression_service, mock_logger, new_player):
        with pytest.raises(InvalidArgumentError) as exc_info:
            progression_service.award_xp(new_player, -1)

        assert "Resulting total XP cannot be negative" in str(exc_info.value)
        mock_logger.log.assert_called_once()
        level, message = mock_logger.log.call_args.args
        assert level == logging.INFO
        assert message.startswith("Service error during award_xp")
        mock_logger.info.assert_not_called()

    def test_progress_required(self, progression_service):
        with pytest.raises(InvalidArgumentError) as exc_info:
            progression_service.award_xp(None, 10)

        assert "Player progress is required" in str(exc_info.value)


# ============================================================================
# QUEST CLAIMS
# ============================================================================


@pytest.mark.unit
@pytest.mark.service
class TestClaimQuest:
    """Test one-time quest reward claims."""

    @pytest.fixture
    def night_harvest(self):
        return make_quest(
            "night-harvest",
            1,
            300,
            ingredient_rewards=(
                IngredientReward(ingredient_id="edible-flowers", quantity=1),
                IngredientReward(ingredient_id="lavender", quantity=2),
            ),
            cosmetic_rewards=("moonlit",),
        )

    def test_claim_grants_every_reward(self, progression_service, new_player, night_harvest):
        # Arrange
        inventory = [InventoryItem(item_id="lavender", quantity=1)]
        cosmetics = PlayerCosmetics(unlocked_themes=("verdant",))

        # Act
        claim = progression_service.claim_quest(
            new_player, inventory, cosmetics, night_harvest, ["first-brew"]
        )

        # Assert
        assert isinstance(claim, QuestClaim)
        assert claim.progress == PlayerProgress(level=2, xp=18, total_xp=300)
        assert claim.inventory == [
            InventoryItem(item_id="lavender", quantity=3),
            InventoryItem(item_id="edible-flowers", quantity=1),
        ]
        assert claim.cosmetics.unlocked_themes == ("verdant", "moonlit")
        assert claim.completed_quest_ids == ("first-brew", "night-harvest")
        assert claim.gain.leveled_up is True

    def test_claim_events(self, progression_service, new_player, night_harvest):
        claim = progression_service.claim_quest(new_player, [], PlayerCosmetics(), night_harvest, [])

        assert [event.event_name for event in claim.events] == ["quest.claimed", "player.leveled_up"]
        payload = claim.events[0].payload
        assert payload["quest_id"] == "night-harvest"
        assert payload["xp_reward"] == 300
        assert payload["cosmetic_rewards"] == ["moonlit"]
        assert payload["ingredient_rewards"][0] == {"ingredientId": "edible-flowers", "quantity": 1}

    def test_already_owned_theme_is_not_duplicated(self, progression_service, new_player, night_harvest):
        cosmetics = PlayerCosmetics(unlocked_themes=("moonlit",))

        claim = progression_service.claim_quest(new_player, [], cosmetics, night_harvest, [])

        assert claim.cosmetics.unlocked_themes == ("moonlit",)

    def test_inputs_are_unchanged(self, progression_service, new_player, night_harvest):
        inventory = [InventoryItem(item_id="lavender", quantity=1)]
        completed = ["first-brew"]

        progression_service.claim_quest(new_player, inventory, PlayerCosmetics(), night_harvest, completed)

        assert inventory == [InventoryItem(item_id="lavender", quantity=1)]
        assert completed == ["first-brew"]

    def test_under_levelled_claim_is_refused(self, progression_service, new_player, mock_logger):
        quest = make_quest("spice-route", 3, 400)

        with pytest.raises(InvalidOperationError) as exc_info:
            progression_service.claim_quest(new_player, [], PlayerCosmetics(), quest, [])

        assert exc_info.value.reason == "Level 3 required"
        assert exc_info.value.error_code == "INVALID_CLAIM_QUEST"
        mock_logger.log.assert_called_once()

    def test_stale_level_cannot_pass_the_gate(self, progression_service, mock_logger):
        stale = PlayerProgress(level=10, xp=0, total_xp=0)
        quest = make_quest("grand-elixir", 10, 1000)

        with pytest.raises(InvalidArgumentError) as exc_info:
            progression_service.claim_quest(stale, [], PlayerCosmetics(), quest, [])

        assert exc_info.value.field == "level"
        assert exc_info.value.value == 10
        assert "expected level 1" in str(exc_info.value)
        mock_logger.info.assert_not_called()

    def test_second_claim_is_refused(self, progression_service, new_player, night_harvest):
        with pytest.raises(InvalidOperationError) as exc_info:
            progression_service.claim_quest(
                new_player, [], PlayerCosmetics(), night_harvest, ["night-harvest"]
            )

        assert exc_info.value.reason == "Quest reward already claimed"

    def test_invalid_reward_aborts_claim(self, progression_service, new_player):
        quest = make_quest("broken", 1, 50, ingredient_rewards=(IngredientReward("mint", -2),))

        with pytest.raises(InvalidArgumentError) as exc_info:
            progression_service.claim_quest(new_player, [], PlayerCosmetics(), quest, [])

        assert "Ingredient reward quantity must be a non-negative number" in str(exc_info.value)

    def test_completed_ids_must_be_list(self, progression_service, new_player, night_harvest):
        with pytest.raises(InvalidArgumentError) as exc_info:
            progression_service.claim_quest(new_player, [], PlayerCosmetics(), night_harvest, None)

        assert "Completed quest IDs list is required" in str(exc_info.value)


# ============================================================================
# CRAFTING
# ============================================================================


@pytest.mark.unit
@pytest.mark.service
class TestCraft:
    """Test checked crafting."""

    def test_craft(self, progression_service, potion_recipe, exact_inventory, mock_logger):
        inventory = progression_service.craft(potion_recipe, 3, exact_inventory)

        assert inventory == [InventoryItem(item_id="potion", quantity=1)]
        assert mock_logger.info.call_args.kwargs["extra"]["result_item_id"] == "potion"

    def test_level_refusal(self, progression_service, potion_recipe, exact_inventory):
        with pytest.raises(InvalidOperationError) as exc_info:
            progression_service.craft(potion_recipe, 2, exact_inventory)

        assert exc_info.value.reason == "Level 3 required"
        assert exc_info.value.action == "craft"

    def test_ingredient_refusal_leaves_inventory(self, progression_service, potion_recipe):
        inventory = [InventoryItem(item_id="herb-1", quantity=1)]

        with pytest.raises(InvalidOperationError) as exc_info:
            progression_service.craft(potion_recipe, 5, inventory)

        assert exc_info.value.reason == "Missing required ingredients"
        assert inventory == [InventoryItem(item_id="herb-1", quantity=1)]


# ============================================================================
# COSMETICS
# ============================================================================


@pytest.mark.unit
@pytest.mark.service
class TestEquipCosmetics:
    """Test equipping themes and skins."""

    def test_equip_unlocks_and_activates_theme(self, progression_service, premium_theme, empty_cosmetics):
        cosmetics = progression_service.equip_theme(premium_theme, 10, empty_cosmetics, [])

        assert cosmetics.unlocked_themes == ("premium",)
        assert cosmetics.active_theme_id == "premium"
        assert empty_cosmetics == PlayerCosmetics()

    def test_equip_owned_theme_keeps_list(self, progression_service, premium_theme):
        owned = PlayerCosmetics(unlocked_themes=("verdant", "premium"), active_theme_id="verdant")

        cosmetics = progression_service.equip_theme(premium_theme, 1, owned, [])

        assert cosmetics.unlocked_themes == ("verdant", "premium")
        assert cosmetics.active_theme_id == "premium"

    def test_locked_theme(self, progression_service, premium_theme, empty_cosmetics):
        with pytest.raises(InvalidOperationError) as exc_info:
            progression_service.equip_theme(premium_theme, 9, empty_cosmetics, [])

        assert exc_info.value.reason == "Theme 'premium' is locked"

    def test_equip_skin(self, progression_service, quest_skin, empty_cosmetics):
        cosmetics = progression_service.equip_skin(quest_skin, 5, empty_cosmetics, ["night-harvest"])

        assert cosmetics.unlocked_skins == ("moonlit-slate",)
        assert cosmetics.active_table_skin_id == "moonlit-slate"
        assert cosmetics.active_theme_id is None

    def test_locked_skin(self, progression_service, empty_cosmetics):
        skin = TableSkin(id="obsidian", name="Obsidian", theme_id="crimson", required_level=1, is_purchased=False)

        with pytest.raises(InvalidOperationError) as exc_info:
            progression_service.equip_skin(skin, 30, empty_cosmetics, [])

        assert exc_info.value.reason == "Table skin 'obsidian' is locked"


# ============================================================================
# LOGGING WIRING
# ============================================================================


@pytest.mark.unit
@pytest.mark.service
class TestServiceLogging:
    def test_default_logger_is_module_logger(self):
        service = ProgressionService()

        assert service.log.name == "src.modules.player.progression_service"

    def test_operations_reach_handlers(self, caplog):
        service = ProgressionService()
        theme = Theme(id="verdant", name="Verdant", required_level=1)

        with caplog.at_level(logging.INFO, logger="src.modules.player.progression_service"):
            service.equip_theme(theme, 1, PlayerCosmetics(), [])

        records = [r for r in caplog.records if r.name == "src.modules.player.progression_service"]
        assert records
        assert records[-1].getMessage() == "Service operation: equip_theme"
        assert records[-1].theme_id == "verdant"
