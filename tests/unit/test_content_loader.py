"""
Unit tests for YAML content pack loading.

Purpose
-------
Validate that content packs load into records and that broken packs fail
loudly with ConfigurationError.

Test Coverage
-------------
- The shipped sample pack loads and is internally consistent
- Lookups by id and NotFoundError for unknown ids
- Missing directory / file, invalid YAML, wrong shapes
- Duplicate ids and broken cross references
- camelCase keys accepted alongside snake_case

Testing Strategy
----------------
- Broken packs are written to pytest's tmp_path with yaml.safe_dump
"""

import pytest
import yaml

from src.core.exceptions import ConfigurationError
from src.modules.content import PACK_FILES, ContentPack, load_content_pack
from src.modules.crafting import can_craft_recipe
from src.modules.shared.exceptions import NotFoundError


def _minimal_pack():
    return {
        "recipes": [
            {
                "id": "calm-tea",
                "name": "Calm Tea",
                "required_level": 1,
                "ingredients": [{"ingredient_id": "chamomile", "quantity": 2}],
                "result_item_id": "calm-tea-cup",
            }
        ],
        "quests": [{"id": "first-brew", "name": "First Brew", "required_level": 1, "xp_reward": 150}],
        "themes": [{"id": "verdant", "name": "Verdant", "required_level": 1}],
        "skins": [{"id": "oak", "name": "Oak", "theme_id": "verdant", "required_level": 1}],
    }


def _write_pack(directory, pack):
    for key, filename in PACK_FILES.items():
        if key in pack:
            (directory / filename).write_text(
                yaml.safe_dump({key: pack[key]}), encoding="utf-8"
            )
    return directory


@pytest.mark.unit
class TestSampleContentPack:
    """Test the pack shipped in config/content."""

    def test_loads(self, content_dir):
        pack = load_content_pack(content_dir)

        assert isinstance(pack, ContentPack)
        assert pack.source == content_dir
        assert [r.id for r in pack.recipes] == ["calm-tea", "spiced-chai", "color-changing-elixir"]
        assert [q.id for q in pack.quests] == ["first-brew", "spice-route", "night-harvest"]
        assert len(pack.themes) == 4
        assert len(pack.skins) == 4

    def test_default_directory_comes_from_config(self, content_dir, mocker):
        mocker.patch("src.modules.content.loader.Config.CONTENT_DIR", content_dir)

        pack = load_content_pack()

        assert pack.source == content_dir

    def test_records_are_typed(self, content_dir):
        pack = load_content_pack(content_dir)

        night = pack.get_quest("night-harvest")
        assert night.cosmetic_rewards == ("moonlit",)
        assert night.ingredient_rewards[0].ingredient_id == "edible-flowers"
        assert pack.get_theme("crimson").is_purchased is False
        assert pack.get_theme("verdant").is_purchased is None

    def test_recipes_are_evaluable(self, content_dir):
        calm_tea = load_content_pack(content_dir).get_recipe("calm-tea")

        check = can_craft_recipe(calm_tea, 1, [])

        assert check.reason == "Missing required ingredients"

    def test_skins_for_theme(self, content_dir):
        pack = load_content_pack(content_dir)

        assert [s.id for s in pack.skins_for_theme("moonlit")] == ["moonlit-slate"]
        assert pack.skins_for_theme("unknown") == []

    def test_unknown_id_raises_not_found(self, content_dir):
        pack = load_content_pack(content_dir)

        with pytest.raises(NotFoundError) as exc_info:
            pack.get_skin("gold-leaf")

        assert exc_info.value.resource_type == "Table skin"
        assert exc_info.value.error_code == "TABLE_SKIN_NOT_FOUND"
        assert "Table skin not found: gold-leaf" in str(exc_info.value)


@pytest.mark.unit
class TestBrokenContentPacks:
    """Test ConfigurationError for malformed packs."""

    def test_minimal_pack_loads(self, tmp_path):
        pack = load_content_pack(_write_pack(tmp_path, _minimal_pack()))

        assert pack.get_recipe("calm-tea").ingredients[0].quantity == 2

    def test_camel_case_keys(self, tmp_path):
        data = _minimal_pack()
        data["skins"] = [{"id": "oak", "name": "Oak", "themeId": "verdant", "requiredLevel": 2}]

        pack = load_content_pack(_write_pack(tmp_path, data))

        assert pack.get_skin("oak").theme_id == "verdant"
        assert pack.get_skin("oak").required_level == 2

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(tmp_path / "nowhere")

        assert exc_info.value.config_key == "CONTENT_DIR"
        assert "does not exist" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        data = _minimal_pack()
        del data["skins"]

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "Content file skins.yaml not found" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        _write_pack(tmp_path, _minimal_pack())
        (tmp_path / "quests.yaml").write_text("quests: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(tmp_path)

        assert "Invalid YAML" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, tmp_path):
        _write_pack(tmp_path, _minimal_pack())
        (tmp_path / "themes.yaml").write_text("- verdant\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(tmp_path)

        assert "Expected a mapping with a 'themes' list" in str(exc_info.value)

    def test_key_must_hold_list(self, tmp_path):
        _write_pack(tmp_path, _minimal_pack())
        (tmp_path / "recipes.yaml").write_text("recipes: calm-tea\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(tmp_path)

        assert "'recipes' must be a list" in str(exc_info.value)

    def test_entry_must_be_mapping(self, tmp_path):
        data = _minimal_pack()
        data["quests"].append("second-brew")

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "quests[1] must be a mapping" in str(exc_info.value)

    def test_entry_needs_id(self, tmp_path):
        data = _minimal_pack()
        data["themes"].append({"name": "Nameless", "required_level": 1})

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "themes[1] is missing an id" in str(exc_info.value)

    def test_duplicate_ids(self, tmp_path):
        data = _minimal_pack()
        data["recipes"].append(dict(data["recipes"][0]))

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "Duplicate id 'calm-tea' at recipes[0] and recipes[1]" in str(exc_info.value)

    def test_skin_with_unknown_theme(self, tmp_path):
        data = _minimal_pack()
        data["skins"][0]["theme_id"] = "ghost"

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "skin 'oak' references unknown theme 'ghost'" in str(exc_info.value)

    def test_quest_rewarding_unknown_theme(self, tmp_path):
        data = _minimal_pack()
        data["quests"][0]["cosmetic_rewards"] = ["ghost"]

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "quest 'first-brew' rewards unknown theme 'ghost'" in str(exc_info.value)

    def test_unknown_required_quest(self, tmp_path):
        data = _minimal_pack()
        data["themes"][0]["required_quest_id"] = "lost-quest"

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "'verdant' requires unknown quest 'lost-quest'" in str(exc_info.value)

    @pytest.mark.parametrize(
        "entry_key, value, expected",
        [
            ("cosmetic_rewards", 5, "quest 'first-brew' cosmeticRewards must be a list of theme ids"),
            ("cosmetic_rewards", "verdant", "quest 'first-brew' cosmeticRewards must be a list of theme ids"),
            ("cosmetic_rewards", [["verdant"]], "quest 'first-brew' cosmeticRewards must only hold theme ids"),
            ("ingredient_rewards", {"chamomile": 1}, "quest 'first-brew' ingredientRewards must be a list"),
            ("ingredient_rewards", ["chamomile"], "quest 'first-brew' ingredientRewards entries must be mappings"),
        ],
    )
    def test_malformed_quest_rewards(self, tmp_path, entry_key, value, expected):
        data = _minimal_pack()
        data["quests"][0][entry_key] = value

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert expected in str(exc_info.value)

    def test_required_quest_must_be_an_id(self, tmp_path):
        data = _minimal_pack()
        data["themes"][0]["requiredQuestId"] = ["first-brew"]

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "'verdant' requiredQuestId must be a quest id" in str(exc_info.value)

    def test_skin_theme_must_be_an_id(self, tmp_path):
        data = _minimal_pack()
        data["skins"][0]["theme_id"] = ["verdant"]

        with pytest.raises(ConfigurationError) as exc_info:
            load_content_pack(_write_pack(tmp_path, data))

        assert "skin 'oak' themeId must be a theme id" in str(exc_info.value)
