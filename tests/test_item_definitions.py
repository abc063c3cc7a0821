import json

import pytest

from game.items.item import ItemGroup, Rarity
from game.items.registry import ItemRegistry
from registrate import ProviderType, Registrate, register_item_definitions


def test_definitions_become_configured_items(tmp_path):
    registrate = Registrate("gems")
    groups = {}
    definitions = [
        {"name": "ruby", "group": "materials", "tags": ["forge:gems"]},
        {
            "name": "ruby_sword",
            "max_damage": 500,
            "rarity": "rare",
            "fire_resistant": True,
            "model": "handheld",
            "lang": "Sword of Rubies",
            "recipe": {
                "type": "shaped",
                "pattern": ["R", "R", "S"],
                "key": {"R": "#forge:gems", "S": "stick"},
            },
        },
    ]
    ruby, sword = register_item_definitions(registrate, definitions, groups)
    # groups are looked up when items are created, not when defined
    groups["materials"] = ItemGroup("materials")
    registrate.register_all(ItemRegistry())

    assert ruby.get().group == ItemGroup("materials")
    assert sword.get().max_damage == 500
    assert sword.get().rarity is Rarity.RARE
    assert sword.get().fire_resistant

    registrate.run_data_generation(tmp_path)

    lang = json.loads((tmp_path / "assets/gems/lang/en_us.json").read_text())
    assert lang["item.gems.ruby_sword"] == "Sword of Rubies"
    assert lang["item.gems.ruby"] == "Ruby"
    model = json.loads((tmp_path / "assets/gems/models/item/ruby_sword.json").read_text())
    assert model["parent"] == "item/handheld"
    recipe = json.loads((tmp_path / "data/gems/recipes/ruby_sword.json").read_text())
    assert recipe["key"]["R"] == {"tag": "forge:gems"}
    tag = json.loads((tmp_path / "data/forge/tags/items/gems.json").read_text())
    assert tag["values"] == ["gems:ruby"]


def test_unknown_group_fails_at_creation():
    registrate = Registrate("gems")
    register_item_definitions(registrate, [{"name": "ruby", "group": "missing"}], {})
    with pytest.raises(LookupError):
        registrate.register_all(ItemRegistry())


def test_smelting_and_shapeless_definitions():
    registrate = Registrate("gems")
    register_item_definitions(
        registrate,
        [
            {"name": "ruby_dust", "recipe": {"type": "shapeless", "ingredients": ["gems:ruby"], "count": 2}},
            {"name": "fired_ruby", "recipe": {"type": "smelting", "ingredient": "gems:raw_ruby"}},
        ],
    )
    registrate.register_all(ItemRegistry())

    class Recorder:
        def __init__(self):
            self.calls = []

        def shapeless(self, result, ingredients, count=1):
            self.calls.append(("shapeless", result().registry_name, ingredients, count))

        def smelting(self, ingredient, result, experience, cooking_time=200):
            self.calls.append(("smelting", ingredient, result().registry_name, experience, cooking_time))

    recorder = Recorder()
    registrate.generate_data(ProviderType.RECIPE, recorder)

    assert recorder.calls == [
        ("shapeless", "gems:ruby_dust", ["gems:ruby"], 2),
        ("smelting", "gems:raw_ruby", "gems:fired_ruby", 0.1, 200),
    ]


@pytest.mark.parametrize(
    "definition",
    [
        {"model": "generated"},
        {"name": "gem", "model": "spinning"},
        {"name": "gem", "recipe": {"type": "brewing"}},
    ],
)
def test_invalid_definitions_rejected(definition):
    with pytest.raises(ValueError):
        register_item_definitions(Registrate("gems"), [definition])
