import json

import pytest

from game.items.item import Item, ItemProperties
from game.items.tags import Tag
from registrate.providers import (
    ProviderType,
    RegistrateItemModelProvider,
    RegistrateItemTagsProvider,
    RegistrateLangProvider,
    RegistrateRecipeProvider,
    create_provider,
)


def _item(registry_name):
    return Item(ItemProperties()).set_registry_name(registry_name)


def test_create_provider_matches_type(tmp_path):
    assert isinstance(create_provider(ProviderType.LANG, "m", tmp_path), RegistrateLangProvider)
    assert isinstance(create_provider(ProviderType.ITEM_TAGS, "m", tmp_path), RegistrateItemTagsProvider)


def test_generated_model_accepts_supplier_and_custom_textures(tmp_path):
    provider = RegistrateItemModelProvider("gems", tmp_path)
    ruby = _item("gems:ruby")

    provider.generated(lambda: ruby, "gems:item/ruby_base", "gems:item/ruby_shine")
    (path,) = provider.save()

    assert path == tmp_path / "assets/gems/models/item/ruby.json"
    assert json.loads(path.read_text()) == {
        "parent": "item/generated",
        "textures": {"layer0": "gems:item/ruby_base", "layer1": "gems:item/ruby_shine"},
    }


def test_later_model_replaces_earlier(tmp_path):
    provider = RegistrateItemModelProvider("gems", tmp_path)
    sword = _item("gems:ruby_sword")
    provider.generated(sword)
    provider.handheld(sword)
    assert provider.models["ruby_sword"]["parent"] == "item/handheld"


def test_model_for_unregistered_item_fails(tmp_path):
    provider = RegistrateItemModelProvider("gems", tmp_path)
    with pytest.raises(ValueError):
        provider.generated(Item(ItemProperties()))


def test_with_existing_parent(tmp_path):
    provider = RegistrateItemModelProvider("gems", tmp_path)
    model = provider.with_existing_parent("ruby_block", "gems:block/ruby_block")
    assert model == {"parent": "gems:block/ruby_block"}


@pytest.mark.parametrize(
    "internal, english",
    [("ruby", "Ruby"), ("iron_sword", "Iron Sword"), ("BIG__gem", "Big Gem")],
)
def test_automatic_english_names(internal, english):
    assert RegistrateLangProvider.to_english_name(internal) == english


def test_lang_rejects_duplicate_keys(tmp_path):
    provider = RegistrateLangProvider("gems", tmp_path)
    provider.add_item(_item("gems:ruby"), "Ruby")
    with pytest.raises(ValueError):
        provider.add("item.gems.ruby", "Red Gem")


def test_lang_replace_overwrites_existing_key(tmp_path):
    provider = RegistrateLangProvider("gems", tmp_path)
    provider.add("item.gems.ruby", "Ruby")
    provider.add("item.gems.ruby", "Red Gem", replace=True)
    assert provider.entries == {"item.gems.ruby": "Red Gem"}


def test_lang_saves_sorted_locale_file(tmp_path):
    provider = RegistrateLangProvider("gems", tmp_path, locale="en_gb")
    provider.add("item.gems.zircon", "Zircon")
    provider.add("item.gems.amber", "Amber")
    (path,) = provider.save()

    assert path == tmp_path / "assets/gems/lang/en_gb.json"
    assert list(json.loads(path.read_text())) == ["item.gems.amber", "item.gems.zircon"]


def test_empty_lang_writes_nothing(tmp_path):
    assert RegistrateLangProvider("gems", tmp_path).save() == []


def test_shaped_recipe_payload(tmp_path):
    provider = RegistrateRecipeProvider("gems", tmp_path)
    sword = _item("gems:ruby_sword")

    provider.shaped(sword, [" R ", " R ", " S "], {"R": Tag.parse("forge:gems/ruby"), "S": "stick"})
    (path,) = provider.save()

    assert path == tmp_path / "data/gems/recipes/ruby_sword.json"
    assert json.loads(path.read_text()) == {
        "type": "minecraft:crafting_shaped",
        "pattern": [" R ", " R ", " S "],
        "key": {"R": {"tag": "forge:gems/ruby"}, "S": {"item": "minecraft:stick"}},
        "result": {"item": "gems:ruby_sword", "count": 1},
    }


@pytest.mark.parametrize(
    "pattern, key",
    [
        ([], {}),
        (["RRRR"], {"R": "stick"}),
        (["RR", "R"], {"R": "stick"}),
        (["RX"], {"R": "stick"}),
    ],
)
def test_invalid_shaped_patterns_rejected(tmp_path, pattern, key):
    provider = RegistrateRecipeProvider("gems", tmp_path)
    with pytest.raises(ValueError):
        provider.shaped("gems:thing", pattern, key)


def test_shapeless_and_smelting_recipes(tmp_path):
    provider = RegistrateRecipeProvider("gems", tmp_path)
    dust = _item("gems:ruby_dust")

    provider.shapeless(dust, ["gems:ruby", "gems:ruby"], count=3)
    provider.smelting("gems:raw_ruby", "gems:ruby", 0.7)

    assert provider.recipes["gems:ruby_dust"]["result"] == {"item": "gems:ruby_dust", "count": 3}
    smelt = provider.recipes["gems:ruby_from_smelting"]
    assert smelt["ingredient"] == {"item": "gems:raw_ruby"}
    assert smelt["cookingtime"] == 200
    assert smelt["experience"] == 0.7


def test_duplicate_recipe_id_rejected(tmp_path):
    provider = RegistrateRecipeProvider("gems", tmp_path)
    provider.shapeless("gems:ruby_dust", ["gems:ruby"])
    with pytest.raises(ValueError):
        provider.shapeless("gems:ruby_dust", ["gems:ruby"], count=2)
    provider.shapeless("gems:ruby_dust", ["gems:ruby"], count=2, recipe_id="ruby_dust_double")
    assert "gems:ruby_dust_double" in provider.recipes


def test_tag_builder_deduplicates_values(tmp_path):
    provider = RegistrateItemTagsProvider("gems", tmp_path)
    ruby = _item("gems:ruby")
    gems = Tag.parse("forge:gems")
    provider.get_builder(gems).add(ruby, ruby).add("minecraft:emerald")
    provider.get_builder(gems).add_tag(Tag.parse("forge:gems/ruby"))

    (path,) = provider.save()

    assert path == tmp_path / "data/forge/tags/items/gems.json"
    assert json.loads(path.read_text()) == {
        "replace": False,
        "values": ["gems:ruby", "minecraft:emerald", "#forge:gems/ruby"],
    }


def test_tag_parse_defaults_namespace():
    assert Tag.parse("logs") == Tag("minecraft", "logs")
    assert str(Tag.parse("forge:ingots/iron")) == "forge:ingots/iron"
    with pytest.raises(ValueError):
        Tag.parse("forge:")
