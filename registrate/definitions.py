"""Turn item definitions loaded from YAML into builders.

Example definition::

    - name: ruby_sword
      group: combat
      max_damage: 500
      model: handheld
      lang: Sword of Rubies
      tags: [forge:tools/swords]
      recipe:
        type: shaped
        pattern: [" R ", " R ", " S "]
        key: {R: rubies:ruby, S: stick}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

import structlog

from game.items.item import ItemGroup, Rarity
from game.items.tags import Tag

from .builders.item_builder import ItemBuilder
from .registrate import Registrate, RegistryEntry

log = structlog.get_logger()

MODEL_KINDS = ("generated", "handheld")
RECIPE_KINDS = ("shaped", "shapeless", "smelting")


def _ingredient(ref: str) -> Any:
    """``#ns:path`` refers to a tag, anything else to an item id."""
    if ref.startswith("#"):
        return Tag.parse(ref[1:])
    return ref


def _model_callback(kind: str):
    if kind not in MODEL_KINDS:
        raise ValueError(f"Unknown model kind '{kind}', expected one of {MODEL_KINDS}.")
    return lambda ctx, prov: getattr(prov, kind)(ctx.get_entry)


def _recipe_callback(recipe: Mapping[str, Any]):
    kind = recipe.get("type")
    count = int(recipe.get("count", 1))
    if kind == "shaped":
        pattern = list(recipe["pattern"])
        key = {str(symbol): _ingredient(str(ref)) for symbol, ref in recipe["key"].items()}
        return lambda ctx, prov: prov.shaped(ctx.get_entry, pattern, key, count=count)
    if kind == "shapeless":
        ingredients = [_ingredient(str(ref)) for ref in recipe["ingredients"]]
        return lambda ctx, prov: prov.shapeless(ctx.get_entry, ingredients, count=count)
    if kind == "smelting":
        ingredient = _ingredient(str(recipe["ingredient"]))
        experience = float(recipe.get("experience", 0.1))
        cooking_time = int(recipe.get("cooking_time", 200))
        return lambda ctx, prov: prov.smelting(
            ingredient, ctx.get_entry, experience, cooking_time=cooking_time
        )
    raise ValueError(f"Unknown recipe type '{kind}', expected one of {RECIPE_KINDS}.")


def _apply_definition(builder: ItemBuilder, definition: Mapping[str, Any]) -> ItemBuilder:
    if "max_stack_size" in definition:
        size = int(definition["max_stack_size"])
        builder.properties(lambda p: p.max_stack_size(size))
    if "max_damage" in definition:
        damage = int(definition["max_damage"])
        builder.properties(lambda p: p.max_damage(damage))
    if "rarity" in definition:
        rarity = Rarity[str(definition["rarity"]).upper()]
        builder.properties(lambda p: p.rarity(rarity))
    if definition.get("fire_resistant"):
        builder.properties(lambda p: p.fire_resistant())
    if "model" in definition:
        builder.model(_model_callback(str(definition["model"])))
    if "lang" in definition:
        builder.lang(str(definition["lang"]))
    tags = [Tag.parse(str(tag)) for tag in definition.get("tags", [])]
    if tags:
        builder.tag(*tags)
    if "recipe" in definition:
        builder.recipe(_recipe_callback(definition["recipe"]))
    return builder


def register_item_definitions(
    registrate: Registrate,
    definitions: Iterable[Mapping[str, Any]],
    groups: Dict[str, ItemGroup] | None = None,
) -> List[RegistryEntry]:
    """Register one item per definition and return their registry entries.

    Group labels are resolved against ``groups`` when the item is created, so
    groups may be added to the mapping after this call.
    """
    groups = groups if groups is not None else {}
    entries: List[RegistryEntry] = []
    for definition in definitions:
        name = definition.get("name")
        if not name:
            log.error("Item definition without a name", definition=dict(definition))
            raise ValueError(f"Item definition is missing 'name': {dict(definition)}")

        group_supplier = None
        label = definition.get("group")
        if label is not None:

            def group_supplier(label=str(label)):
                if label not in groups:
                    raise LookupError(f"Unknown item group '{label}'.")
                return groups[label]

        builder = registrate.item(str(name), group=group_supplier)
        entries.append(_apply_definition(builder, definition).register())
        log.debug("Item definition registered", name=name)
    log.info("Item definitions registered", count=len(entries))
    return entries
