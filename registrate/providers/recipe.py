from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Self, Sequence

import structlog

from game.items.tags import DEFAULT_NAMESPACE, Tag

from .base import RegistrateProvider, registry_name_of, split_id

log = structlog.get_logger()

MAX_GRID = 3


class RegistrateRecipeProvider(RegistrateProvider):
    """Collects crafting and smelting recipes keyed by ``namespace:path`` id.

    Results and ingredients can be given as item ids (``"minecraft:stick"``,
    bare ids default to ``minecraft``), registered items or entry suppliers.
    Ingredients may also be :class:`Tag` references.
    """

    name = "recipe"

    def __init__(self: Self, mod_id: str, output_dir: Path | str):
        super().__init__(mod_id, output_dir)
        self.recipes: Dict[str, dict] = {}

    def shaped(
        self: Self,
        result: Any,
        pattern: Sequence[str],
        key: Mapping[str, Any],
        count: int = 1,
        recipe_id: str | None = None,
    ) -> dict:
        self._validate_pattern(pattern, key)
        result_id = self._item_id(result)
        payload = {
            "type": "minecraft:crafting_shaped",
            "pattern": list(pattern),
            "key": {symbol: self._ingredient(ref) for symbol, ref in key.items()},
            "result": {"item": result_id, "count": self._count(count)},
        }
        return self._add(recipe_id or result_id, payload)

    def shapeless(
        self: Self,
        result: Any,
        ingredients: Sequence[Any],
        count: int = 1,
        recipe_id: str | None = None,
    ) -> dict:
        if not 1 <= len(ingredients) <= MAX_GRID * MAX_GRID:
            raise ValueError(
                f"Shapeless recipes take 1 to {MAX_GRID * MAX_GRID} ingredients, got {len(ingredients)}."
            )
        result_id = self._item_id(result)
        payload = {
            "type": "minecraft:crafting_shapeless",
            "ingredients": [self._ingredient(ref) for ref in ingredients],
            "result": {"item": result_id, "count": self._count(count)},
        }
        return self._add(recipe_id or result_id, payload)

    def smelting(
        self: Self,
        ingredient: Any,
        result: Any,
        experience: float,
        cooking_time: int = 200,
        recipe_id: str | None = None,
    ) -> dict:
        if cooking_time <= 0:
            raise ValueError(f"Cooking time must be positive, got {cooking_time}.")
        result_id = self._item_id(result)
        payload = {
            "type": "minecraft:smelting",
            "ingredient": self._ingredient(ingredient),
            "result": result_id,
            "experience": float(experience),
            "cookingtime": int(cooking_time),
        }
        return self._add(recipe_id or f"{result_id}_from_smelting", payload)

    @staticmethod
    def _count(count: int) -> int:
        if count < 1:
            raise ValueError(f"Recipe result count must be at least 1, got {count}.")
        return int(count)

    @staticmethod
    def _validate_pattern(pattern: Sequence[str], key: Mapping[str, Any]) -> None:
        if not 1 <= len(pattern) <= MAX_GRID:
            raise ValueError(f"Recipe pattern must have 1 to {MAX_GRID} rows, got {len(pattern)}.")
        widths = {len(row) for row in pattern}
        if len(widths) != 1 or not 1 <= widths.pop() <= MAX_GRID:
            raise ValueError(f"Recipe pattern rows must share a width of 1 to {MAX_GRID}: {list(pattern)}")
        for row in pattern:
            for symbol in row:
                if symbol != " " and symbol not in key:
                    raise ValueError(f"Pattern symbol '{symbol}' is not defined in the recipe key.")

    def _item_id(self: Self, ref: Any) -> str:
        if isinstance(ref, str):
            namespace, path = split_id(ref, DEFAULT_NAMESPACE)
            return f"{namespace}:{path}"
        return registry_name_of(ref)

    def _ingredient(self: Self, ref: Any) -> dict:
        if isinstance(ref, Tag):
            return {"tag": str(ref)}
        return {"item": self._item_id(ref)}

    def _add(self: Self, recipe_id: str, payload: dict) -> dict:
        namespace, path = split_id(recipe_id, self.mod_id)
        full_id = f"{namespace}:{path}"
        if full_id in self.recipes:
            log.error("Duplicate recipe id", recipe_id=full_id)
            raise ValueError(f"Duplicate recipe id '{full_id}'.")
        self.recipes[full_id] = payload
        return payload

    def save(self: Self) -> List[Path]:
        def path_for(full_id: str) -> Path:
            namespace, path = split_id(full_id, self.mod_id)
            return self.output_dir / "data" / namespace / "recipes" / f"{path}.json"

        return self._save_all(self.recipes, path_for)
