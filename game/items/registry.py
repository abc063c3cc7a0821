# game/items/registry.py
from typing import Dict, Iterator, Self

import polars as pl
import structlog

from .item import Item, Rarity

log = structlog.get_logger()

# Define the schema for the registered item DataFrame
ITEM_SCHEMA: dict[str, pl.DataType] = {
    "registry_name": pl.Utf8,
    "namespace": pl.Utf8,
    "path": pl.Utf8,
    "item_class": pl.Utf8,
    "group": pl.Utf8,  # Nullable. Label of the ItemGroup
    "max_stack_size": pl.UInt8,
    "max_damage": pl.UInt32,
    "rarity": pl.Enum([r.name for r in Rarity]),
    "fire_resistant": pl.Boolean,
}


class ItemRegistry:
    """Holds realized items by registry name, mirrored into a DataFrame for queries."""

    def __init__(self: Self):
        log.info("Initializing ItemRegistry")
        self._items: Dict[str, Item] = {}
        self.items_df: pl.DataFrame = pl.DataFrame(schema=ITEM_SCHEMA)

    def register(self: Self, registry_name: str, item: Item) -> Item:
        """Name ``item`` and add it to the registry."""
        if registry_name in self._items:
            log.error("Duplicate item registration", registry_name=registry_name)
            raise ValueError(f"Item '{registry_name}' is already registered.")

        item.set_registry_name(registry_name)
        self._items[registry_name] = item

        row = {
            "registry_name": [registry_name],
            "namespace": [item.namespace],
            "path": [item.path],
            "item_class": [type(item).__name__],
            "group": [item.group.label if item.group is not None else None],
            "max_stack_size": [item.max_stack_size],
            "max_damage": [item.max_damage],
            "rarity": [item.rarity.name],
            "fire_resistant": [item.fire_resistant],
        }
        new_item_df = pl.DataFrame(row).with_columns(
            [pl.col(col).cast(dtype) for col, dtype in ITEM_SCHEMA.items()]
        )
        if self.items_df.height == 0:
            self.items_df = new_item_df
        else:
            self.items_df = self.items_df.vstack(new_item_df)

        log.debug("Item registered", registry_name=registry_name, item=repr(item))
        return item

    def get(self: Self, registry_name: str) -> Item | None:
        return self._items.get(registry_name)

    def __contains__(self: Self, registry_name: object) -> bool:
        return registry_name in self._items

    def __len__(self: Self) -> int:
        return len(self._items)

    def __iter__(self: Self) -> Iterator[Item]:
        return iter(self._items.values())

    def get_items_in_group(self: Self, label: str) -> pl.DataFrame:
        """Returns registered items whose display group has ``label``."""
        return self.items_df.filter(pl.col("group") == label)

    def get_items_in_namespace(self: Self, namespace: str) -> pl.DataFrame:
        """Returns registered items belonging to ``namespace``."""
        return self.items_df.filter(pl.col("namespace") == namespace)
