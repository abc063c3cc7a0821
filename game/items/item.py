# game/items/item.py
"""Minimal host item model used by the builders.

``ItemProperties`` is the mutable settings object builders pass through their
property callbacks; ``Item`` is the immutable result handed to the registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

import structlog

log = structlog.get_logger()

MAX_STACK_SIZE = 64


class Rarity(Enum):
    """Display rarity of an item."""

    COMMON = auto()
    UNCOMMON = auto()
    RARE = auto()
    EPIC = auto()


@dataclass(frozen=True)
class ItemGroup:
    """A display group (creative tab) items can be sorted into."""

    label: str

    @property
    def translation_key(self) -> str:
        return f"itemGroup.{self.label}"


class ItemProperties:
    """Settings collected before an item is constructed."""

    def __init__(self: Self) -> None:
        self.item_group: ItemGroup | None = None
        self.stack_size: int = MAX_STACK_SIZE
        self.durability: int = 0
        self.item_rarity: Rarity = Rarity.COMMON
        self.is_fire_resistant: bool = False

    def group(self: Self, group: ItemGroup | None) -> Self:
        self.item_group = group
        return self

    def max_stack_size(self: Self, size: int) -> Self:
        if not 1 <= size <= MAX_STACK_SIZE:
            raise ValueError(
                f"Stack size must be between 1 and {MAX_STACK_SIZE}, got {size}."
            )
        self.stack_size = size
        return self

    def max_damage(self: Self, damage: int) -> Self:
        """Make the item damageable. Damageable items never stack."""
        if damage < 0:
            raise ValueError(f"Max damage cannot be negative, got {damage}.")
        self.durability = damage
        self.stack_size = 1
        return self

    def rarity(self: Self, rarity: Rarity) -> Self:
        self.item_rarity = rarity
        return self

    def fire_resistant(self: Self) -> Self:
        self.is_fire_resistant = True
        return self

    def __repr__(self) -> str:
        return (
            f"ItemProperties(group={self.item_group!r}, stack_size={self.stack_size}, "
            f"durability={self.durability}, rarity={self.item_rarity.name}, "
            f"fire_resistant={self.is_fire_resistant})"
        )


class Item:
    """A constructed item. Properties are copied in on construction."""

    def __init__(self: Self, properties: ItemProperties):
        self.group: ItemGroup | None = properties.item_group
        self.max_stack_size: int = properties.stack_size
        self.max_damage: int = properties.durability
        self.rarity: Rarity = properties.item_rarity
        self.fire_resistant: bool = properties.is_fire_resistant
        self._registry_name: str | None = None

    @property
    def registry_name(self: Self) -> str | None:
        return self._registry_name

    def set_registry_name(self: Self, registry_name: str) -> Self:
        """Assign the ``namespace:path`` id. Allowed exactly once."""
        if self._registry_name is not None:
            log.error(
                "Attempted to rename a registered item",
                current=self._registry_name,
                requested=registry_name,
            )
            raise ValueError(
                f"Item already named '{self._registry_name}', cannot rename to '{registry_name}'."
            )
        namespace, sep, path = registry_name.partition(":")
        if not sep or not namespace or not path:
            raise ValueError(
                f"Registry name must look like 'namespace:path', got '{registry_name}'."
            )
        self._registry_name = registry_name
        return self

    @property
    def namespace(self: Self) -> str | None:
        if self._registry_name is None:
            return None
        return self._registry_name.split(":", 1)[0]

    @property
    def path(self: Self) -> str | None:
        if self._registry_name is None:
            return None
        return self._registry_name.split(":", 1)[1]

    def can_be_depleted(self: Self) -> bool:
        return self.max_damage > 0

    def get_translation_key(self: Self) -> str:
        if self._registry_name is None:
            raise ValueError("Unregistered item has no translation key.")
        return f"item.{self.namespace}.{self.path}"

    def __repr__(self) -> str:
        name = self._registry_name or "<unregistered>"
        return f"{type(self).__name__}({name})"
