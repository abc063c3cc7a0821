"""Builder for items.

Property changes are not applied as they are declared. Each call to
:meth:`ItemBuilder.properties` composes another function onto the pending
chain; the chain runs once per :meth:`ItemBuilder.create_entry`, against fresh
properties from the initial-properties supplier, and the result goes to the
factory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, Self, TypeVar

from game.items.item import Item, ItemGroup, ItemProperties

from ..providers.provider_type import ProviderType
from .builder import AbstractBuilder, BuilderCallback, DataCallback

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from game.items.tags import Tag
    from ..registrate import Registrate

T = TypeVar("T", bound=Item)
P = TypeVar("P")

PropertiesCallback = Callable[[ItemProperties], ItemProperties]


def _identity(properties: ItemProperties) -> ItemProperties:
    return properties


def _and_then(first: PropertiesCallback, second: PropertiesCallback) -> PropertiesCallback:
    def composed(properties: ItemProperties) -> ItemProperties:
        return second(first(properties))

    return composed


class ItemBuilder(AbstractBuilder[Item, T, P], Generic[T, P]):
    @classmethod
    def create(
        cls,
        owner: "Registrate",
        parent: P,
        name: str,
        callback: BuilderCallback,
        factory: Callable[[ItemProperties], T],
        group: Callable[[], ItemGroup | None] | None = None,
    ) -> "ItemBuilder[T, P]":
        """Create a builder preloaded with the default model and translation.

        When ``group`` is given, the properties also get that item group,
        looked up when the item is created.
        """
        return (
            cls(owner, parent, name, callback, factory)
            .default_model()
            .default_lang()
            .transform(lambda ib: ib if group is None else ib.group(group))
        )

    def __init__(
        self: Self,
        owner: "Registrate",
        parent: P,
        name: str,
        callback: BuilderCallback,
        factory: Callable[[ItemProperties], T],
        initial_properties: Callable[[], Any] = ItemProperties,
    ):
        super().__init__(owner, parent, name, callback, Item)
        self.factory = factory
        self.initial_properties = initial_properties
        self._properties_callback: PropertiesCallback = _identity

    def properties(self: Self, func: PropertiesCallback) -> Self:
        """Modify the item properties, lazily.

        ``func`` runs after every function passed before it. Returning a
        different object replaces the properties for the functions that follow.
        """
        self._properties_callback = _and_then(self._properties_callback, func)
        return self

    def group(self: Self, group: Callable[[], ItemGroup | None]) -> Self:
        """Set the item group. ``group`` is called at creation time, not now."""
        return self.properties(lambda p: p.group(group()))

    def default_model(self: Self) -> Self:
        """A generated model with a single texture of the same name."""
        return self.model(lambda ctx, prov: prov.generated(ctx.get_entry))

    def model(self: Self, callback: DataCallback) -> Self:
        return self.set_data(ProviderType.ITEM_MODEL, callback)

    def default_lang(self: Self) -> Self:
        """Use the automatic English name. Mostly useful to undo :meth:`lang`."""
        return self.lang(Item.get_translation_key)

    def lang(self: Self, name_or_key_provider: Any, name: str | None = None) -> Self:
        """Set the translation.

        ``lang("Ruby Sword")`` names the item directly; a callable first
        argument is treated as a translation-key provider, as in
        :meth:`AbstractBuilder.lang`.
        """
        if isinstance(name_or_key_provider, str):
            return super().lang(Item.get_translation_key, name_or_key_provider)
        return super().lang(name_or_key_provider, name)

    def recipe(self: Self, callback: DataCallback) -> Self:
        return self.set_data(ProviderType.RECIPE, callback)

    def tag(self: Self, *tags: "Tag") -> Self:
        return self.add_tags(ProviderType.ITEM_TAGS, *tags)

    def create_entry(self: Self) -> T:
        properties = self.initial_properties()
        properties = self._properties_callback(properties)
        return self.factory(properties)
