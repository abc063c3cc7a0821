"""Base class shared by every entry builder.

A builder describes one registry entry before it exists. It never creates the
entry itself: :meth:`AbstractBuilder.register` hands ``create_entry`` to the
owner's callback, and the owner decides when to call it. Data callbacks are
stored on the owner under the builder's name and run later, during data
generation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Self,
    TypeVar,
)

import structlog

from ..providers.context import DataGenContext
from ..providers.provider_type import ProviderType

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from game.items.tags import Tag
    from ..registrate import Registrate, RegistryEntry

log = structlog.get_logger()

R = TypeVar("R")  # registry type
T = TypeVar("T")  # concrete entry type
P = TypeVar("P")  # parent

DataCallback = Callable[[DataGenContext, Any], None]
BuilderCallback = Callable[[str, type, "AbstractBuilder", Callable[[], Any]], "RegistryEntry"]


class AbstractBuilder(ABC, Generic[R, T, P]):
    def __init__(
        self: Self,
        owner: "Registrate",
        parent: P,
        name: str,
        callback: BuilderCallback,
        registry_type: type,
    ):
        if not name:
            raise ValueError("Builder name cannot be empty.")
        self.owner = owner
        self.parent = parent
        self.name = name
        self.callback = callback
        self.registry_type = registry_type
        self._tags: Dict[ProviderType, List["Tag"]] = {}

    @abstractmethod
    def create_entry(self: Self) -> T:
        """Construct the entry. Called by the owner at registration time."""

    def register(self: Self) -> "RegistryEntry":
        """Hand this builder to the owner and return a lazy handle to the entry."""
        return self.callback(self.name, self.registry_type, self, self.create_entry)

    def build(self: Self) -> P:
        """Register and return the parent, for chaining."""
        self.register()
        return self.parent

    def get_entry(self: Self) -> T:
        return self.owner.get(self.name, self.registry_type)

    def as_supplier(self: Self) -> Callable[[], T]:
        return self.get_entry

    def transform(self: Self, func: Callable[[Self], Any]) -> Any:
        return func(self)

    def set_data(self: Self, provider_type: ProviderType, callback: DataCallback) -> Self:
        """Register ``callback`` for ``provider_type`` data generation of this entry."""
        self.owner.set_data_generator(self.name, provider_type, callback)
        return self

    def lang(self: Self, key_provider: Callable[[T], str], name: str | None = None) -> Self:
        """Set the translation for this entry.

        ``key_provider`` maps the entry to its translation key. Without ``name``
        the provider derives an English name from the registry path. When
        several lang callbacks run for one entry the last one written wins.
        """
        if name is None:

            def localized(prov, entry_supplier):
                return prov.get_automatic_name(entry_supplier)

        else:

            def localized(prov, entry_supplier):
                return name

        return self.set_data(
            ProviderType.LANG,
            lambda ctx, prov: prov.add(
                key_provider(ctx.get_entry()), localized(prov, ctx.get_entry), replace=True
            ),
        )

    def add_tags(self: Self, provider_type: ProviderType, *tags: "Tag") -> Self:
        """Add this entry to ``tags``. Repeated calls accumulate."""
        if provider_type not in self._tags:
            self._tags[provider_type] = []
            pending = self._tags[provider_type]

            def emit_tags(ctx, prov):
                for tag in pending:
                    prov.get_builder(tag).add(ctx.get_entry())

            self.set_data(provider_type, emit_tags)
        for tag in tags:
            if tag not in self._tags[provider_type]:
                self._tags[provider_type].append(tag)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
