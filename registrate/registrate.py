"""The owner object builders register with.

``Registrate`` keeps three things per mod: the pending registrations handed
over by builders, the realized entries once :meth:`Registrate.register_all`
has run, and the data callbacks each builder attached per
:class:`ProviderType`. Data generation is a separate pass over the realized
entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Self, Tuple

import polars as pl
import structlog

from game.items.item import Item, ItemGroup, ItemProperties
from game.items.registry import ItemRegistry

from .builders.builder import AbstractBuilder, DataCallback
from .builders.item_builder import ItemBuilder
from .providers import ProviderType, create_provider
from .providers.context import DataGenContext

log = structlog.get_logger()

REGISTRATION_SCHEMA: dict[str, pl.DataType] = {
    "name": pl.Utf8,
    "registry_type": pl.Utf8,
    "builder": pl.Utf8,
    "realized": pl.Boolean,
}


class DataCallbackPolicy(Enum):
    """What happens when a builder sets a second callback for the same provider type."""

    OVERWRITE = "overwrite"  # the newest callback replaces the previous one
    APPEND = "append"  # callbacks accumulate and run in registration order


class RegistryEntry:
    """Lazy handle to an entry that may not have been created yet."""

    def __init__(self: Self, owner: "Registrate", name: str, registry_type: type):
        self.owner = owner
        self.name = name
        self.registry_type = registry_type

    def is_present(self: Self) -> bool:
        return self.owner.is_realized(self.name, self.registry_type)

    def get(self: Self) -> Any:
        return self.owner.get(self.name, self.registry_type)

    __call__ = get

    def __repr__(self) -> str:
        return f"RegistryEntry({self.owner.mod_id}:{self.name}, {self.registry_type.__name__})"


@dataclass
class _Registration:
    name: str
    registry_type: type
    builder: AbstractBuilder
    creator: Callable[[], Any]
    entry: RegistryEntry


class Registrate:
    def __init__(
        self: Self,
        mod_id: str,
        data_callback_policy: DataCallbackPolicy = DataCallbackPolicy.OVERWRITE,
        lang_locale: str = "en_us",
    ):
        if not mod_id or ":" in mod_id:
            raise ValueError(f"Invalid mod id '{mod_id}'.")
        self.mod_id = mod_id
        self.data_callback_policy = data_callback_policy
        self.lang_locale = lang_locale
        self._registrations: Dict[Tuple[str, type], _Registration] = {}
        self._entries: Dict[Tuple[str, type], Any] = {}
        self._data_callbacks: Dict[Tuple[str, ProviderType], List[DataCallback]] = {}
        log.debug("Registrate created", mod_id=mod_id, policy=data_callback_policy.value)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Registrate":
        """Build from the main config mapping (``mod_id``, ``data_callback_policy``, ``lang_locale``)."""
        mod_id = config.get("mod_id")
        if not mod_id:
            log.error("Config is missing 'mod_id'")
            raise ValueError("Config must define 'mod_id'.")
        policy_name = str(config.get("data_callback_policy", "overwrite")).lower()
        try:
            policy = DataCallbackPolicy(policy_name)
        except ValueError:
            log.error("Unknown data callback policy", policy=policy_name)
            raise
        return cls(mod_id, policy, lang_locale=config.get("lang_locale", "en_us"))

    # --- Builders ---

    def item(
        self: Self,
        name: str,
        factory: Callable[[ItemProperties], Item] = Item,
        group: Callable[[], ItemGroup | None] | None = None,
        parent: Any = None,
    ) -> ItemBuilder:
        """Start building an item. ``build()`` on the result returns ``parent`` (this object by default).

        A name that is already registered is rejected here, before the new
        builder can attach data callbacks under it.
        """
        self._check_unregistered(name, Item)
        return ItemBuilder.create(
            self, self if parent is None else parent, name, self.accept, factory, group
        )

    def accept(
        self: Self,
        name: str,
        registry_type: type,
        builder: AbstractBuilder,
        creator: Callable[[], Any],
    ) -> RegistryEntry:
        """Builder callback: record a registration to be realized later."""
        self._check_unregistered(name, registry_type)
        entry = RegistryEntry(self, name, registry_type)
        self._registrations[(name, registry_type)] = _Registration(
            name, registry_type, builder, creator, entry
        )
        log.debug("Registration captured", name=name, registry_type=registry_type.__name__)
        return entry

    def _check_unregistered(self: Self, name: str, registry_type: type) -> None:
        if (name, registry_type) in self._registrations:
            log.error("Duplicate registration", name=name, registry_type=registry_type.__name__)
            raise ValueError(
                f"'{self.mod_id}:{name}' is already registered as {registry_type.__name__}."
            )

    # --- Data callbacks ---

    def set_data_generator(
        self: Self, name: str, provider_type: ProviderType, callback: DataCallback
    ) -> None:
        key = (name, provider_type)
        if self.data_callback_policy is DataCallbackPolicy.APPEND:
            self._data_callbacks.setdefault(key, []).append(callback)
        else:
            if key in self._data_callbacks:
                log.debug("Replacing data callback", name=name, provider=provider_type.value)
            self._data_callbacks[key] = [callback]

    def get_data_generators(self: Self, name: str, provider_type: ProviderType) -> List[DataCallback]:
        return list(self._data_callbacks.get((name, provider_type), []))

    # --- Registration ---

    def register_all(self: Self, item_registry: ItemRegistry) -> int:
        """Create every pending item and add it to ``item_registry``.

        Entries already created by an earlier call are skipped. An exception
        from a builder stops the pass; entries created before it stay registered.
        """
        created = 0
        for key, registration in self._registrations.items():
            if key in self._entries or registration.registry_type is not Item:
                continue
            registry_name = f"{self.mod_id}:{registration.name}"
            try:
                entry = registration.creator()
            except Exception as e:
                log.error(
                    "Failed to create entry",
                    registry_name=registry_name,
                    error=str(e),
                    exc_info=True,
                )
                raise
            item_registry.register(registry_name, entry)
            self._entries[key] = entry
            created += 1
        log.info("Entries registered", mod_id=self.mod_id, created=created, total=len(self._entries))
        return created

    def is_realized(self: Self, name: str, registry_type: type) -> bool:
        return (name, registry_type) in self._entries

    def get(self: Self, name: str, registry_type: type) -> Any:
        key = (name, registry_type)
        if key not in self._entries:
            state = "not created yet" if key in self._registrations else "not registered"
            raise LookupError(f"'{self.mod_id}:{name}' ({registry_type.__name__}) is {state}.")
        return self._entries[key]

    def get_all(self: Self, registry_type: type) -> List[Any]:
        return [entry for (_, rtype), entry in self._entries.items() if rtype is registry_type]

    def registration_table(self: Self) -> pl.DataFrame:
        """One row per registration, in registration order."""
        rows = [
            {
                "name": reg.name,
                "registry_type": reg.registry_type.__name__,
                "builder": type(reg.builder).__name__,
                "realized": key in self._entries,
            }
            for key, reg in self._registrations.items()
        ]
        if not rows:
            return pl.DataFrame(schema=REGISTRATION_SCHEMA)
        return pl.DataFrame(rows, schema=REGISTRATION_SCHEMA)

    # --- Data generation ---

    def generate_data(self: Self, provider_type: ProviderType, provider: Any) -> int:
        """Run every ``provider_type`` callback against ``provider``. Returns the number run."""
        ran = 0
        for (name, ptype), callbacks in self._data_callbacks.items():
            if ptype is not provider_type:
                continue
            registration = self._find_registration(name)
            if registration is None:
                log.warning("Data callback for unknown entry skipped", name=name, provider=ptype.value)
                continue
            ctx = DataGenContext(name, registration.registry_type, registration.entry.get)
            for callback in callbacks:
                callback(ctx, provider)
                ran += 1
        log.debug("Data callbacks run", provider=provider_type.value, count=ran)
        return ran

    def run_data_generation(self: Self, output_dir: Path | str) -> List[Path]:
        """Run all providers in :class:`ProviderType` order and write their output."""
        output_dir = Path(output_dir)
        log.info("Starting data generation", mod_id=self.mod_id, output_dir=str(output_dir))
        written: List[Path] = []
        for provider_type in ProviderType:
            kwargs = {"locale": self.lang_locale} if provider_type is ProviderType.LANG else {}
            provider = create_provider(provider_type, self.mod_id, output_dir, **kwargs)
            self.generate_data(provider_type, provider)
            written.extend(provider.save())
        log.info("Data generation finished", mod_id=self.mod_id, files=len(written))
        return written

    def _find_registration(self: Self, name: str) -> _Registration | None:
        for registration in self._registrations.values():
            if registration.name == name:
                return registration
        return None
