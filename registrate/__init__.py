"""Fluent registration helpers for mod items.

Builders collect lazy property changes and data-generation callbacks; the
:class:`Registrate` owner realizes entries and drives data generation.
"""

from .builders import AbstractBuilder, ItemBuilder
from .definitions import register_item_definitions
from .providers import DataGenContext, ProviderType
from .registrate import DataCallbackPolicy, Registrate, RegistryEntry

__all__ = [
    "AbstractBuilder",
    "DataCallbackPolicy",
    "DataGenContext",
    "ItemBuilder",
    "ProviderType",
    "Registrate",
    "RegistryEntry",
    "register_item_definitions",
]
