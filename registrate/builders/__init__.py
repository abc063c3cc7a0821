from .builder import AbstractBuilder
from .item_builder import ItemBuilder

__all__ = ["AbstractBuilder", "ItemBuilder"]
