# game/items/tags.py
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_NAMESPACE = "minecraft"


@dataclass(frozen=True)
class Tag:
    """Reference to a named group of items, e.g. ``forge:ingots/iron``."""

    namespace: str
    path: str

    @classmethod
    def parse(cls, tag_id: str) -> "Tag":
        namespace, sep, path = tag_id.partition(":")
        if not sep:
            namespace, path = DEFAULT_NAMESPACE, tag_id
        if not namespace or not path:
            raise ValueError(f"Invalid tag id '{tag_id}'.")
        return cls(namespace, path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"
