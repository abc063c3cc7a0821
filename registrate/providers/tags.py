from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Self

from game.items.tags import Tag

from .base import RegistrateProvider, registry_name_of


class TagBuilder:
    """Values collected for one tag. Each value appears once."""

    def __init__(self: Self, tag: Tag):
        self.tag = tag
        self.replace = False
        self.values: List[str] = []

    def add(self: Self, *entries: Any) -> Self:
        for entry in entries:
            value = entry if isinstance(entry, str) else registry_name_of(entry)
            if value not in self.values:
                self.values.append(value)
        return self

    def add_tag(self: Self, tag: Tag) -> Self:
        value = f"#{tag}"
        if value not in self.values:
            self.values.append(value)
        return self

    def to_json(self: Self) -> dict:
        return {"replace": self.replace, "values": list(self.values)}


class RegistrateItemTagsProvider(RegistrateProvider):
    name = "item_tags"

    def __init__(self: Self, mod_id: str, output_dir: Path | str):
        super().__init__(mod_id, output_dir)
        self.builders: Dict[Tag, TagBuilder] = {}

    def get_builder(self: Self, tag: Tag) -> TagBuilder:
        if tag not in self.builders:
            self.builders[tag] = TagBuilder(tag)
        return self.builders[tag]

    def save(self: Self) -> List[Path]:
        def path_for(tag: Tag) -> Path:
            return self.output_dir / "data" / tag.namespace / "tags" / "items" / f"{tag.path}.json"

        payloads = {tag: builder.to_json() for tag, builder in self.builders.items()}
        return self._save_all(payloads, path_for)
