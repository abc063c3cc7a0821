from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Self

import structlog

from .base import RegistrateProvider, registry_name_of, split_id

log = structlog.get_logger()


class RegistrateItemModelProvider(RegistrateProvider):
    """Collects item model definitions.

    Models are keyed by item path. Registering a second model for the same
    path replaces the first one.
    """

    name = "item_model"

    def __init__(self: Self, mod_id: str, output_dir: Path | str):
        super().__init__(mod_id, output_dir)
        self.models: Dict[str, dict] = {}

    def generated(self: Self, entry_supplier: Any, *textures: str) -> dict:
        """A flat single-layer model, textured ``<mod>:item/<path>`` by default."""
        return self._layered(entry_supplier, "item/generated", textures)

    def handheld(self: Self, entry_supplier: Any, *textures: str) -> dict:
        """Like :meth:`generated` but held the way tools are."""
        return self._layered(entry_supplier, "item/handheld", textures)

    def with_existing_parent(
        self: Self, name: str, parent: str, textures: Dict[str, str] | None = None
    ) -> dict:
        model: dict[str, Any] = {"parent": parent}
        if textures:
            model["textures"] = dict(textures)
        return self._add(name, model)

    def _layered(self: Self, entry_supplier: Any, parent: str, textures: tuple[str, ...]) -> dict:
        namespace, path = split_id(registry_name_of(entry_supplier), self.mod_id)
        layers = textures or (f"{namespace}:item/{path}",)
        model = {
            "parent": parent,
            "textures": {f"layer{i}": texture for i, texture in enumerate(layers)},
        }
        return self._add(path, model)

    def _add(self: Self, name: str, model: dict) -> dict:
        if name in self.models:
            log.debug("Replacing item model", model=name)
        self.models[name] = model
        return model

    def save(self: Self) -> List[Path]:
        root = self.output_dir / "assets" / self.mod_id / "models" / "item"
        return self._save_all(self.models, lambda name: root / f"{name}.json")
