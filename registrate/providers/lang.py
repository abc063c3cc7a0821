from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Self

import structlog

from .base import RegistrateProvider, registry_name_of, resolve_entry, split_id

log = structlog.get_logger()


class RegistrateLangProvider(RegistrateProvider):
    """Collects translation entries for a single locale."""

    name = "lang"

    def __init__(self: Self, mod_id: str, output_dir: Path | str, locale: str = "en_us"):
        super().__init__(mod_id, output_dir)
        self.locale = locale
        self.entries: Dict[str, str] = {}

    @staticmethod
    def to_english_name(internal_name: str) -> str:
        """``iron_sword`` -> ``Iron Sword``."""
        return " ".join(word.capitalize() for word in internal_name.lower().split("_") if word)

    def get_automatic_name(self: Self, entry_supplier: Any) -> str:
        _, path = split_id(registry_name_of(entry_supplier), self.mod_id)
        return self.to_english_name(path)

    def add(self: Self, key: str, value: str, replace: bool = False) -> None:
        """Add a translation. With ``replace`` an existing value for ``key`` is overwritten."""
        if key in self.entries and not replace:
            log.error("Duplicate translation key", key=key, existing=self.entries[key], value=value)
            raise ValueError(f"Duplicate translation key '{key}'.")
        self.entries[key] = value

    def add_item(self: Self, entry_supplier: Any, name: str) -> None:
        self.add(resolve_entry(entry_supplier).get_translation_key(), name)

    def save(self: Self) -> List[Path]:
        if not self.entries:
            return []
        path = self.output_dir / "assets" / self.mod_id / "lang" / f"{self.locale}.json"
        payload = dict(sorted(self.entries.items()))
        return self._save_all({self.locale: payload}, lambda _: path)
