"""Shared plumbing for data providers.

A provider collects artifacts while data callbacks run against it and only
touches the filesystem in :meth:`RegistrateProvider.save`.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List, Self

import structlog

log = structlog.get_logger()


def resolve_entry(entry_or_supplier: Any) -> Any:
    """Accept either an entry or a zero-argument supplier of one."""
    if callable(entry_or_supplier):
        return entry_or_supplier()
    return entry_or_supplier


def registry_name_of(entry_or_supplier: Any) -> str:
    entry = resolve_entry(entry_or_supplier)
    registry_name = getattr(entry, "registry_name", None)
    if not registry_name:
        log.error("Entry has no registry name", entry=repr(entry))
        raise ValueError(f"Entry {entry!r} has not been registered yet.")
    return registry_name


def split_id(resource_id: str, default_namespace: str) -> tuple[str, str]:
    namespace, sep, path = resource_id.partition(":")
    if not sep:
        return default_namespace, resource_id
    return namespace, path


class RegistrateProvider(ABC):
    """Base class for the JSON-emitting providers."""

    name: str = "provider"

    def __init__(self: Self, mod_id: str, output_dir: Path | str):
        self.mod_id = mod_id
        self.output_dir = Path(output_dir)

    @abstractmethod
    def save(self: Self) -> List[Path]:
        """Write everything collected so far and return the written paths."""

    def _write_json(self: Self, path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return path

    def _save_all(
        self: Self, payloads: dict[Any, Any], path_for: Callable[[Any], Path]
    ) -> List[Path]:
        written = [self._write_json(path_for(key), payload) for key, payload in payloads.items()]
        log.info(
            "Data provider saved",
            provider=self.name,
            files=len(written),
            output_dir=str(self.output_dir),
        )
        return written
