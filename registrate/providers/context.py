from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DataGenContext(Generic[T]):
    """What a data callback knows about the entry it generates data for.

    The entry itself is looked up through ``entry_supplier`` each time
    :meth:`get_entry` is called, so callbacks registered before the entry
    existed still see the realized object.
    """

    name: str
    registry_type: type
    entry_supplier: Callable[[], T]

    def get_entry(self) -> T:
        return self.entry_supplier()

    @property
    def entry(self) -> Any:
        return self.get_entry()
