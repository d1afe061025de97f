"""
Registry - read-only, name-unique collection of component definitions.

Each entry pairs a symbolic name with the declared value-type shape and
the capabilities the probe needs: an encoder bound to the entry and,
where the shape allows it, a constructor for integer-carrying samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from compschema.classify.probe import EncodeFn, SampleFn
from compschema.errors import DescriptorError
from compschema.protocol.descriptors import ValueType


@dataclass(frozen=True)
class RegistryEntry:
    name: str
    value_type: ValueType | None         # None = type could not be determined
    encode: EncodeFn | None = None
    sample: SampleFn | None = None
    error: str = ""                       # why value_type is None

    def __repr__(self) -> str:
        shape = self.value_type.describe() if self.value_type else f"unavailable ({self.error})"
        return f"RegistryEntry({self.name}: {shape})"


class Registry:
    """Entries are unique by name; iteration order is not meaningful."""

    def __init__(self, entries: Iterable[RegistryEntry] = (), version: str = ""):
        self.version = version
        self._entries: dict[str, RegistryEntry] = {}
        for entry in entries:
            if entry.name in self._entries:
                raise DescriptorError(f"duplicate registry entry: {entry.name}")
            self._entries[entry.name] = entry

    def get(self, name: str) -> RegistryEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries
