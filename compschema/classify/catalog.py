"""
Classification run state - Enum Catalog and run summary.

Both are explicit outputs of one classification run. They are the only
state shared across entries, so each guards itself with a lock and a
parallel classify map can feed them directly.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict

from compschema.protocol.descriptors import Kind, ValueType
from compschema.protocol.wire import WireType
from compschema.schema.entry import Pattern

log = logging.getLogger(__name__)


class EnumCatalog:
    """Full ordered value list per enumeration type, keyed by qualified identity."""

    def __init__(self):
        self._enums: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()

    def record(self, enum_type: ValueType) -> bool:
        """Record an enumeration the first time it is seen. Returns True if inserted."""
        if enum_type.kind is not Kind.ENUM:
            raise ValueError(f"not an enumeration: {enum_type.describe()}")
        key = enum_type.identity
        with self._lock:
            existing = self._enums.get(key)
            if existing is None:
                self._enums[key] = enum_type.values
                return True
        if existing != enum_type.values:
            log.warning(
                "Enum %s seen with a different value list (%d vs %d values), keeping the first",
                key, len(existing), len(enum_type.values),
            )
        return False

    def get(self, key: str) -> tuple[str, ...] | None:
        return self._enums.get(key)

    def to_dict(self) -> dict[str, list[str]]:
        """Sorted by key for stable output."""
        with self._lock:
            return {k: list(self._enums[k]) for k in sorted(self._enums)}

    def __len__(self) -> int:
        return len(self._enums)

    def __contains__(self, key: str) -> bool:
        return key in self._enums


class RunSummary:
    """Counters and follow-up lists for the end-of-run report."""

    def __init__(self):
        self.total: int = 0
        self.pattern_counts: defaultdict[str, int] = defaultdict(int)
        self.probed_compact: int = 0
        self.probed_fixed: int = 0
        self.custom_names: list[str] = []
        self.unverified_names: list[str] = []
        self.unavailable_names: list[str] = []
        self._lock = threading.Lock()

    def count(self, name: str, pattern: str) -> None:
        with self._lock:
            self.total += 1
            self.pattern_counts[pattern] += 1
            if pattern == Pattern.CUSTOM:
                self.custom_names.append(name)

    def count_probe(self, name: str, compact: bool, verified: bool) -> None:
        with self._lock:
            if compact:
                self.probed_compact += 1
            else:
                self.probed_fixed += 1
            if not verified:
                self.unverified_names.append(name)

    def mark_unavailable(self, name: str) -> None:
        with self._lock:
            self.unavailable_names.append(name)

    def finalize(self) -> None:
        """Sort follow-up lists so the report is independent of classify order."""
        with self._lock:
            self.custom_names.sort()
            self.unverified_names.sort()
            self.unavailable_names.sort()

    def report(self, enum_count: int | None = None) -> str:
        """Human-readable run summary."""
        lines = ["=== Component Schema Summary ==="]
        lines.append(f"  Total:        {self.total}")
        for pattern in Pattern.ALL:
            count = self.pattern_counts.get(pattern, 0)
            label = f"{pattern}:"
            line = f"  {label:<14s}{count}"
            if pattern == Pattern.EMBED:
                line += (
                    f" (probed {WireType.VARINT}: {self.probed_compact}, "
                    f"probed {WireType.INT32}: {self.probed_fixed})"
                )
            lines.append(line)
        if enum_count is not None:
            lines.append(f"  Enums:        {enum_count}")

        if self.custom_names:
            lines.append("")
            lines.append("Custom components (need hand-written codecs):")
            lines.extend(f"  - {n}" for n in self.custom_names)

        if self.unverified_names:
            lines.append("")
            lines.append(f"Unverified integer framing (defaulted to {WireType.VARINT}, review manually):")
            lines.extend(f"  - {n}" for n in self.unverified_names)

        if self.unavailable_names:
            lines.append("")
            lines.append("Value type unavailable (classified custom):")
            lines.extend(f"  - {n}" for n in self.unavailable_names)

        return "\n".join(lines)
