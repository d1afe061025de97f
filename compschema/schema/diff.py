"""
Schema Diff - what changed between two emitted schemas.

Typical use is comparing the output for two protocol versions before
regenerating hand-written codecs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

_MISSING = "<absent>"


@dataclass
class EntryChange:
    name: str
    # key -> (old value, new value); _MISSING marks an absent key
    keys: dict[str, tuple] = field(default_factory=dict)


@dataclass
class SchemaDiff:
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: list[EntryChange] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.added or self.removed or self.changed)

    def report(self) -> str:
        lines = ["=== Schema Diff ==="]
        lines.append(
            f"  Added: {len(self.added)}  Removed: {len(self.removed)}  Changed: {len(self.changed)}"
        )
        if self.empty:
            lines.append("  (no differences)")
            return "\n".join(lines)

        for name in self.added:
            lines.append(f"  + {name}")
        for name in self.removed:
            lines.append(f"  - {name}")
        for change in self.changed:
            lines.append(f"  ~ {change.name}")
            for key, (old, new) in change.keys.items():
                lines.append(f"      {key}: {_fmt(old)} -> {_fmt(new)}")
        return "\n".join(lines)


def _fmt(value) -> str:
    if value is _MISSING:
        return _MISSING
    if isinstance(value, str):
        return value
    return repr(value)


def diff_entry(old: dict, new: dict) -> dict[str, tuple]:
    keys = {}
    for key in sorted(set(old) | set(new)):
        before = old.get(key, _MISSING)
        after = new.get(key, _MISSING)
        if before != after:
            keys[key] = (before, after)
    return keys


def diff_schemas(old: list[dict], new: list[dict]) -> SchemaDiff:
    old_by_name = {e["name"]: e for e in old if e.get("name")}
    new_by_name = {e["name"]: e for e in new if e.get("name")}

    result = SchemaDiff(
        added=sorted(new_by_name.keys() - old_by_name.keys()),
        removed=sorted(old_by_name.keys() - new_by_name.keys()),
    )
    for name in sorted(old_by_name.keys() & new_by_name.keys()):
        keys = diff_entry(old_by_name[name], new_by_name[name])
        if keys:
            result.changed.append(EntryChange(name, keys))
    return result
