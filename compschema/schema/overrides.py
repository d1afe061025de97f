"""
Override Merge - hand-crafted schema entries on top of extracted ones.

Overrides use the schema file format. Entries without a "name" are
comment entries and are skipped. An override replaces the extracted
entry of the same name; names the extractor never saw are appended.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from compschema.schema.emitter import load_schema

log = logging.getLogger(__name__)


@dataclass
class MergeResult:
    schema: list[dict]
    overridden: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)

    def summary(self) -> str:
        return f"Overrides: {len(self.overridden)} replaced, {len(self.added)} added"


def load_overrides(path: str | Path | None) -> list[dict] | None:
    """Load an overrides file. A missing file means no overrides (None)."""
    if path is None:
        return None
    path = Path(path)
    if not path.exists():
        log.info("No overrides at %s, using extracted schema as-is", path)
        return None
    return load_schema(path)


def merge_overrides(extracted: list[dict], overrides: list[dict] | None) -> MergeResult:
    """Merge overrides into extracted schema entries. Inputs are not modified."""
    if not overrides:
        return MergeResult(schema=list(extracted))

    by_name = {e["name"]: e for e in extracted}
    result = MergeResult(schema=[])

    for entry in overrides:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name:
            continue
        if name in by_name:
            result.overridden.append(name)
        else:
            result.added.append(name)
        by_name[name] = entry

    result.schema = [by_name[name] for name in sorted(by_name)]
    log.info(result.summary())
    return result
