"""
Schema Emitter - deterministic JSON output.

Same registry in, byte-identical files out: entries are sorted by name,
keys keep a fixed order, and every file ends with a newline. Files are
replaced atomically so a failed run never leaves a half-written schema
behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from compschema.errors import DescriptorError, SchemaWriteError
from compschema.schema.entry import SchemaEntry

log = logging.getLogger(__name__)

SCHEMA_FILENAME = "component_schema.json"
ENUMS_FILENAME = "component_enums.json"


def schema_to_list(entries: Iterable[SchemaEntry]) -> list[dict]:
    return [e.to_dict() for e in sorted(entries, key=lambda e: e.name)]


def render_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_schema(entries: Iterable[SchemaEntry]) -> str:
    return render_json(schema_to_list(entries))


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass


def _stage(path: Path, data) -> tuple[str, int]:
    """Write data to a temp file beside path. Returns (temp name, byte count)."""
    try:
        payload = render_json(data).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SchemaWriteError(f"cannot write {path}: {e}") from e
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise SchemaWriteError(f"cannot write {path}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        _discard(tmp_name)
        raise SchemaWriteError(f"cannot write {path}: {e}") from e
    return tmp_name, len(payload)


def _publish(staged: list[tuple[Path, str, int]]) -> None:
    """Move staged temp files into place. All temp files are gone afterwards."""
    try:
        for path, tmp_name, _ in staged:
            os.replace(tmp_name, path)
    except OSError as e:
        for _, tmp_name, _ in staged:
            _discard(tmp_name)
        raise SchemaWriteError(f"cannot write {path}: {e}") from e
    for path, _, size in staged:
        log.info("Wrote %s (%d bytes)", path, size)


def write_json(path: str | Path, data) -> Path:
    """Atomically write data as JSON. Raises SchemaWriteError."""
    path = Path(path)
    tmp_name, size = _stage(path, data)
    _publish([(path, tmp_name, size)])
    return path


def emit(schema: list[dict], enums: dict[str, list[str]], out_dir: str | Path) -> tuple[Path, Path]:
    """Write component_schema.json and component_enums.json into out_dir.

    Both files are staged before either is replaced, and the schema goes
    last, so a failed run never publishes a fresh schema on its own.
    """
    out_dir = Path(out_dir)
    schema_path = out_dir / SCHEMA_FILENAME
    enums_path = out_dir / ENUMS_FILENAME
    enums_tmp, enums_size = _stage(enums_path, enums)
    try:
        schema_tmp, schema_size = _stage(schema_path, schema)
    except SchemaWriteError:
        _discard(enums_tmp)
        raise
    _publish([(enums_path, enums_tmp, enums_size), (schema_path, schema_tmp, schema_size)])
    return schema_path, enums_path


def load_schema(path: str | Path) -> list[dict]:
    """Read an emitted schema file back. Raises DescriptorError."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DescriptorError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DescriptorError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise DescriptorError(f"{path}: expected a JSON array of schema entries")
    return data
