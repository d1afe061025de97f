"""Tests for deterministic schema output."""

import json
import os

import pytest

from compschema.errors import DescriptorError, SchemaWriteError
from compschema.schema.emitter import (
    ENUMS_FILENAME, SCHEMA_FILENAME, emit, load_schema, render_schema, write_json,
)
from compschema.schema.entry import SchemaEntry, TupleField


def _entries() -> list[SchemaEntry]:
    return [
        SchemaEntry.custom("mod:zeta"),
        SchemaEntry.embed("mod:alpha", "compact-varint"),
        SchemaEntry.tuple_of("mod:pair", [TupleField("A", "fixed-int32"), TupleField("B", "string")]),
        SchemaEntry.array("mod:box", "Sizes", "32-bit-float"),
        SchemaEntry.empty("mod:Upper"),
    ]


def test_render_sorted_by_name():
    """Entries are emitted in name order."""
    data = json.loads(render_schema(_entries()))
    names = [e["name"] for e in data]
    assert names == ["mod:Upper", "mod:alpha", "mod:box", "mod:pair", "mod:zeta"]
    assert names == sorted(names)


def test_render_is_deterministic():
    """Input order does not change the output."""
    entries = _entries()
    assert render_schema(entries) == render_schema(list(reversed(entries)))


def test_render_format():
    """Two-space indent, fixed key order, trailing newline."""
    text = render_schema([SchemaEntry.embed("mod:a", "string")])
    assert text.endswith("]\n")
    assert '\n  {\n    "name": "mod:a",\n    "pattern": "embed",\n    "embedType": "string"\n  }' in text


def test_resorting_output_is_noop():
    """Emitted output is already sorted."""
    data = json.loads(render_schema(_entries()))
    assert sorted(data, key=lambda e: e["name"]) == data


def test_unverified_flag_only_when_set():
    """The unverified key appears only on flagged entries."""
    data = json.loads(render_schema([
        SchemaEntry.embed("mod:a", "compact-varint", unverified=True),
        SchemaEntry.embed("mod:b", "compact-varint"),
    ]))
    assert data[0]["unverified"] is True
    assert "unverified" not in data[1]


def test_emit_writes_both_files(tmp_path):
    """emit writes the schema and the enum catalog."""
    schema = [e.to_dict() for e in _entries()]
    schema_path, enums_path = emit(schema, {"x.Mode": ["a", "b"]}, tmp_path / "out")

    assert schema_path.name == SCHEMA_FILENAME
    assert enums_path.name == ENUMS_FILENAME
    assert json.loads(enums_path.read_text()) == {"x.Mode": ["a", "b"]}
    assert load_schema(schema_path) == schema


def test_write_leaves_no_temp_files(tmp_path):
    """A successful write leaves only the target file."""
    write_json(tmp_path / "a.json", [1, 2])
    assert os.listdir(tmp_path) == ["a.json"]


def test_write_replaces_existing(tmp_path):
    """An existing file is replaced."""
    path = tmp_path / "a.json"
    path.write_text("old")
    write_json(path, {"k": 1})
    assert json.loads(path.read_text()) == {"k": 1}


def test_write_failure_is_fatal_and_clean(tmp_path, monkeypatch):
    """A failed replace keeps the old file and removes the temp file."""
    path = tmp_path / "a.json"
    path.write_text("previous")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(SchemaWriteError):
        write_json(path, [1])

    # old file untouched, temp file removed
    assert path.read_text() == "previous"
    assert os.listdir(tmp_path) == ["a.json"]


def test_write_into_file_path_fails(tmp_path):
    """An unusable output directory raises SchemaWriteError."""
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    with pytest.raises(SchemaWriteError):
        write_json(blocker / "a.json", [])


def test_load_schema_rejects_non_array(tmp_path):
    """A schema file must hold a JSON array."""
    path = tmp_path / "a.json"
    path.write_text("{}")
    with pytest.raises(DescriptorError):
        load_schema(path)


def test_unencodable_name_is_fatal_and_clean(tmp_path):
    """A lone surrogate cannot be written as UTF-8; nothing is left behind."""
    with pytest.raises(SchemaWriteError):
        write_json(tmp_path / SCHEMA_FILENAME, [{"name": "mod:\ud800"}])
    assert os.listdir(tmp_path) == []


def test_emit_enums_failure_publishes_no_schema(tmp_path):
    """If the enum catalog cannot be written, no fresh schema appears."""
    with pytest.raises(SchemaWriteError):
        emit([{"name": "mod:a", "pattern": "custom"}], {"x.\ud800": ["a"]}, tmp_path)
    assert os.listdir(tmp_path) == []


def test_emit_schema_failure_keeps_previous_files(tmp_path):
    """A failed schema write leaves both previous outputs untouched."""
    emit([{"name": "mod:a", "pattern": "custom"}], {"x.Mode": ["a"]}, tmp_path)
    before = {p: (tmp_path / p).read_bytes() for p in (SCHEMA_FILENAME, ENUMS_FILENAME)}

    with pytest.raises(SchemaWriteError):
        emit([{"name": "mod:\ud800", "pattern": "custom"}], {"x.Mode": ["b"]}, tmp_path)
    assert sorted(os.listdir(tmp_path)) == sorted(before)
    assert all((tmp_path / p).read_bytes() == data for p, data in before.items())
