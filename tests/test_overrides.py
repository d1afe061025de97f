"""Tests for merging hand-crafted overrides into the extracted schema."""

import json

from compschema.schema.overrides import load_overrides, merge_overrides

EXTRACTED = [
    {"name": "minecraft:a", "pattern": "embed", "embedType": "compact-varint"},
    {"name": "minecraft:b", "pattern": "custom"},
]


def test_override_replaces_by_name():
    """An override replaces the entry with the same name."""
    merged = merge_overrides(EXTRACTED, [
        {"name": "minecraft:b", "pattern": "tuple", "fields": [{"name": "X", "type": "string"}]},
    ])
    assert merged.schema[1]["pattern"] == "tuple"
    assert merged.overridden == ["minecraft:b"]
    assert merged.added == []


def test_new_names_appended_and_sorted():
    """New override names are added in sorted position."""
    merged = merge_overrides(EXTRACTED, [{"name": "minecraft:0first", "pattern": "empty"}])
    assert [e["name"] for e in merged.schema] == ["minecraft:0first", "minecraft:a", "minecraft:b"]
    assert merged.added == ["minecraft:0first"]


def test_comment_entries_skipped():
    """Nameless comment entries are ignored."""
    merged = merge_overrides(EXTRACTED, [{"_comment": "hand-written codecs below"}, {"name": ""}])
    assert merged.schema == EXTRACTED
    assert merged.summary() == "Overrides: 0 replaced, 0 added"


def test_no_overrides_is_identity():
    """No overrides leaves the schema unchanged."""
    assert merge_overrides(EXTRACTED, None).schema == EXTRACTED
    assert merge_overrides(EXTRACTED, []).schema == EXTRACTED


def test_inputs_not_modified():
    """Merging does not mutate its inputs."""
    extracted = [dict(e) for e in EXTRACTED]
    merge_overrides(extracted, [{"name": "minecraft:a", "pattern": "custom"}])
    assert extracted == EXTRACTED


def test_missing_overrides_file(tmp_path):
    """A missing overrides file gives no overrides."""
    assert load_overrides(tmp_path / "nope.json") is None
    assert load_overrides(None) is None


def test_load_overrides_file(tmp_path):
    """An overrides file loads as a list of entries."""
    path = tmp_path / "overrides.json"
    path.write_text(json.dumps([{"name": "minecraft:a", "pattern": "custom"}]))
    assert load_overrides(path) == [{"name": "minecraft:a", "pattern": "custom"}]
