"""
Registry Loader - builds a Registry from a component definition dump.

Definition file layout:

    {
      "version": "1.21.11",
      "components": [
        {"name": "minecraft:max_stack_size", "type": {"kind": "int"}, "codec": "varint"},
        {"name": "minecraft:tool", "type": {"kind": "record", "name": "Tool", "fields": [...]}},
        {"name": "minecraft:creative_slot_lock", "type": {"kind": "unit"}, "networked": false},
        ...
      ]
    }

A component whose type cannot be parsed is kept with value_type=None so
the classifier can still emit it (as custom). A file that is not a
definition dump at all raises DescriptorError.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from compschema.classify.probe import SampleFn
from compschema.errors import DescriptorError
from compschema.protocol.descriptors import (
    PARAMETERIZED, FieldDef, Framing, Kind, ValueType,
)
from compschema.registry.encoder import CODEC_VARINT, CODECS, ReferenceEncoder, not_networked
from compschema.registry.entry import Registry, RegistryEntry

log = logging.getLogger(__name__)

_FRAMINGS = (None, Framing.FIXED, Framing.VARINT)


def parse_descriptor(data: dict, path: str = "type") -> ValueType:
    """Parse one nested descriptor object. Raises DescriptorError."""
    if not isinstance(data, dict):
        raise DescriptorError(f"{path}: expected an object, got {type(data).__name__}")
    raw_kind = data.get("kind")
    try:
        kind = Kind(raw_kind)
    except ValueError:
        raise DescriptorError(f"{path}: unknown kind {raw_kind!r}") from None

    of = None
    if "of" in data:
        of = parse_descriptor(data["of"], f"{path}.of")
    elif kind in PARAMETERIZED:
        raise DescriptorError(f"{path}: {kind.value} needs an inner type ('of')")

    framing = data.get("framing")
    if kind is Kind.INT and framing not in _FRAMINGS:
        raise DescriptorError(f"{path}: unknown integer framing {framing!r}")

    fields: list[FieldDef] = []
    if kind is Kind.RECORD:
        raw_fields = data.get("fields", [])
        if not isinstance(raw_fields, list):
            raise DescriptorError(f"{path}: fields must be a list")
        for i, f in enumerate(raw_fields):
            if not isinstance(f, dict) or "name" not in f or "type" not in f:
                raise DescriptorError(f"{path}.fields[{i}]: needs 'name' and 'type'")
            if not isinstance(f["name"], str) or not f["name"]:
                raise DescriptorError(f"{path}.fields[{i}]: name must be a non-empty string")
            fields.append(FieldDef(f["name"], parse_descriptor(f["type"], f"{path}.{f['name']}")))

    values = data.get("values", [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise DescriptorError(f"{path}: values must be a list of strings")
    if kind is Kind.ENUM and not values:
        raise DescriptorError(f"{path}: enum without values")

    return ValueType(
        kind=kind,
        of=of,
        name=data.get("name", ""),
        qualname=data.get("qualname", ""),
        fields=tuple(fields),
        values=tuple(values),
        framing=framing if kind is Kind.INT else None,
        inline=bool(data.get("inline", False)),
        sound=bool(data.get("sound", False)),
    )


def sample_constructor(vt: ValueType) -> SampleFn | None:
    """Integer-carrying sample builder for the shapes the probe handles."""
    if vt.kind is Kind.INT:
        return lambda n: n
    if vt.kind is Kind.RECORD and len(vt.fields) == 1 and vt.fields[0].type.kind is Kind.INT:
        field_name = vt.fields[0].name
        return lambda n: {field_name: n}
    return None


def build_entry(component: dict) -> RegistryEntry:
    """Build one registry entry. Type problems are recorded, not raised."""
    name = component["name"]
    try:
        vt = parse_descriptor(component.get("type"), f"{name}.type")
    except DescriptorError as e:
        log.warning("Skipping type of %s: %s", name, e)
        return RegistryEntry(name=name, value_type=None, error=str(e))

    if not component.get("networked", True):
        return RegistryEntry(name, vt, encode=not_networked(name), sample=sample_constructor(vt))

    codec = component.get("codec", CODEC_VARINT)
    if codec not in CODECS:
        log.warning("Unknown codec %r for %s, entry will not be probed", codec, name)
        return RegistryEntry(name, vt, encode=None, sample=sample_constructor(vt))

    return RegistryEntry(
        name, vt,
        encode=ReferenceEncoder(vt, int_codec=codec),
        sample=sample_constructor(vt),
    )


def load_registry(path: str | Path) -> Registry:
    """Load a definition dump. Raises DescriptorError if the file is unusable."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DescriptorError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DescriptorError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("components"), list):
        raise DescriptorError(f"{path}: expected an object with a 'components' list")

    entries = []
    for i, component in enumerate(data["components"]):
        if not isinstance(component, dict) or not isinstance(component.get("name"), str) \
                or not component["name"]:
            raise DescriptorError(f"{path}: components[{i}] has no name")
        entries.append(build_entry(component))

    registry = Registry(entries, version=data.get("version", ""))
    log.info("Loaded %d components from %s", len(registry), path)
    return registry
