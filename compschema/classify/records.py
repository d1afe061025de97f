"""
Record Introspector - expands a composite (named-field) shape.

Field order is preserved into the output: a tuple row is serialized in
exactly the declared order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from compschema.classify.catalog import EnumCatalog
from compschema.classify.resolver import is_inline_holder, resolve
from compschema.protocol.descriptors import Kind, ValueType
from compschema.schema.entry import TupleField


class RecordShape(Enum):
    EMPTY = auto()      # no fields
    ARRAY = auto()      # one list field
    PROBE_INT = auto()  # one bare int field, framing needs probing
    EMBED = auto()      # one other resolvable field
    TUPLE = auto()      # two or more resolvable fields
    CUSTOM = auto()     # not mechanically derivable


@dataclass
class RecordLayout:
    shape: RecordShape
    field_name: str | None = None   # single-field shapes
    label: str | None = None        # EMBED: resolved label, ARRAY: element label
    fields: tuple[TupleField, ...] = ()
    reason: str = ""                # why CUSTOM, for logs


def pascal_case(name: str) -> str:
    """Capitalize the first letter only: sizes -> Sizes, maxDamage -> MaxDamage."""
    if not name:
        return name
    return name[0].upper() + name[1:]


def inspect_record(shape: ValueType, catalog: EnumCatalog | None = None) -> RecordLayout:
    if shape.kind is not Kind.RECORD:
        raise ValueError(f"not a record shape: {shape.describe()}")

    fields = shape.fields
    if not fields:
        return RecordLayout(RecordShape.EMPTY)

    if len(fields) == 1:
        return _inspect_single(fields[0].name, fields[0].type, catalog)

    rows: list[TupleField] = []
    inline_field: str | None = None
    for f in fields:
        label = resolve(f.type, catalog)
        if label is None:
            return RecordLayout(
                RecordShape.CUSTOM, reason=f"field {f.name} ({f.type.describe()}) is unmappable",
            )
        if inline_field is None and is_inline_holder(f.type):
            inline_field = f.name
        rows.append(TupleField(pascal_case(f.name), label))

    if inline_field is not None:
        return RecordLayout(
            RecordShape.CUSTOM, reason=f"field {inline_field} references an inline holder",
        )
    return RecordLayout(RecordShape.TUPLE, fields=tuple(rows))


def _inspect_single(name: str, field_type: ValueType, catalog: EnumCatalog | None) -> RecordLayout:
    field_name = pascal_case(name)

    if field_type.kind is Kind.LIST:
        element = resolve(field_type.of, catalog)
        if element is None:
            return RecordLayout(
                RecordShape.CUSTOM, field_name=field_name,
                reason=f"list field {name} has an unmappable element type",
            )
        return RecordLayout(RecordShape.ARRAY, field_name=field_name, label=element)

    if field_type.kind is Kind.INT:
        return RecordLayout(RecordShape.PROBE_INT, field_name=field_name)

    label = resolve(field_type, catalog)
    if label is None:
        return RecordLayout(
            RecordShape.CUSTOM, field_name=field_name,
            reason=f"field {name} ({field_type.describe()}) is unmappable",
        )
    return RecordLayout(RecordShape.EMBED, field_name=field_name, label=label)
