"""
Type-Shape Resolver - descriptor -> wire primitive label.

resolve() is total: it returns a label or UNMAPPABLE (None) and never
raises. Its only side effect is recording enumerations it meets into
the Enum Catalog.
"""

from __future__ import annotations

from compschema.classify.catalog import EnumCatalog
from compschema.protocol.descriptors import Framing, Kind, ValueType
from compschema.protocol.wire import WireType, array_of, option_of

UNMAPPABLE = None

_FIXED_LABELS: dict[Kind, str] = {
    Kind.BOOLEAN: WireType.BOOLEAN,
    Kind.FLOAT: WireType.FLOAT32,
    Kind.DOUBLE: WireType.FLOAT64,
    Kind.LONG: WireType.INT64,
    Kind.STRING: WireType.STRING,
    # ids and tag keys travel as their string form
    Kind.IDENTIFIER: WireType.STRING,
    Kind.TAG: WireType.STRING,
    Kind.RESOURCE_KEY: WireType.STRING,
    Kind.CHAT: WireType.CHAT,
    Kind.ITEM_STACK: WireType.SLOT,
    Kind.NBT: WireType.NBT,
    Kind.HOLDER_SET: WireType.ID_SET,
    Kind.EITHER_HOLDER: WireType.EITHER_HOLDER,
}


def is_sound_like(referent: ValueType | None) -> bool:
    return referent is not None and referent.sound


def is_inline_holder(vt: ValueType) -> bool:
    """A registry reference whose referent carries inline data beyond a bare id."""
    return (
        vt.kind is Kind.HOLDER
        and vt.of is not None
        and vt.of.inline
        and not is_sound_like(vt.of)
    )


def resolve(vt: ValueType | None, catalog: EnumCatalog | None = None) -> str | None:
    """Resolve a descriptor to its wire label, or UNMAPPABLE."""
    if vt is None:
        return UNMAPPABLE

    label = _FIXED_LABELS.get(vt.kind)
    if label is not None:
        return label

    match vt.kind:
        case Kind.INT:
            if vt.framing == Framing.FIXED:
                return WireType.INT32
            return WireType.VARINT
        case Kind.LIST:
            inner = resolve(vt.of, catalog)
            return array_of(inner) if inner is not None else UNMAPPABLE
        case Kind.OPTIONAL:
            inner = resolve(vt.of, catalog)
            return option_of(inner) if inner is not None else UNMAPPABLE
        case Kind.HOLDER:
            if is_sound_like(vt.of):
                return WireType.SOUND_EVENT
            return WireType.VARINT
        case Kind.ENUM:
            if catalog is not None:
                catalog.record(vt)
            return WireType.VARINT
        case Kind.RECORD:
            # expanded by the record introspector, referenced here by name
            return vt.name or UNMAPPABLE
        case _:
            return UNMAPPABLE
