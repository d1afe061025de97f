"""
Value-Type Descriptors - closed shape algebra for component values.

Every data component declares the shape of its value as one ValueType.
Parameterized shapes (list, optional, holder, ...) nest through `of`;
records carry their fields in declared order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Kind(Enum):
    UNIT = "unit"
    BOOLEAN = "bool"
    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"
    LONG = "long"
    STRING = "string"
    CHAT = "chat"                    # opaque rich text
    IDENTIFIER = "identifier"        # namespaced registry id
    TAG = "tag"                      # tag key
    RESOURCE_KEY = "resource_key"
    HOLDER = "holder"                # registry reference
    HOLDER_SET = "holder_set"
    EITHER_HOLDER = "either_holder"
    ENUM = "enum"
    LIST = "list"
    OPTIONAL = "optional"
    RECORD = "record"
    ITEM_STACK = "item_stack"
    NBT = "nbt"
    UNRESOLVABLE = "unresolvable"


# Kinds that take an inner shape through `of`.
PARAMETERIZED = frozenset({
    Kind.HOLDER, Kind.HOLDER_SET, Kind.EITHER_HOLDER, Kind.LIST, Kind.OPTIONAL,
})


class Framing:
    """Declared integer framing hint. None = not declared (ambiguous)."""
    FIXED = "fixed"
    VARINT = "varint"


@dataclass(frozen=True)
class FieldDef:
    """A named field within a record shape."""
    name: str
    type: ValueType


@dataclass(frozen=True)
class ValueType:
    kind: Kind
    of: ValueType | None = None
    name: str = ""          # simple name (records, enums)
    qualname: str = ""      # fully-qualified identity (records, enums)
    fields: tuple[FieldDef, ...] = field(default_factory=tuple)
    values: tuple[str, ...] = field(default_factory=tuple)  # enum constants, ordinal order
    framing: str | None = None  # INT only
    inline: bool = False    # referent carries a self-describing direct codec
    sound: bool = False     # sound-like referent: holders carry inline override data

    @property
    def identity(self) -> str:
        """Key unique enough to tell two same-named types apart."""
        return self.qualname or self.name

    def describe(self) -> str:
        """Compact human-readable rendering, for logs."""
        match self.kind:
            case Kind.RECORD:
                return f"record {self.name or '?'}"
            case Kind.ENUM:
                return f"enum {self.name or '?'}"
            case Kind.INT if self.framing:
                return f"int({self.framing})"
            case _ if self.of is not None:
                return f"{self.kind.value}<{self.of.describe()}>"
            case _:
                return self.kind.value


# ---- Constructors ----

UNIT = ValueType(Kind.UNIT)
BOOLEAN = ValueType(Kind.BOOLEAN)
FLOAT = ValueType(Kind.FLOAT)
DOUBLE = ValueType(Kind.DOUBLE)
LONG = ValueType(Kind.LONG)
STRING = ValueType(Kind.STRING)
CHAT = ValueType(Kind.CHAT)
IDENTIFIER = ValueType(Kind.IDENTIFIER)
RESOURCE_KEY = ValueType(Kind.RESOURCE_KEY)
ITEM_STACK = ValueType(Kind.ITEM_STACK)
NBT = ValueType(Kind.NBT)
UNRESOLVABLE = ValueType(Kind.UNRESOLVABLE)


def integer(framing: str | None = None) -> ValueType:
    return ValueType(Kind.INT, framing=framing)


def tag(of: ValueType | None = None) -> ValueType:
    return ValueType(Kind.TAG, of=of)


def list_of(of: ValueType) -> ValueType:
    return ValueType(Kind.LIST, of=of)


def optional(of: ValueType) -> ValueType:
    return ValueType(Kind.OPTIONAL, of=of)


def holder(of: ValueType) -> ValueType:
    return ValueType(Kind.HOLDER, of=of)


def holder_set(of: ValueType) -> ValueType:
    return ValueType(Kind.HOLDER_SET, of=of)


def either_holder(of: ValueType) -> ValueType:
    return ValueType(Kind.EITHER_HOLDER, of=of)


def enum_of(name: str, values: list[str] | tuple[str, ...], qualname: str = "") -> ValueType:
    return ValueType(Kind.ENUM, name=name, qualname=qualname, values=tuple(values))


def record(
    name: str,
    fields: list[tuple[str, ValueType]] | None = None,
    qualname: str = "",
    inline: bool = False,
    sound: bool = False,
) -> ValueType:
    return ValueType(
        Kind.RECORD,
        name=name,
        qualname=qualname,
        fields=tuple(FieldDef(n, t) for n, t in (fields or [])),
        inline=inline,
        sound=sound,
    )
