"""
Schema entries - one classification result per registry entry.

The pattern tag fully determines which payload keys an entry carries:

    empty, eitherholder, custom   (no payload)
    embed                         embedType
    array                         fieldName, elementType
    tuple                         fields: [{name, type}, ...]
"""

from __future__ import annotations

from dataclasses import dataclass


class Pattern:
    EMPTY = "empty"
    EMBED = "embed"
    EITHER_HOLDER = "eitherholder"
    ARRAY = "array"
    TUPLE = "tuple"
    CUSTOM = "custom"

    ALL = (EMPTY, EMBED, EITHER_HOLDER, ARRAY, TUPLE, CUSTOM)


@dataclass(frozen=True)
class TupleField:
    name: str
    type: str

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type}


@dataclass(frozen=True)
class SchemaEntry:
    name: str
    pattern: str
    embed_type: str | None = None
    field_name: str | None = None
    element_type: str | None = None
    fields: tuple[TupleField, ...] = ()
    unverified: bool = False  # embedType came from the probe fallback, not a measurement

    @classmethod
    def empty(cls, name: str) -> SchemaEntry:
        return cls(name, Pattern.EMPTY)

    @classmethod
    def embed(cls, name: str, embed_type: str, unverified: bool = False) -> SchemaEntry:
        return cls(name, Pattern.EMBED, embed_type=embed_type, unverified=unverified)

    @classmethod
    def either_holder(cls, name: str) -> SchemaEntry:
        return cls(name, Pattern.EITHER_HOLDER)

    @classmethod
    def array(cls, name: str, field_name: str, element_type: str) -> SchemaEntry:
        return cls(name, Pattern.ARRAY, field_name=field_name, element_type=element_type)

    @classmethod
    def tuple_of(cls, name: str, fields: list[TupleField]) -> SchemaEntry:
        return cls(name, Pattern.TUPLE, fields=tuple(fields))

    @classmethod
    def custom(cls, name: str) -> SchemaEntry:
        return cls(name, Pattern.CUSTOM)

    def to_dict(self) -> dict:
        result: dict = {"name": self.name, "pattern": self.pattern}
        match self.pattern:
            case Pattern.EMBED:
                result["embedType"] = self.embed_type
                if self.unverified:
                    result["unverified"] = True
            case Pattern.ARRAY:
                result["fieldName"] = self.field_name
                result["elementType"] = self.element_type
            case Pattern.TUPLE:
                result["fields"] = [f.to_dict() for f in self.fields]
        return result
