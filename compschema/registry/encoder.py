"""
Reference Encoder - serializes component values the way the game does.

Stands in for the runtime's stream codec: one encoder is bound to one
registry entry and writes values of that entry's declared shape. How
undeclared integers are framed is a property of the codec, not of the
type, which is exactly what the probe has to measure.
"""

from __future__ import annotations

import struct
from typing import Any

from compschema.errors import NotEncodableError
from compschema.protocol.descriptors import Framing, Kind, ValueType
from compschema.protocol.wire import WireType, write_primitive, write_string, write_varint

CODEC_VARINT = "varint"
CODEC_INT32 = "int32"
CODECS = (CODEC_VARINT, CODEC_INT32)

_PRIMITIVES: dict[Kind, str] = {
    Kind.BOOLEAN: WireType.BOOLEAN,
    Kind.FLOAT: WireType.FLOAT32,
    Kind.DOUBLE: WireType.FLOAT64,
    Kind.LONG: WireType.INT64,
    Kind.STRING: WireType.STRING,
    Kind.IDENTIFIER: WireType.STRING,
    Kind.TAG: WireType.STRING,
    Kind.RESOURCE_KEY: WireType.STRING,
}


class ReferenceEncoder:
    """Callable encoder: value -> bytes. Raises NotEncodableError."""

    def __init__(self, value_type: ValueType, int_codec: str = CODEC_VARINT):
        if int_codec not in CODECS:
            raise ValueError(f"unknown integer codec: {int_codec}")
        self.value_type = value_type
        self.int_codec = int_codec

    def __call__(self, value: Any) -> bytes:
        buf = bytearray()
        try:
            self._write(buf, self.value_type, value)
        except (ValueError, TypeError, KeyError, struct.error) as e:
            raise NotEncodableError(
                f"cannot encode {value!r} as {self.value_type.describe()}: {e}"
            ) from e
        return bytes(buf)

    def _int_label(self, vt: ValueType) -> str:
        if vt.framing == Framing.FIXED:
            return WireType.INT32
        if vt.framing == Framing.VARINT:
            return WireType.VARINT
        return WireType.INT32 if self.int_codec == CODEC_INT32 else WireType.VARINT

    def _write(self, buf: bytearray, vt: ValueType, value: Any) -> None:
        label = _PRIMITIVES.get(vt.kind)
        if label is not None:
            write_primitive(buf, label, value)
            return

        match vt.kind:
            case Kind.UNIT:
                pass
            case Kind.INT:
                write_primitive(buf, self._int_label(vt), value)
            case Kind.HOLDER:
                write_varint(buf, int(value))
            case Kind.HOLDER_SET:
                # 0 = named tag follows, otherwise count + 1 ids
                if isinstance(value, str):
                    write_varint(buf, 0)
                    write_string(buf, value)
                else:
                    ids = list(value)
                    write_varint(buf, len(ids) + 1)
                    for holder_id in ids:
                        write_varint(buf, int(holder_id))
            case Kind.EITHER_HOLDER:
                # true + id, or false + registry key
                if isinstance(value, str):
                    buf.append(0x00)
                    write_string(buf, value)
                else:
                    buf.append(0x01)
                    write_varint(buf, int(value))
            case Kind.ENUM:
                ordinal = value if isinstance(value, int) else vt.values.index(value)
                if not 0 <= ordinal < len(vt.values):
                    raise ValueError(f"ordinal {ordinal} out of range for {vt.name}")
                write_varint(buf, ordinal)
            case Kind.LIST:
                items = list(value)
                write_varint(buf, len(items))
                for item in items:
                    self._write(buf, vt.of, item)
            case Kind.OPTIONAL:
                if value is None:
                    buf.append(0x00)
                else:
                    buf.append(0x01)
                    self._write(buf, vt.of, value)
            case Kind.RECORD:
                for f in vt.fields:
                    self._write(buf, f.type, value[f.name])
            case _:
                raise NotEncodableError(f"no reference codec for {vt.describe()}")


def not_networked(name: str):
    """Encoder for entries with no network representation."""
    def encode(value: Any) -> bytes:
        raise NotEncodableError(f"{name} is not networked")
    return encode
