"""
Wire Primitives - labels and writers for the binary game protocol.

Labels are the strings emitted in component_schema.json. The writers
serialize Python values with the standard protocol framing:

    VarInt   7 value bits per byte, high bit = continuation
    Int/Long big-endian two's complement (4 / 8 bytes)
    Float    IEEE 754 big-endian (4 / 8 bytes)
    String   VarInt byte length + UTF-8
    Boolean  one byte, 0x00 / 0x01
"""

from __future__ import annotations

import struct


class WireType:
    BOOLEAN = "compact-boolean"
    VARINT = "compact-varint"
    INT32 = "fixed-int32"
    INT64 = "fixed-int64"
    FLOAT32 = "32-bit-float"
    FLOAT64 = "64-bit-float"
    STRING = "string"
    CHAT = "chat-message"
    SLOT = "slot-data"
    NBT = "nbt-compound"
    SOUND_EVENT = "sound-event"
    ID_SET = "id-set"
    EITHER_HOLDER = "either-holder"


_ARRAY_PREFIX = "array["
_OPTION_PREFIX = "option["

STRING_MAX_CHARS = 32767


def array_of(label: str) -> str:
    return f"{_ARRAY_PREFIX}{label}]"


def option_of(label: str) -> str:
    return f"{_OPTION_PREFIX}{label}]"


def write_varint(buf: bytearray, value: int) -> None:
    if not -(1 << 31) <= value < (1 << 31):
        raise ValueError(f"VarInt out of range: {value}")
    value &= 0xFFFFFFFF
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            buf.append(byte | 0x80)
        else:
            buf.append(byte)
            return


def write_string(buf: bytearray, value: str) -> None:
    if len(value) > STRING_MAX_CHARS:
        raise ValueError(f"String too long: {len(value)} chars")
    encoded = value.encode("utf-8")
    write_varint(buf, len(encoded))
    buf.extend(encoded)


def write_primitive(buf: bytearray, label: str, value) -> None:
    """Append one primitive value using the framing its label names."""
    match label:
        case WireType.BOOLEAN:
            buf.append(0x01 if value else 0x00)
        case WireType.VARINT:
            write_varint(buf, int(value))
        case WireType.INT32:
            buf.extend(struct.pack(">i", int(value)))
        case WireType.INT64:
            buf.extend(struct.pack(">q", int(value)))
        case WireType.FLOAT32:
            buf.extend(struct.pack(">f", float(value)))
        case WireType.FLOAT64:
            buf.extend(struct.pack(">d", float(value)))
        case WireType.STRING:
            write_string(buf, str(value))
        case _:
            raise ValueError(f"Not a primitive wire type: {label}")


def encode_primitive(label: str, value) -> bytes:
    buf = bytearray()
    write_primitive(buf, label, value)
    return bytes(buf)
