"""Tests for wire labels and primitive writers."""

import pytest

from compschema.protocol.wire import (
    WireType, array_of, option_of, write_varint, write_string, encode_primitive,
)


def test_varint_single_byte():
    """Values below 128 take one byte."""
    buf = bytearray()
    write_varint(buf, 0)
    assert buf == b"\x00"
    buf = bytearray()
    write_varint(buf, 127)
    assert buf == b"\x7f"


def test_varint_continuation():
    """Larger values set the continuation bit."""
    buf = bytearray()
    write_varint(buf, 128)
    assert buf == b"\x80\x01"
    buf = bytearray()
    write_varint(buf, 300)
    assert buf == b"\xac\x02"


def test_varint_negative_uses_five_bytes():
    """Negative ints are written as 32-bit two's complement."""
    buf = bytearray()
    write_varint(buf, -1)
    assert buf == b"\xff\xff\xff\xff\x0f"


def test_varint_out_of_range():
    """Values beyond 32 bits are rejected."""
    with pytest.raises(ValueError):
        write_varint(bytearray(), 1 << 31)


def test_write_string_length_prefixed():
    """Strings carry a VarInt byte-length prefix."""
    buf = bytearray()
    write_string(buf, "minecraft:stone")
    assert buf[0] == 15
    assert buf[1:] == b"minecraft:stone"


def test_write_string_counts_utf8_bytes():
    """The prefix counts UTF-8 bytes, not characters."""
    buf = bytearray()
    write_string(buf, "é")
    assert buf == b"\x02\xc3\xa9"


def test_write_string_too_long():
    """Strings over the protocol limit are rejected."""
    with pytest.raises(ValueError):
        write_string(bytearray(), "x" * 32768)


def test_fixed_width_primitives():
    """Fixed-width primitives are big-endian."""
    assert encode_primitive(WireType.INT32, 128) == b"\x00\x00\x00\x80"
    assert encode_primitive(WireType.INT64, 1) == b"\x00" * 7 + b"\x01"
    assert len(encode_primitive(WireType.FLOAT32, 1.5)) == 4
    assert len(encode_primitive(WireType.FLOAT64, 1.5)) == 8
    assert encode_primitive(WireType.BOOLEAN, True) == b"\x01"
    assert encode_primitive(WireType.BOOLEAN, False) == b"\x00"


def test_non_primitive_label_rejected():
    """Only primitive labels can be encoded directly."""
    with pytest.raises(ValueError):
        encode_primitive(WireType.SLOT, None)


def test_parameterized_labels():
    """array_of and option_of wrap inner labels."""
    assert array_of(WireType.FLOAT32) == "array[32-bit-float]"
    assert option_of(array_of(WireType.STRING)) == "option[array[string]]"
