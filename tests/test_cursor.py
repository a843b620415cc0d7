"""Tests for the little-endian primitive readers."""

from __future__ import annotations

import struct

import pytest

from forza_dash.ingestion._cursor import PRIMITIVE_WIDTHS, ByteCursor, TruncatedInput


def test_primitive_widths_match_wire_kinds() -> None:
    assert PRIMITIVE_WIDTHS == {"i32": 4, "u32": 4, "f32": 4, "u16": 2, "u8": 1, "i8": 1}


def test_reads_are_little_endian_and_advance_cursor() -> None:
    payload = (
        struct.pack("<i", -123456)
        + struct.pack("<I", 0xDEADBEEF)
        + struct.pack("<f", 1.5)
        + struct.pack("<H", 0x1234)
        + bytes([0xFE, 0xFE])
    )
    cursor = ByteCursor(payload)

    assert cursor.read_i32() == -123456
    assert cursor.offset == 4
    assert cursor.read_u32() == 0xDEADBEEF
    assert cursor.read_f32() == 1.5
    assert cursor.read_u16() == 0x1234
    assert cursor.read_u8() == 254
    assert cursor.read_i8() == -2
    assert cursor.remaining == 0


def test_u16_byte_order_is_least_significant_first() -> None:
    cursor = ByteCursor(b"\x01\x02")

    assert cursor.read_u16() == 0x0201


def test_signedness_differs_between_u32_and_i32() -> None:
    payload = b"\xff\xff\xff\xff"

    assert ByteCursor(payload).read_u32() == 0xFFFFFFFF
    assert ByteCursor(payload).read_i32() == -1


def test_truncated_read_raises_without_advancing() -> None:
    cursor = ByteCursor(b"\x01\x02\x03\x04\x05")
    cursor.read_u16()

    with pytest.raises(TruncatedInput) as excinfo:
        cursor.read_f32()

    error = excinfo.value
    assert isinstance(error, ValueError)
    assert (error.offset, error.required, error.available) == (2, 4, 3)
    assert cursor.offset == 2
    assert cursor.read_u16() == 0x0403


def test_empty_buffer_fails_for_single_byte_reads() -> None:
    with pytest.raises(TruncatedInput):
        ByteCursor(b"").read_u8()


def test_reading_same_position_twice_is_idempotent() -> None:
    payload = struct.pack("<f", -3.25)

    assert ByteCursor(payload).read_f32() == ByteCursor(payload).read_f32() == -3.25


def test_read_dispatches_on_layout_kind() -> None:
    cursor = ByteCursor(struct.pack("<bH", -5, 700))

    assert cursor.read("i8") == -5
    assert cursor.read("u16") == 700
    with pytest.raises(KeyError):
        cursor.read("f64")


def test_cursor_accepts_memoryview_and_start_offset() -> None:
    payload = bytearray(b"\x00\x00" + struct.pack("<I", 42))
    cursor = ByteCursor(memoryview(payload), offset=2)

    assert cursor.read_u32() == 42


def test_cursor_rejects_offset_outside_buffer() -> None:
    with pytest.raises(ValueError):
        ByteCursor(b"\x00", offset=2)
