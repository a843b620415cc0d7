"""Little-endian primitive readers over a byte buffer.

:class:`ByteCursor` is the only place where the width and signedness of a
wire primitive are decided.  Every read checks the unread length before
touching the buffer, so a short payload raises :class:`TruncatedInput`
instead of producing a partially filled value.
"""

from __future__ import annotations

import struct
from typing import Callable, Mapping, Union

__all__ = ["PRIMITIVE_WIDTHS", "ByteCursor", "TruncatedInput"]


Buffer = Union[bytes, bytearray, memoryview]

_I32_STRUCT = struct.Struct("<i")
_U32_STRUCT = struct.Struct("<I")
_F32_STRUCT = struct.Struct("<f")
_U16_STRUCT = struct.Struct("<H")
_U8_STRUCT = struct.Struct("<B")
_I8_STRUCT = struct.Struct("<b")

_PRIMITIVES: Mapping[str, struct.Struct] = {
    "i32": _I32_STRUCT,
    "u32": _U32_STRUCT,
    "f32": _F32_STRUCT,
    "u16": _U16_STRUCT,
    "u8": _U8_STRUCT,
    "i8": _I8_STRUCT,
}

PRIMITIVE_WIDTHS: Mapping[str, int] = {
    kind: packer.size for kind, packer in _PRIMITIVES.items()
}


class TruncatedInput(ValueError):
    """Raised when fewer unread bytes remain than the next read requires."""

    def __init__(self, *, offset: int, required: int, available: int) -> None:
        super().__init__(
            f"Truncated input at offset {offset}: "
            f"{required} bytes required, {available} available"
        )
        self.offset = offset
        self.required = required
        self.available = available


class ByteCursor:
    """Sequential reader tracking how many bytes of ``buffer`` were consumed."""

    __slots__ = ("_view", "_offset")

    def __init__(self, buffer: Buffer, offset: int = 0) -> None:
        self._view = memoryview(buffer).cast("B")
        if offset < 0 or offset > len(self._view):
            raise ValueError(f"Cursor offset {offset} outside buffer of {len(self._view)} bytes")
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._view) - self._offset

    def _unpack(self, packer: struct.Struct) -> int | float:
        width = packer.size
        available = self.remaining
        if available < width:
            raise TruncatedInput(offset=self._offset, required=width, available=available)
        (value,) = packer.unpack_from(self._view, self._offset)
        self._offset += width
        return value

    def read_i32(self) -> int:
        return int(self._unpack(_I32_STRUCT))

    def read_u32(self) -> int:
        return int(self._unpack(_U32_STRUCT))

    def read_f32(self) -> float:
        return float(self._unpack(_F32_STRUCT))

    def read_u16(self) -> int:
        return int(self._unpack(_U16_STRUCT))

    def read_u8(self) -> int:
        return int(self._unpack(_U8_STRUCT))

    def read_i8(self) -> int:
        return int(self._unpack(_I8_STRUCT))

    def read(self, kind: str) -> int | float:
        """Dispatch to the ``read_<kind>`` method named by a layout entry."""

        if kind not in _PRIMITIVES:
            raise KeyError(f"Unknown primitive kind {kind!r}")
        reader: Callable[[], int | float] = getattr(self, f"read_{kind}")
        return reader()
