"""Decoding of dash telemetry datagrams and raw captures."""

from __future__ import annotations

from forza_dash.ingestion._cursor import ByteCursor, TruncatedInput
from forza_dash.ingestion.capture import (
    DASH_DTYPE,
    decode_array,
    iter_capture,
    read_capture,
)
from forza_dash.ingestion.dash import (
    DASH_LAYOUT,
    DATAGRAM_SIZE,
    FIELD_NAMES,
    DashDatagram,
    DecodeResult,
    WheelQuad,
    decode,
)

__all__ = [
    "DASH_DTYPE",
    "DASH_LAYOUT",
    "DATAGRAM_SIZE",
    "FIELD_NAMES",
    "ByteCursor",
    "DashDatagram",
    "DecodeResult",
    "TruncatedInput",
    "WheelQuad",
    "decode",
    "decode_array",
    "iter_capture",
    "read_capture",
]
