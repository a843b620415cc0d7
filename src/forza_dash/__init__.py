"""Top-level package for forza_dash.

This package decodes the fixed-layout "dash" telemetry datagram broadcast by
racing simulators into immutable :class:`DashDatagram` records, and offers
batch decoding of raw captures plus JSON/tabular export helpers.
"""

from ._version import __version__
from .ingestion import (
    DASH_LAYOUT,
    DATAGRAM_SIZE,
    FIELD_NAMES,
    ByteCursor,
    DashDatagram,
    DecodeResult,
    TruncatedInput,
    WheelQuad,
    decode,
    decode_array,
    iter_capture,
    read_capture,
)

__all__ = [
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
    "__version__",
]
