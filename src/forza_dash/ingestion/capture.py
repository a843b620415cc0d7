"""Batch decoding of raw dash captures.

A capture is a plain concatenation of datagrams written with a fixed
``stride``.  Some games emit longer variants of the dash packet, so the
stride may exceed :data:`~forza_dash.ingestion.dash.DATAGRAM_SIZE`; the
extra bytes of every slot are ignored exactly as :func:`decode` ignores
trailing bytes of a single payload.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

from forza_dash.ingestion.dash import DASH_LAYOUT, DATAGRAM_SIZE, DecodeResult, decode

__all__ = [
    "DASH_DTYPE",
    "decode_array",
    "iter_capture",
    "read_capture",
    "resolve_stride",
]


logger = logging.getLogger(__name__)


_NUMPY_KINDS = {
    "i32": "<i4",
    "u32": "<u4",
    "f32": "<f4",
    "u16": "<u2",
    "u8": "u1",
    "i8": "i1",
}

DASH_DTYPE = np.dtype([(name, _NUMPY_KINDS[kind]) for name, kind in DASH_LAYOUT])

Buffer = Union[bytes, bytearray, memoryview]


def resolve_stride(stride: Optional[int]) -> int:
    """Return the effective slot width, rejecting slots too small for a datagram."""

    if stride is None:
        return DATAGRAM_SIZE
    try:
        numeric = int(stride)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid capture stride {stride!r}") from exc
    if numeric < DATAGRAM_SIZE:
        raise ValueError(
            f"Capture stride {numeric} is smaller than the dash datagram ({DATAGRAM_SIZE} bytes)"
        )
    return numeric


def iter_capture(data: Buffer, stride: Optional[int] = None) -> Iterator[DecodeResult]:
    """Yield one :class:`DecodeResult` per ``stride`` sized slot of ``data``.

    Only the last slot can be shorter than ``stride``; when it is also
    shorter than a datagram the yielded result carries the truncation error.
    """

    width = resolve_stride(stride)
    view = memoryview(data).cast("B")
    for start in range(0, len(view), width):
        yield decode(view[start : start + width])


def read_capture(path: Union[str, Path], stride: Optional[int] = None) -> list[DecodeResult]:
    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Capture {source} does not exist")
    return list(iter_capture(source.read_bytes(), stride))


def decode_array(data: Buffer, stride: Optional[int] = None) -> np.ndarray:
    """Decode every complete slot of ``data`` into a :data:`DASH_DTYPE` array.

    The returned array owns its memory.  A final slot too short to hold a
    datagram is dropped and reported through the module logger.
    """

    width = resolve_stride(stride)
    view = memoryview(data).cast("B")
    count, tail = divmod(len(view), width)
    if tail >= DATAGRAM_SIZE:
        count += 1
    elif tail:
        logger.warning(
            "Dropping truncated datagram at the end of the capture.",
            extra={
                "event": "capture.truncated_tail",
                "tail_bytes": tail,
                "expected_size": DATAGRAM_SIZE,
                "stride": width,
                "records": count,
            },
        )
    if count == 0:
        return np.empty(0, dtype=DASH_DTYPE)
    strided = np.ndarray(
        shape=(count,),
        dtype=DASH_DTYPE,
        buffer=view,
        strides=(width,),
    )
    return strided.copy()
