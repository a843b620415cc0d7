"""Convenience re-exports for test helpers."""

from __future__ import annotations

from tests.helpers.cli import run_cli_in_tmp
from tests.helpers.packets import (
    DASH_STRUCT,
    build_capture,
    build_dash_values,
    pack_dash_payload,
    repack_datagram,
)

__all__ = [
    "DASH_STRUCT",
    "build_capture",
    "build_dash_values",
    "pack_dash_payload",
    "repack_datagram",
    "run_cli_in_tmp",
]
