"""Argument parsing helpers for the forza_dash CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Optional

from .io import EXPORT_FORMATS
from .workflows import SPEED_UNITS, _handle_convert, _handle_decode, default_stride, default_units


def _positive_int(value: str) -> int:
    try:
        numeric = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if numeric <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {numeric}")
    return numeric


def build_parser(config: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    config = dict(config or {})
    logging_cfg_raw = config.get("logging", {})
    logging_cfg = dict(logging_cfg_raw) if isinstance(logging_cfg_raw, Mapping) else {}

    parser = argparse.ArgumentParser(
        prog="forza-dash",
        description="Decode racing-simulation dash telemetry datagrams.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml holding a [tool.forza_dash] section.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=logging_cfg.get("level", "info"),
        help="Logging level (e.g. debug, info, warning).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=logging_cfg.get("output", "stderr"),
        help="Logging destination (stdout, stderr or a file path).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=("json", "text"),
        default=logging_cfg.get("format", "json"),
        help="Logging formatter (json or text).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a single raw datagram and print it as JSON.",
    )
    decode_parser.add_argument("packet", type=Path, help="File holding one raw datagram.")
    decode_parser.add_argument(
        "--units",
        choices=SPEED_UNITS,
        default=default_units(config),
        help="Speed unit used by --summary (default: configured output.units).",
    )
    decode_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a one-line summary instead of the full JSON record.",
    )
    decode_parser.set_defaults(handler=_handle_decode)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Decode a raw capture of back-to-back datagrams and export it.",
    )
    convert_parser.add_argument("capture", type=Path, help="Raw capture file.")
    convert_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        required=True,
        help="Destination file.",
    )
    convert_parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default=None,
        help="Export format (default: inferred from the output suffix).",
    )
    convert_parser.add_argument(
        "--stride",
        type=_positive_int,
        default=default_stride(config),
        help="Bytes per datagram slot in the capture (default: capture.stride or 331).",
    )
    convert_parser.set_defaults(handler=_handle_convert)

    return parser


__all__ = ["build_parser"]
