"""Command handlers for the forza_dash CLI."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from forza_dash.cli.errors import CliError
from forza_dash.cli.io import EXPORT_FORMATS, persist_array, read_payload
from forza_dash.ingestion.capture import decode_array, resolve_stride
from forza_dash.ingestion.dash import DashDatagram, decode

logger = logging.getLogger(__name__)

SPEED_UNITS = ("kmh", "mph")

_SUFFIX_FORMATS = {
    ".jsonl": "jsonl",
    ".gz": "jsonl",
    ".gzip": "jsonl",
    ".csv": "csv",
    ".parquet": "parquet",
}


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = config.get(name, {})
    return value if isinstance(value, Mapping) else {}


def default_units(config: Mapping[str, Any]) -> str:
    units = str(_section(config, "output").get("units", "kmh")).lower()
    return units if units in SPEED_UNITS else "kmh"


def default_stride(config: Mapping[str, Any]) -> Optional[int]:
    stride = _section(config, "capture").get("stride")
    if stride is None:
        return None
    try:
        return int(stride)
    except (TypeError, ValueError):
        return None


def format_summary(datagram: DashDatagram, units: str) -> str:
    if units == "mph":
        speed = f"{datagram.get_speed_by_mph():.1f} mph"
    else:
        speed = f"{datagram.get_speed_by_kmh():.1f} km/h"
    return (
        f"race_on={datagram.is_race_on} lap={datagram.lap_number} "
        f"position={datagram.race_position} gear={datagram.gear} "
        f"rpm={datagram.current_engine_rpm:.0f} speed={speed} "
        f"car={datagram.car_ordinal} track={datagram.track_ordinal}"
    )


def _handle_decode(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    path = Path(namespace.packet)
    result = decode(read_payload(path))
    error = result.error
    if error is not None:
        raise CliError(
            f"Packet {path} is truncated: {error}",
            category="usage",
            context={
                "path": str(path),
                "offset": error.offset,
                "required": error.required,
                "available": error.available,
            },
        )
    datagram = result.unwrap()
    if namespace.summary:
        return format_summary(datagram, namespace.units or default_units(config))
    return json.dumps(datagram.to_dict(), indent=2)


def _resolve_export_format(requested: Optional[str], destination: Path) -> str:
    if requested:
        return requested
    fmt = _SUFFIX_FORMATS.get(destination.suffix.lower())
    if fmt is None:
        raise CliError(
            f"Cannot infer export format from '{destination.name}'; "
            f"use --format ({', '.join(EXPORT_FORMATS)}).",
            category="usage",
            context={"destination": str(destination)},
        )
    return fmt


def _handle_convert(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    source = Path(namespace.capture)
    destination = Path(namespace.output)
    fmt = _resolve_export_format(namespace.format, destination)
    stride = namespace.stride if namespace.stride is not None else default_stride(config)
    try:
        width = resolve_stride(stride)
    except ValueError as exc:
        raise CliError(str(exc), category="usage", context={"stride": stride}) from exc

    array = decode_array(read_payload(source), width)
    written = persist_array(array, destination, fmt)
    logger.info(
        "Capture converted.",
        extra={
            "event": "cli.convert",
            "source": str(source),
            "destination": str(destination),
            "format": fmt,
            "stride": width,
            "records": written,
        },
    )
    return f"Wrote {written} datagrams to {destination}"


__all__ = [
    "SPEED_UNITS",
    "default_stride",
    "default_units",
    "format_summary",
]
