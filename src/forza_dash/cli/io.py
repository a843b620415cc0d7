"""Input/output and configuration helpers for the forza_dash CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from forza_dash.cli.errors import CliError
from forza_dash.configuration import load_project_config, resolve_pyproject_path
from forza_dash.ingestion.dash import DashDatagram
from forza_dash.io import array_to_frame, write_run

CONFIG_ENV_VAR = "FORZA_DASH_CONFIG"

EXPORT_FORMATS = ("jsonl", "csv", "parquet")

_PARQUET_DEPENDENCY_MESSAGE = (
    "Writing Parquet requires a pandas-compatible engine "
    "(install 'pyarrow' or 'fastparquet')."
)


def _normalise_cli_config(payload: Mapping[str, Any], source: Path) -> dict[str, Any]:
    data = {str(key): value for key, value in payload.items()}
    data["_config_path"] = str(source.expanduser().resolve())
    return data


def _iter_unique_paths(candidates: List[Path]) -> List[Path]:
    seen: Dict[Path, None] = {}
    ordered: List[Path] = []
    for candidate in candidates:
        resolved = candidate.expanduser().resolve(strict=False)
        if resolved in seen:
            continue
        seen[resolved] = None
        ordered.append(resolved)
    return ordered


def load_cli_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load CLI defaults from ``pyproject.toml`` files.

    ``path`` wins over the ``FORZA_DASH_CONFIG`` environment variable, which
    wins over the ``pyproject.toml`` of the current directory.
    """

    env_config = os.environ.get(CONFIG_ENV_VAR)
    bases: List[Path] = []
    if path is not None:
        bases.append(path)
    if env_config:
        bases.append(Path(env_config))
    bases.append(Path.cwd())

    candidates = [
        resolved
        for resolved in (resolve_pyproject_path(base) for base in bases)
        if resolved is not None
    ]
    for candidate in _iter_unique_paths(candidates):
        loaded = load_project_config(candidate)
        if not loaded:
            continue
        payload, resolved_candidate = loaded
        return _normalise_cli_config(payload, resolved_candidate)

    return {"_config_path": None}


def read_payload(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise CliError(
            f"Packet file {path} does not exist.",
            category="not_found",
            context={"path": str(path)},
        ) from exc
    except OSError as exc:
        raise CliError(
            f"Unable to read {path}: {exc}",
            category="io",
            context={"path": str(path)},
        ) from exc


def persist_array(array: np.ndarray, destination: Path, fmt: str) -> int:
    """Write a decoded capture to ``destination`` and return the row count."""

    destination.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "jsonl":
        compress = destination.suffix in {".gz", ".gzip"}
        datagrams: Sequence[DashDatagram] = [DashDatagram.from_record(row) for row in array]
        return write_run(datagrams, destination, compress=compress)

    frame = array_to_frame(array)
    if fmt == "csv":
        frame.to_csv(destination, index=False)
        return len(frame)

    if fmt == "parquet":
        try:
            frame.to_parquet(destination, index=False)
        except ImportError as exc:
            raise CliError(
                _PARQUET_DEPENDENCY_MESSAGE,
                category="usage",
                context={"format": fmt, "destination": str(destination)},
            ) from exc
        return len(frame)

    raise CliError(
        f"Unsupported format '{fmt}'.",
        category="usage",
        context={"format": fmt, "destination": str(destination)},
    )


__all__ = [
    "CONFIG_ENV_VAR",
    "EXPORT_FORMATS",
    "load_cli_config",
    "persist_array",
    "read_payload",
]
