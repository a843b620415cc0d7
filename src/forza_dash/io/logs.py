"""Persistence helpers for decoded dash runs."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any, Iterable, Iterator

from ..ingestion.dash import DashDatagram

__all__ = ["iter_run", "write_run"]


def write_run(
    datagrams: Iterable[DashDatagram],
    path: str | Path,
    *,
    compress: bool = True,
) -> int:
    """Persist ``datagrams`` to ``path`` using a newline-delimited JSON format.

    Parameters
    ----------
    datagrams:
        Decoded :class:`~forza_dash.ingestion.dash.DashDatagram` objects to serialise.
    path:
        Destination file.  Parent directories are created automatically.
    compress:
        When ``True`` the payload is compressed using gzip.  ``iter_run`` is able
        to transparently read both compressed and uncompressed payloads.

    Returns the number of datagrams written.
    """

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    opener = gzip.open if compress else open

    written = 0
    with opener(destination, "wt", encoding="utf8") as handle:
        for datagram in datagrams:
            json.dump(datagram.to_dict(), handle, sort_keys=True)
            handle.write("\n")
            written += 1
    return written


def iter_run(path: str | Path) -> Iterator[DashDatagram]:
    """Yield datagrams previously persisted with :func:`write_run`."""

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Dash run {source} does not exist")

    try:
        with gzip.open(source, "rt", encoding="utf8") as handle:
            yield from _iter_datagrams(handle)
        return
    except gzip.BadGzipFile:
        pass

    with source.open("r", encoding="utf8") as handle:
        yield from _iter_datagrams(handle)


def _iter_datagrams(handle: Iterable[str]) -> Iterator[DashDatagram]:
    for line in handle:
        if not line.strip():
            continue
        payload: dict[str, Any] = json.loads(line)
        yield DashDatagram.from_dict(payload)
