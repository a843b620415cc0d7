"""Tabular views of decoded datagrams built on :mod:`pandas`."""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from ..ingestion.dash import FIELD_NAMES, KMH_PER_MPS, MPH_PER_MPS, DashDatagram

__all__ = ["array_to_frame", "datagrams_to_frame"]


def _with_speed_columns(frame: pd.DataFrame) -> pd.DataFrame:
    speed = frame["speed"].astype("float64")
    frame["speed_kmh"] = speed * KMH_PER_MPS
    frame["speed_mph"] = speed * MPH_PER_MPS
    return frame


def datagrams_to_frame(datagrams: Iterable[DashDatagram]) -> pd.DataFrame:
    """Return one row per datagram with columns in wire order."""

    rows = [datagram.to_dict() for datagram in datagrams]
    frame = pd.DataFrame.from_records(rows, columns=list(FIELD_NAMES))
    return _with_speed_columns(frame)


def array_to_frame(array: np.ndarray) -> pd.DataFrame:
    """Return a frame for a structured array produced by ``decode_array``."""

    available = set(array.dtype.names or ())
    missing = [name for name in FIELD_NAMES if name not in available]
    if missing:
        raise ValueError(f"Structured array is missing dash fields: {missing}")
    frame = pd.DataFrame({name: array[name] for name in FIELD_NAMES})
    return _with_speed_columns(frame)
