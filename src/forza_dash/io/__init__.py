"""Persistence and tabular export helpers."""

from .frames import array_to_frame, datagrams_to_frame
from .logs import iter_run, write_run

__all__ = ["array_to_frame", "datagrams_to_frame", "iter_run", "write_run"]
