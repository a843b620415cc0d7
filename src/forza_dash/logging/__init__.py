"""Logging utilities for forza_dash."""

from forza_dash.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
