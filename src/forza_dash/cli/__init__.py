"""Command line utilities for forza_dash."""

from forza_dash.cli.app import main, run_cli

__all__ = ["main", "run_cli"]
