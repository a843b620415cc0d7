"""Utilities for retrieving and validating the package version."""

from __future__ import annotations

import os
import re
from importlib import metadata
from pathlib import Path

from packaging.version import InvalidVersion, Version

_DISTRIBUTION_NAME = "forza-dash"
_OVERRIDE_ENV_VAR = "PYTHON_SEMANTIC_RELEASE_VERSION"


def _version_from_sources() -> str:
    """Return the version parsed from the repository ``CHANGELOG.md``.

    This is a fallback mechanism for development environments where the
    distribution metadata has not been generated yet.
    """

    resolved = Path(__file__).resolve()
    candidates = [parent / "CHANGELOG.md" for parent in resolved.parents[1:3]]

    for changelog in candidates:
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = re.match(r"^## v(?P<version>\d+\.\d+\.\d+)\b", line)
            if match:
                return match.group("version")

    raise RuntimeError(
        "Unable to determine the 'forza_dash' version from package metadata or "
        "repository sources."
    )


def _load_version() -> str:
    """Return the validated package version.

    ``PYTHON_SEMANTIC_RELEASE_VERSION`` takes precedence over the installed
    metadata.  The version must follow the ``MAJOR.MINOR.PATCH`` scheme.
    """

    raw_version = os.environ.get(_OVERRIDE_ENV_VAR)
    if not raw_version:
        try:
            raw_version = metadata.version(_DISTRIBUTION_NAME)
        except metadata.PackageNotFoundError:
            raw_version = _version_from_sources()

    try:
        parsed = Version(raw_version)
    except InvalidVersion as exc:
        raise RuntimeError(
            "Invalid version string for 'forza_dash': "
            f"{raw_version!r}. Expected a semantic version."
        ) from exc

    if len(parsed.release) != 3:
        raise RuntimeError(
            "The 'forza_dash' version must follow the MAJOR.MINOR.PATCH format. "
            f"Found: {raw_version!r}."
        )

    return raw_version


__version__ = _load_version()

__all__ = ["__version__"]
