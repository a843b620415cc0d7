"""Tests for the package version metadata."""

import importlib

import pytest
from packaging.version import Version

import forza_dash
from forza_dash import _version as version_module


def test_version_is_semver_patch():
    version = Version(forza_dash.__version__)

    assert len(version.release) == 3, (
        "forza_dash.__version__ must contain exactly three release components"
    )


def test_version_override_from_semantic_release(monkeypatch):
    monkeypatch.setenv("PYTHON_SEMANTIC_RELEASE_VERSION", "9.8.7")
    importlib.reload(version_module)
    reloaded = importlib.reload(forza_dash)

    assert reloaded.__version__ == "9.8.7"

    monkeypatch.setenv("PYTHON_SEMANTIC_RELEASE_VERSION", "invalid-version")
    with pytest.raises(RuntimeError):
        importlib.reload(version_module)

    monkeypatch.delenv("PYTHON_SEMANTIC_RELEASE_VERSION", raising=False)
    importlib.reload(version_module)
    importlib.reload(forza_dash)
