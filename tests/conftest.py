from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent
from typing import Iterator

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
for _path in (SRC_ROOT, ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture(autouse=True)
def _reset_forza_dash_logging() -> Iterator[None]:
    """Drop handlers installed by ``setup_logging`` so streams do not leak between tests."""

    logger = logging.getLogger("forza_dash")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORZA_DASH_CONFIG", raising=False)


@pytest.fixture
def dash_values() -> dict[str, int | float]:
    from tests.helpers import build_dash_values

    return build_dash_values()


@pytest.fixture
def dash_payload(dash_values: dict[str, int | float]) -> bytes:
    from tests.helpers import pack_dash_payload

    return pack_dash_payload(dash_values)
