"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ICECAVE_* variables from the host out of every test."""
    for variable in (
        "ICECAVE_DIRECTORY",
        "ICECAVE_NAME",
        "ICECAVE_MEMORY_ONLY",
        "ICECAVE_DUMP_INTERVAL",
    ):
        monkeypatch.delenv(variable, raising=False)
