"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ENV_SUFFIXES = (
    "OUTPUT_TABLE",
    "CLUSTER_ADDRESS",
    "CLUSTER_PORT",
    "WRITE_BUFFER_SIZE",
    "TABLE_PREFIX",
)


def pytest_sessionstart() -> None:
    """Put src and the repository root on sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _isolate_job_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host TABLESINK_* variables out of job config under test."""
    for suffix in _ENV_SUFFIXES:
        monkeypatch.delenv(f"TABLESINK_{suffix}", raising=False)
