"""Shared fixtures for output file map tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def worker_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temp directory, chdir into it and clear incremental env settings."""
    monkeypatch.chdir(tmp_path)
    for key in ("SWIFT_INCREMENTAL_ROOT", "SWIFT_INCREMENTAL_KINDS", "SWIFT_INCREMENTAL_STRATEGY"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


@pytest.fixture()
def storage_root(worker_tmp: Path) -> Path:
    """An incremental storage area, created the way the build rules would."""
    root = worker_tmp / "incremental"
    root.mkdir()
    return root


def write_map(path: Path, document: Any) -> Path:
    """Write an output file map document as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path
