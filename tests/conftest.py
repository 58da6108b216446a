"""Shared pytest fixtures and configuration for the pkgrun test suite.

Guidelines
----------
* Manifest trees are built under ``tmp_path`` — never the real cwd.
* Process spawning is mocked at the infra boundary unless a test is
  explicitly marked POSIX-only.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

WriteManifest = Callable[..., Path]


@pytest.fixture()
def write_manifest(tmp_path: Path) -> WriteManifest:
    """Return a helper that writes ``<tmp_path>/<relative>/package.json``."""

    def _write(relative: str = ".", data: Any = None, *, name: str = "package.json") -> Path:
        directory = tmp_path / relative
        directory.mkdir(parents=True, exist_ok=True)
        manifest = directory / name
        payload = data if isinstance(data, str) else json.dumps(data or {})
        manifest.write_text(payload, encoding="utf-8")
        return manifest

    return _write


@pytest.fixture(autouse=True)
def _clean_pkgrun_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``PKGRUN_*`` settings from the developer's shell out of tests."""
    for var in ("PKGRUN_MANIFEST", "PKGRUN_BIN_DIR", "PKGRUN_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
