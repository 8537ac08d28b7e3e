"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


class FakeInspector:
    """Physical size lookup keyed by file name; defaults to the logical size."""

    def __init__(self, sizes: dict[str, int] | None = None, fail: set[str] | None = None):
        self.sizes = sizes or {}
        self.fail = fail or set()
        self.calls: list[Path] = []

    def __call__(self, path: Path) -> int:
        self.calls.append(path)
        if path.name in self.fail:
            raise PermissionError(13, "Permission denied", str(path))
        if path.name in self.sizes:
            return self.sizes[path.name]
        return path.stat().st_size


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp directory."""
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "compactor" / "settings.json"


@pytest.fixture
def tree(tmp_path):
    """Empty scan root."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def make_file():
    """Create a file of ``size`` bytes below a root, creating parents."""

    def _make(root: Path, relative: str, size: int) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        return path

    return _make


@pytest.fixture
def inspector():
    """Factory for FakeInspector instances."""
    return FakeInspector
