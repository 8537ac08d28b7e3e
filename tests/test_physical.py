"""Tests for physical size lookup."""

from __future__ import annotations

import os
import sys
from types import SimpleNamespace

import pytest

from compactor.core import physical
from compactor.core.physical import physical_size

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="st_blocks is POSIX only")


@posix_only
class TestPhysicalSize:
    def test_uses_allocated_blocks(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            physical.os, "stat",
            lambda path: SimpleNamespace(st_size=10_000, st_blocks=4),
        )
        assert physical_size(tmp_path / "any") == 4 * 512

    def test_falls_back_to_size_without_blocks(self, monkeypatch, tmp_path):
        monkeypatch.setattr(physical.os, "stat", lambda path: SimpleNamespace(st_size=777))
        assert physical_size(tmp_path / "any") == 777

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            physical_size(tmp_path / "missing")

    def test_real_file(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(os.urandom(20_000))
        assert physical_size(path) == os.stat(path).st_blocks * 512

    def test_accepts_str(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"abc")
        assert physical_size(str(path)) == physical_size(path)


@pytest.mark.skipif(sys.platform != "win32", reason="GetCompressedFileSizeW is Windows only")
class TestCompressedFileSize:
    def test_stale_last_error_is_ignored(self, tmp_path):
        import ctypes

        path = tmp_path / "data.bin"
        path.write_bytes(b"abc" * 1000)
        ctypes.set_last_error(5)
        assert physical_size(path) >= 0

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            physical_size(tmp_path / "missing")
