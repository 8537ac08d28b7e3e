"""Physical (allocated) file size lookup."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

Inspector = Callable[[Path], int]

_INVALID_FILE_SIZE = 0xFFFFFFFF


def physical_size(path: Path | str) -> int:
    """Return the number of bytes ``path`` actually occupies on storage.

    Accounts for transparent compression and sparse regions. Raises
    ``OSError`` when the file cannot be inspected.
    """
    if sys.platform == "win32":
        return _compressed_file_size(os.fspath(path))

    st = os.stat(path)
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    # st_blocks is always in 512-byte units, whatever the filesystem block size
    return blocks * 512


def _compressed_file_size(path: str) -> int:
    import ctypes
    from ctypes import wintypes

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    get_size = kernel32.GetCompressedFileSizeW
    get_size.argtypes = (wintypes.LPCWSTR, ctypes.POINTER(wintypes.DWORD))
    get_size.restype = wintypes.DWORD

    high = wintypes.DWORD(0)
    ctypes.set_last_error(0)
    low = get_size(path, ctypes.byref(high))
    if low == _INVALID_FILE_SIZE:
        err = ctypes.get_last_error()
        if err:
            raise ctypes.WinError(err)
    return (high.value << 32) | low
