"""Per-file size record."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Single regular file seen during a scan.

    ``path`` is relative to the scan root. ``physical_size`` is what the
    file actually occupies on disk and can be smaller than
    ``logical_size`` (transparent compression, sparse regions) or larger
    (block rounding).
    """

    path: Path
    logical_size: int
    physical_size: int

    @property
    def ratio(self) -> float:
        """Physical over logical size; lower means more space saved."""
        return self.physical_size / self.logical_size
