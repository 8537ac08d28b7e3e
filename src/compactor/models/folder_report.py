"""Folder report dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from compactor.models.file_record import FileRecord


@dataclass(frozen=True, slots=True)
class FolderReport:
    """Result of evaluating a directory tree.

    Every regular file visited lands in exactly one of the three buckets.
    ``compressed`` is ordered by compression ratio, best first; the other
    buckets keep visitation order.
    """

    path: Path
    logical_size: int = 0
    physical_size: int = 0
    compressible: tuple[FileRecord, ...] = field(default_factory=tuple)
    compressed: tuple[FileRecord, ...] = field(default_factory=tuple)
    skipped: tuple[FileRecord, ...] = field(default_factory=tuple)

    @property
    def file_count(self) -> int:
        return len(self.compressible) + len(self.compressed) + len(self.skipped)

    @property
    def saved_bytes(self) -> int:
        """Bytes saved on disk overall. Negative when block slack outweighs savings."""
        return self.logical_size - self.physical_size

    @property
    def compressible_bytes(self) -> int:
        return sum(r.logical_size for r in self.compressible)
