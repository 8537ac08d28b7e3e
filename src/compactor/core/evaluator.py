"""Folder evaluation: walk, measure, classify and sort."""

from __future__ import annotations

import logging
import stat as statmod
from enum import Enum
from pathlib import Path

from compactor.core.physical import Inspector, physical_size
from compactor.core.walker import Walker, WalkError, walk
from compactor.models.file_record import FileRecord
from compactor.models.folder_report import FolderReport

log = logging.getLogger(__name__)

COMPRESSIBLE_MIN_SIZE = 4096

# Formats that are already compressed or do not compress well.
SKIP_EXTENSIONS: frozenset[str] = frozenset({
    "7z", "aac", "avi", "bik", "bmp", "br", "bz2", "cab", "dl_", "docx", "flac", "flv",
    "gif", "gz", "jpeg", "jpg", "lz4", "lzma", "lzx", "m2v", "m4v", "mkv", "mp3", "mp4",
    "mpg", "ogg", "onepkg", "png", "pptx", "rar", "vob", "vssx", "vstx", "wma", "wmf",
    "wmv", "xap", "xlsx", "xz", "zip", "zst", "zstd",
})


class Bucket(str, Enum):
    COMPRESSED = "compressed"
    COMPRESSIBLE = "compressible"
    SKIPPED = "skipped"


def has_skipped_extension(path: Path) -> bool:
    """Whether the file extension (case-insensitive) is in SKIP_EXTENSIONS."""
    return path.suffix[1:].lower() in SKIP_EXTENSIONS


def classify(path: Path, logical_size: int, physical_size: int) -> Bucket:
    """Pick the bucket for one file. First matching rule wins."""
    if physical_size < logical_size:
        return Bucket.COMPRESSED
    if logical_size > COMPRESSIBLE_MIN_SIZE and not has_skipped_extension(path):
        return Bucket.COMPRESSIBLE
    return Bucket.SKIPPED


def evaluate(
    root: Path | str,
    *,
    walker: Walker = walk,
    inspector: Inspector = physical_size,
) -> FolderReport:
    """Evaluate every regular file under ``root``.

    Ignore files and hidden entries are not honoured: everything on disk
    is visited. Entries that cannot be walked, stat'ed or measured are
    logged and left out of both the buckets and the totals. A missing or
    unreadable root gives an empty report.

    Args:
        root: Directory to scan.
        walker: Directory walker, see ``compactor.core.walker.walk``.
        inspector: Physical size lookup, see ``compactor.core.physical``.

    Returns:
        The completed, immutable report.
    """
    root = Path(root)
    log.info("Evaluating %s", root)

    logical_total = 0
    physical_total = 0
    buckets: dict[Bucket, list[FileRecord]] = {bucket: [] for bucket in Bucket}

    for item in walker(root, standard_filters=False):
        if isinstance(item, WalkError):
            log.warning("Cannot read %s: %s", item.path, item.error)
            continue

        try:
            st = item.metadata()
        except OSError as e:
            log.warning("Cannot stat %s: %s", item.path, e)
            continue

        if not statmod.S_ISREG(st.st_mode):
            log.debug("Not a regular file: %s", item.path)
            continue

        try:
            physical = inspector(item.path)
        except OSError as e:
            log.warning("Cannot get physical size of %s: %s", item.path, e)
            continue

        logical = st.st_size
        logical_total += logical
        physical_total += physical

        record = FileRecord(
            path=_relative_to(item.path, root),
            logical_size=logical,
            physical_size=physical,
        )
        buckets[classify(item.path, logical, physical)].append(record)

    # Stable: equal ratios keep visitation order. Empty files never get here.
    compressed = sorted(buckets[Bucket.COMPRESSED], key=lambda r: r.ratio)

    report = FolderReport(
        path=root,
        logical_size=logical_total,
        physical_size=physical_total,
        compressible=tuple(buckets[Bucket.COMPRESSIBLE]),
        compressed=tuple(compressed),
        skipped=tuple(buckets[Bucket.SKIPPED]),
    )
    log.info(
        "Evaluated %d files in %s (%d compressible, %d compressed, %d skipped)",
        report.file_count, root,
        len(report.compressible), len(report.compressed), len(report.skipped),
    )
    return report


def _relative_to(path: Path, root: Path) -> Path:
    """Path of ``path`` below ``root``; ``path`` itself if it is not below it.

    A file given as the root is its own only entry and comes back as
    ``Path(".")``, never as an empty path.
    """
    try:
        return path.relative_to(root)
    except ValueError:
        return path
