"""Lazy, deterministic directory tree walker."""

from __future__ import annotations

import fnmatch
import logging
import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

log = logging.getLogger(__name__)

IGNORE_FILES = (".gitignore", ".ignore")


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """A filesystem entry reached by the walk."""

    path: Path
    depth: int
    follow_symlinks: bool = False

    def metadata(self) -> os.stat_result:
        """Stat the entry. Symlinks are not followed except for the root."""
        return os.stat(self.path, follow_symlinks=self.follow_symlinks)


@dataclass(frozen=True, slots=True)
class WalkError:
    """A step of the walk that failed. Yielded, never raised."""

    path: Path
    error: OSError


WalkItem = WalkEntry | WalkError
Walker = Callable[..., Iterator[WalkItem]]


@dataclass(frozen=True, slots=True)
class _IgnorePattern:
    glob: str
    dir_only: bool

    def matches(self, name: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        return fnmatch.fnmatchcase(name, self.glob)


def walk(root: Path | str, *, standard_filters: bool = True) -> Iterator[WalkItem]:
    """Walk ``root`` and yield every entry below it, root first.

    Children of each directory are yielded sorted by name before any of
    them is descended into, so the order is stable for an unchanged tree.
    Symlinks below the root are reported but never followed.

    Args:
        root: Directory (or single file) to walk.
        standard_filters: Skip hidden entries and entries matched by
            ``.gitignore``/``.ignore`` files. Pass False to visit everything.
    """
    root = Path(root)
    try:
        root_st = os.stat(root)
    except OSError as e:
        yield WalkError(root, e)
        return

    yield WalkEntry(root, 0, follow_symlinks=True)
    if not statmod.S_ISDIR(root_st.st_mode):
        return

    stack: list[tuple[Path, int, list[_IgnorePattern]]] = [(root, 1, [])]
    while stack:
        current, depth, inherited = stack.pop()
        try:
            with os.scandir(current) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            yield WalkError(current, e)
            continue

        patterns = inherited
        if standard_filters:
            patterns = inherited + _read_ignore_patterns(current)

        subdirs: list[Path] = []
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError as e:
                yield WalkError(Path(child.path), e)
                continue

            if standard_filters and _is_filtered(child.name, is_dir, patterns):
                log.debug("Filtered out: %s", child.path)
                continue

            yield WalkEntry(Path(child.path), depth)
            if is_dir:
                subdirs.append(Path(child.path))

        for subdir in reversed(subdirs):
            stack.append((subdir, depth + 1, patterns))


def _is_filtered(name: str, is_dir: bool, patterns: list[_IgnorePattern]) -> bool:
    if name.startswith("."):
        return True
    return any(p.matches(name, is_dir) for p in patterns)


def _read_ignore_patterns(directory: Path) -> list[_IgnorePattern]:
    """Collect basename globs from the ignore files of ``directory``.

    Negations are not supported and are dropped.
    """
    patterns: list[_IgnorePattern] = []
    for filename in IGNORE_FILES:
        ignore_file = directory / filename
        try:
            text = ignore_file.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            continue
        except OSError as e:
            log.debug("Cannot read %s: %s", ignore_file, e)
            continue

        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith(("#", "!")):
                continue
            dir_only = line.endswith("/")
            glob = line.strip("/").rsplit("/", 1)[-1]
            if glob:
                patterns.append(_IgnorePattern(glob, dir_only))
    return patterns
