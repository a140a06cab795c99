"""Glob expansion against the working directory."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

from coderlm.errors import WorkingDirectoryError

logger = logging.getLogger(__name__)

SKIP_DIRS: set[str] = {".git", ".hg", ".svn"}


def _walk(root: Path, max_depth: int) -> list[str]:
    """Return relative POSIX paths of files at most ``max_depth`` levels deep."""
    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        depth = 0 if rel_dir == "." else rel_dir.count("/") + 1

        # Prune in-place so os.walk stops descending past max_depth
        if depth + 1 >= max_depth:
            dirnames[:] = []
        else:
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)

        for fname in filenames:
            found.append(fname if rel_dir == "." else f"{rel_dir}/{fname}")
    return found


def _matches(rel_path: str, pattern: str) -> bool:
    if "/" in pattern:
        return fnmatch.fnmatchcase(rel_path, pattern)
    return fnmatch.fnmatchcase(rel_path.rsplit("/", 1)[-1], pattern)


def list_files(
    patterns: list[str] | tuple[str, ...],
    max_depth: int,
    root: str | Path | None = None,
) -> list[str]:
    """Expand glob patterns into a sorted, deduplicated list of relative paths.

    Patterns without a slash match file basenames (like ``find -name``);
    patterns with a slash match the path relative to ``root``. A pattern that
    matches nothing is reported as a warning, never as an error.
    """
    if not patterns:
        return []

    try:
        base = Path(root) if root is not None else Path.cwd()
        with os.scandir(base):
            pass
    except OSError as e:
        raise WorkingDirectoryError(f"cannot read working directory: {e}") from e

    candidates = _walk(base, max_depth)
    matched: set[str] = set()
    for pattern in patterns:
        normalized = pattern[2:] if pattern.startswith("./") else pattern
        hits = [p for p in candidates if _matches(p, normalized)]
        if not hits:
            logger.warning("no files matched: %s", pattern)
        matched.update(hits)

    files = sorted(matched)
    logger.debug("Matched %d file(s) for %s", len(files), list(patterns))
    return files
