"""Read-only scan for candidate configuration and module files."""

from __future__ import annotations

import fnmatch
import logging
import os
import stat
from pathlib import Path

from .models import DiscoveredFileSet

logger = logging.getLogger(__name__)


def _is_regular_file(path: str) -> bool:
    """Regular file, not following symlinks (find -type f)."""
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


def discover(
    base_dir: str | os.PathLike[str],
    max_depth: int,
    min_depth: int = 1,
    name_pattern: str = "*",
    exclude_path_pattern: str | None = None,
) -> DiscoveredFileSet:
    """Find regular files under base_dir matching name_pattern.

    Depth is counted like find(1): direct children of base_dir are depth 1.
    exclude_path_pattern is matched against ``./<path relative to base_dir>``,
    so directories above base_dir never cause an exclusion. Results are
    sorted ascending by path. A missing or unreadable base_dir gives an
    empty set instead of an error.
    """
    base = Path(base_dir)
    if not base.is_dir():
        logger.debug("discover: %s is not a directory", base)
        return DiscoveredFileSet(base_dir=base)

    found: list[str] = []

    def _on_error(exc: OSError) -> None:
        logger.debug("discover: skipping %s: %s", exc.filename, exc)

    for root, dirs, files in os.walk(base, onerror=_on_error):
        rel_root = os.path.relpath(root, base)
        depth = 0 if rel_root == os.curdir else rel_root.count(os.sep) + 1
        # Entries of this directory sit at depth + 1.
        if depth + 1 >= max_depth:
            dirs[:] = []
        if depth + 1 < min_depth or depth + 1 > max_depth:
            continue
        for name in files:
            if not fnmatch.fnmatchcase(name, name_pattern):
                continue
            full = os.path.join(root, name)
            if exclude_path_pattern:
                rel = os.path.join(os.curdir, os.path.relpath(full, base))
                if fnmatch.fnmatchcase(rel, exclude_path_pattern):
                    continue
            if _is_regular_file(full):
                found.append(full)

    found.sort()
    logger.debug(
        "discover: %d match(es) for %r under %s", len(found), name_pattern, base
    )
    return DiscoveredFileSet(base_dir=base, files=tuple(Path(f) for f in found))
