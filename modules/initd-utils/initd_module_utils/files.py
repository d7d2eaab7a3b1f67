"""Directory-level file helpers: counting and extension renaming.

Both operate on the direct children of a directory (default: the current
working directory) and match names case-insensitively.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

RENAME_USAGE = """\
Usage:
  rename_ext('FROM_EXT', 'TO_EXT')
  rename_ext('FROM_EXT', 'TO_EXT', directory='/path/to/dir')

Examples:
  Rename all '*.jpeg' files in the working directory to '*.jpg':
    rename_ext('jpeg', 'jpg')
  Rename all '*.md' files in a different directory to '*.mdx':
    rename_ext('md', 'mdx', directory='/path/to/dir')"""


def matching_files(directory: Path, pattern: str) -> list[Path]:
    pattern = pattern.lower()
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and not p.is_symlink() and fnmatch.fnmatchcase(p.name.lower(), pattern)
    )


def count_files(pattern: str, directory: str | os.PathLike[str] | None = None) -> int:
    """Number of regular files in directory whose name matches pattern."""
    base = Path(directory) if directory is not None else Path.cwd()
    try:
        return len(matching_files(base, pattern))
    except OSError:
        return 0


def rename_ext(
    from_ext: str, to_ext: str, directory: str | os.PathLike[str] | None = None
) -> list[Path]:
    """Rename every ``*.<from_ext>`` file in directory to ``*.<to_ext>``.

    Returns the new paths in sorted order of the originals.
    """
    from_ext = from_ext.lstrip(".")
    to_ext = to_ext.lstrip(".")
    if not from_ext or not to_ext:
        raise ValueError(f"[ ERROR ]: Wrong number of args.\n\n{RENAME_USAGE}")
    base = Path(directory) if directory is not None else Path.cwd()
    suffix_len = len(from_ext) + 1
    renamed: list[Path] = []
    for path in matching_files(base, f"*.{from_ext}"):
        target = path.with_name(f"{path.name[:-suffix_len]}.{to_ext}")
        path.rename(target)
        logger.debug("rename_ext: %s -> %s", path.name, target.name)
        renamed.append(target)
    return renamed
